import uuid
from logging import Logger
from typing import List

from ..datastore.base import BaseCourseOutlineRepository
from ..entities import CourseOutline


class CourseOutlineService:
    """Service layer for the course outline catalog."""
    def __init__(self, course_outline_repository: BaseCourseOutlineRepository, logger: Logger):
        self.course_outline_repository = course_outline_repository
        self.logger = logger

    def get_course_outline(self, outline_id: str) -> CourseOutline:
        self.logger.debug(f"[get_course_outline] Retrieving course outline {outline_id} . . .")
        try:
            return self.course_outline_repository.get_course_outline(outline_id)
        except Exception:
            self.logger.error(f"[get_course_outline] Failed to retrieve course outline {outline_id}")
            raise

    def get_course_outlines_by_filter(
            self, page: int, page_size: int, filter_name: str, filter_value: str
    ) -> List[CourseOutline]:
        self.logger.debug(f"[get_course_outlines_by_filter] Retrieving course outlines where {filter_name} == {filter_value} . . .")
        try:
            return self.course_outline_repository.get_course_outlines_by_filter(page, page_size, filter_name, filter_value)
        except Exception:
            self.logger.error("[get_course_outlines_by_filter] Failed to retrieve filtered course outlines")
            raise

    def get_all_course_outlines(self, page: int, page_size: int) -> List[CourseOutline]:
        self.logger.debug("[get_all_course_outlines] Retrieving all course outlines . . .")
        try:
            return self.course_outline_repository.get_all_course_outlines(page, page_size)
        except Exception:
            self.logger.error("[get_all_course_outlines] Failed to retrieve all course outlines")
            raise

    def post_course_outline(self, outline: CourseOutline) -> CourseOutline:
        self.logger.debug("[post_course_outline] Posting course outline . . .")
        outline = outline.model_copy(update={"id": str(uuid.uuid4())})
        try:
            return self.course_outline_repository.create_course_outline(outline)
        except Exception:
            self.logger.error("[post_course_outline] Failed to post course outline")
            raise

    def update_course_outline(self, outline: CourseOutline) -> CourseOutline:
        self.logger.debug(f"[update_course_outline] Updating course outline {outline.id} . . .")
        try:
            return self.course_outline_repository.update_course_outline(outline)
        except Exception:
            self.logger.error(f"[update_course_outline] Failed to update course outline {outline.id}")
            raise

    def delete_course_outline(self, outline_id: str) -> None:
        self.logger.debug(f"[delete_course_outline] Deleting course outline {outline_id} . . .")
        try:
            self.course_outline_repository.delete_course_outline(outline_id)
        except Exception:
            self.logger.error(f"[delete_course_outline] Failed to delete course outline {outline_id}")
            raise
