import uuid
from logging import Logger
from typing import List

from ..datastore.base import BaseQuestionSetRepository
from ..entities import QuestionSet


class QuestionSetService:
    """Service layer for question sets."""
    def __init__(self, question_set_repository: BaseQuestionSetRepository, logger: Logger):
        self.question_set_repository = question_set_repository
        self.logger = logger

    def get_question_set(self, question_set_id: str) -> QuestionSet:
        self.logger.debug(f"[get_question_set] Retrieving question set {question_set_id} . . .")
        try:
            return self.question_set_repository.get_question_set(question_set_id)
        except Exception:
            self.logger.error(f"[get_question_set] Failed to retrieve question set {question_set_id}")
            raise

    def get_question_set_by_tech_name(self, technology_name: str) -> QuestionSet:
        """Return one question set for the technology; which one is unspecified when several match."""
        self.logger.debug(f"[get_question_set_by_tech_name] Retrieving question set for {technology_name} . . .")
        try:
            return self.question_set_repository.get_question_set_by_tech_name(technology_name)
        except Exception:
            self.logger.error(f"[get_question_set_by_tech_name] Failed to retrieve question set for {technology_name}")
            raise

    def get_all_question_sets(self, page: int, page_size: int) -> List[QuestionSet]:
        self.logger.debug("[get_all_question_sets] Retrieving all question sets . . .")
        try:
            return self.question_set_repository.get_all_question_sets(page, page_size)
        except Exception:
            self.logger.error("[get_all_question_sets] Failed to retrieve all question sets")
            raise

    def post_question_set(self, question_set: QuestionSet) -> QuestionSet:
        self.logger.debug("[post_question_set] Posting question set . . .")
        question_set = question_set.model_copy(update={"id": str(uuid.uuid4())})
        try:
            return self.question_set_repository.create_question_set(question_set)
        except Exception:
            self.logger.error("[post_question_set] Failed to post question set")
            raise

    def update_question_set(self, question_set: QuestionSet) -> QuestionSet:
        self.logger.debug(f"[update_question_set] Updating question set {question_set.id} . . .")
        try:
            return self.question_set_repository.update_question_set(question_set)
        except Exception:
            self.logger.error(f"[update_question_set] Failed to update question set {question_set.id}")
            raise

    def delete_question_set(self, question_set_id: str) -> None:
        self.logger.debug(f"[delete_question_set] Deleting question set {question_set_id} . . .")
        try:
            self.question_set_repository.delete_question_set(question_set_id)
        except Exception:
            self.logger.error(f"[delete_question_set] Failed to delete question set {question_set_id}")
            raise
