"""
Course outline routes: /api/v1/course-outlines (bearer-token protected)

`GET /api/v1/course-outlines?filterName=<field>&filterValue=<value>` returns the filtered page.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from .auth import verify_bearer_token
from .dependencies import Pagination, get_pagination, get_course_outline_service, json_response
from ..entities import CourseOutline
from ..services import CourseOutlineService

outline_router = APIRouter(
    prefix="/api/v1/course-outlines",
    tags=["Course Outlines"],
    dependencies=[Depends(verify_bearer_token)],
)


@outline_router.post("")
def post_course_outline(outline: CourseOutline, service: CourseOutlineService = Depends(get_course_outline_service)):
    return json_response(service.post_course_outline(outline))


@outline_router.get("")
def get_all_course_outlines(
    filter_name: Optional[str] = Query(default=None, alias="filterName"),
    filter_value: Optional[str] = Query(default=None, alias="filterValue"),
    pagination: Pagination = Depends(get_pagination),
    service: CourseOutlineService = Depends(get_course_outline_service),
):
    if filter_name and filter_value:
        outlines = service.get_course_outlines_by_filter(pagination.page, pagination.page_size, filter_name, filter_value)
    else:
        outlines = service.get_all_course_outlines(pagination.page, pagination.page_size)
    return json_response(outlines)


@outline_router.get("/{outline_id}")
def get_course_outline(outline_id: str, service: CourseOutlineService = Depends(get_course_outline_service)):
    return json_response(service.get_course_outline(outline_id))


@outline_router.put("/{outline_id}")
def update_course_outline(
    outline_id: str,
    outline: CourseOutline,
    service: CourseOutlineService = Depends(get_course_outline_service),
):
    outline = outline.model_copy(update={"id": outline_id})
    return json_response(service.update_course_outline(outline))


@outline_router.delete("/{outline_id}")
def delete_course_outline(outline_id: str, service: CourseOutlineService = Depends(get_course_outline_service)):
    service.delete_course_outline(outline_id)
    return Response(status_code=200)
