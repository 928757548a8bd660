"""
'api/dependencies.py': Dependency providers handing services and pagination to the routes.
"""
from dataclasses import dataclass
from typing import Optional, Any

from fastapi import Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..services import UserService, QuestionSetService, CourseOutlineService, MessageService

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


@dataclass
class Pagination:
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE


def _parse_positive(raw: Optional[str], default: int) -> int:
    """Parse a query value; anything that is not an integer >= 1 falls back to `default`."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def get_pagination(
    page: Optional[str] = Query(default=None),
    page_size: Optional[str] = Query(default=None, alias="pageSize"),
) -> Pagination:
    return Pagination(
        page=_parse_positive(page, DEFAULT_PAGE),
        page_size=_parse_positive(page_size, DEFAULT_PAGE_SIZE),
    )


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_question_set_service(request: Request) -> QuestionSetService:
    return request.app.state.question_set_service


def get_course_outline_service(request: Request) -> CourseOutlineService:
    return request.app.state.course_outline_service


def get_message_service(request: Request) -> MessageService:
    return request.app.state.message_service


def to_content(payload: Any) -> Any:
    """Dump models for a JSON response, omitting absent fields."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    if isinstance(payload, list):
        return [to_content(item) for item in payload]
    return payload


def json_response(payload: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=to_content(payload), status_code=status_code)
