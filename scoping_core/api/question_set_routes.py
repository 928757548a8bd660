"""
Question set routes: /api/v1/question-sets

`GET /api/v1/question-sets?name=<technology>` returns a single question set instead of a page.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from .dependencies import Pagination, get_pagination, get_question_set_service, json_response
from ..entities import QuestionSet
from ..services import QuestionSetService

question_set_router = APIRouter(prefix="/api/v1/question-sets", tags=["Question Sets"])


@question_set_router.post("")
def post_question_set(question_set: QuestionSet, service: QuestionSetService = Depends(get_question_set_service)):
    return json_response(service.post_question_set(question_set))


@question_set_router.get("")
def get_all_question_sets(
    name: Optional[str] = Query(default=None),
    pagination: Pagination = Depends(get_pagination),
    service: QuestionSetService = Depends(get_question_set_service),
):
    if name:
        return json_response(service.get_question_set_by_tech_name(name))
    return json_response(service.get_all_question_sets(pagination.page, pagination.page_size))


@question_set_router.get("/{question_set_id}")
def get_question_set(question_set_id: str, service: QuestionSetService = Depends(get_question_set_service)):
    return json_response(service.get_question_set(question_set_id))


@question_set_router.put("/{question_set_id}")
def update_question_set(
    question_set_id: str,
    question_set: QuestionSet,
    service: QuestionSetService = Depends(get_question_set_service),
):
    question_set = question_set.model_copy(update={"id": question_set_id})
    return json_response(service.update_question_set(question_set))


@question_set_router.delete("/{question_set_id}")
def delete_question_set(question_set_id: str, service: QuestionSetService = Depends(get_question_set_service)):
    service.delete_question_set(question_set_id)
    return Response(status_code=200)
