"""
Message routes: /api/v1/users/{user_id}/messages
"""
from typing import List

from fastapi import APIRouter, Depends, Response

from .dependencies import Pagination, get_pagination, get_message_service, json_response
from ..entities import Message
from ..services import MessageService

message_router = APIRouter(prefix="/api/v1/users/{user_id}/messages", tags=["Messages"])


@message_router.post("")
def post_message(user_id: str, message: Message, service: MessageService = Depends(get_message_service)):
    message = message.model_copy(update={"user_id": user_id})
    return json_response(service.post_message(message))


@message_router.post("/answers")
def post_answers(user_id: str, messages: List[Message], service: MessageService = Depends(get_message_service)):
    """
    Submit an answer batch. Responds with the pending placeholder message; the recommendation
    replaces its text once the completion worker has finished.
    """
    messages = [message.model_copy(update={"user_id": user_id}) for message in messages]
    return json_response(service.submit_answers(messages))


@message_router.get("")
def get_all_user_messages(
    user_id: str,
    pagination: Pagination = Depends(get_pagination),
    service: MessageService = Depends(get_message_service),
):
    return json_response(service.get_all_user_messages(user_id, pagination.page, pagination.page_size))


@message_router.get("/{message_id}")
def get_message(user_id: str, message_id: str, service: MessageService = Depends(get_message_service)):
    return json_response(service.get_message(message_id, user_id))


@message_router.put("/{message_id}")
def update_message(
    user_id: str,
    message_id: str,
    message: Message,
    service: MessageService = Depends(get_message_service),
):
    message = message.model_copy(update={"user_id": user_id, "id": message_id})
    return json_response(service.update_message(message))


@message_router.delete("/{message_id}")
def delete_message(user_id: str, message_id: str, service: MessageService = Depends(get_message_service)):
    service.delete_message(message_id, user_id)
    return Response(status_code=200)
