"""
User routes: /api/v1/users
"""
from fastapi import APIRouter, Depends, Response

from .dependencies import Pagination, get_pagination, get_user_service, json_response
from ..entities import User
from ..services import UserService

user_router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@user_router.post("")
def post_user(user: User, service: UserService = Depends(get_user_service)):
    return json_response(service.create_user(user))


@user_router.get("")
def get_all_users(
    pagination: Pagination = Depends(get_pagination),
    service: UserService = Depends(get_user_service),
):
    return json_response(service.get_all_users(pagination.page, pagination.page_size))


@user_router.get("/{user_id}")
def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return json_response(service.get_user(user_id))


@user_router.put("/{user_id}")
def update_user(user_id: str, user: User, service: UserService = Depends(get_user_service)):
    user = user.model_copy(update={"id": user_id})
    return json_response(service.update_user(user))


@user_router.delete("/{user_id}")
def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    service.delete_user(user_id)
    return Response(status_code=200)
