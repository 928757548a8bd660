"""
'services/user.py': UserService handles identifier generation and logging around the user repository.
"""
import uuid
from logging import Logger
from typing import List

from ..datastore.base import BaseUserRepository
from ..entities import User


class UserService:
    """Service layer for questionnaire users."""
    def __init__(self, user_repository: BaseUserRepository, logger: Logger):
        self.user_repository = user_repository
        self.logger = logger

    def get_user(self, user_id: str) -> User:
        self.logger.debug(f"[get_user] Retrieving user {user_id} . . .")
        try:
            return self.user_repository.get_user(user_id)
        except Exception:
            self.logger.error(f"[get_user] Failed to retrieve user {user_id}")
            raise

    def get_all_users(self, page: int, page_size: int) -> List[User]:
        self.logger.debug("[get_all_users] Retrieving all users . . .")
        try:
            return self.user_repository.get_all_users(page, page_size)
        except Exception:
            self.logger.error("[get_all_users] Failed to retrieve all users")
            raise

    def create_user(self, user: User) -> User:
        self.logger.debug("[create_user] Creating new user . . .")
        user = user.model_copy(update={"id": str(uuid.uuid4())})
        try:
            return self.user_repository.create_user(user)
        except Exception:
            self.logger.error("[create_user] Failed to create user")
            raise

    def update_user(self, user: User) -> User:
        self.logger.debug(f"[update_user] Updating user {user.id} . . .")
        try:
            return self.user_repository.update_user(user)
        except Exception:
            self.logger.error(f"[update_user] Failed to update user {user.id}")
            raise

    def delete_user(self, user_id: str) -> None:
        self.logger.debug(f"[delete_user] Deleting user {user_id} . . .")
        try:
            self.user_repository.delete_user(user_id)
        except Exception:
            self.logger.error(f"[delete_user] Failed to delete user {user_id}")
            raise
