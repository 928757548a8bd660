from .base import (
    BaseUserRepository,
    BaseQuestionSetRepository,
    BaseCourseOutlineRepository,
    BaseMessageRepository,
    Datastore,
)
from .registry import get_datastore

__all__ = [
    "BaseUserRepository",
    "BaseQuestionSetRepository",
    "BaseCourseOutlineRepository",
    "BaseMessageRepository",
    "Datastore",
    "get_datastore",
]
