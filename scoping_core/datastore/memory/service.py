"""
'memory/service.py': In-memory datastore implementation.

Instead of using Firestore, these repositories keep documents in process-local dictionaries,
mirroring Firestore semantics (merge writes, ordered pagination, idempotent deletes).
Used by the test suite and for offline runs.
"""
import copy
import logging
import threading
from typing import Dict, Any, List, Optional, Type, TypeVar

import arrow
from pydantic import BaseModel
from werkzeug.exceptions import NotFound

from ..base import (
    BaseUserRepository,
    BaseQuestionSetRepository,
    BaseCourseOutlineRepository,
    BaseMessageRepository,
    Datastore,
    normalize_page,
)
from ..converters import (
    user_to_map,
    question_set_to_map,
    outline_to_map,
    message_to_map,
    document_to_model,
)
from ...entities import User, QuestionSet, CourseOutline, Message

ModelT = TypeVar("ModelT", bound=BaseModel)

NOT_FOUND_MESSAGE = "Document not found."


def _merge(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Merge nested maps field by field; any other value replaces the stored one."""
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
    return target


class InMemoryCollection:
    """A thread-safe keyed document collection."""

    def __init__(self):
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def set(self, document_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        with self._lock:
            if merge and document_id in self._documents:
                _merge(self._documents[document_id], data)
            else:
                self._documents[document_id] = copy.deepcopy(data)

    def get(self, document_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._documents.get(document_id)
            return copy.deepcopy(data) if data is not None else None

    def delete(self, document_id: str) -> None:
        with self._lock:
            self._documents.pop(document_id, None)

    def query(
            self,
            order_by: str,
            page: int,
            page_size: int,
            where: Optional[Dict[str, Any]] = None,
    ) -> List[tuple]:
        """Return (document_id, data) pairs ordered by `order_by`; documents lacking the field are skipped."""
        page, page_size = normalize_page(page, page_size)
        with self._lock:
            items = [
                (doc_id, copy.deepcopy(data))
                for doc_id, data in self._documents.items()
                if data.get(order_by) is not None
                and all(data.get(field) == value for field, value in (where or {}).items())
            ]
        items.sort(key=lambda item: item[1][order_by])
        offset = (page - 1) * page_size
        return items[offset:offset + page_size]

    def find(self, field: str, value: Any) -> List[tuple]:
        with self._lock:
            return [(doc_id, copy.deepcopy(data)) for doc_id, data in self._documents.items() if data.get(field) == value]


class InMemoryRepository:

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("scoping.datastore")

    def _fetch(self, operation: str, collection: InMemoryCollection, document_id: str, model: Type[ModelT]) -> ModelT:
        data = collection.get(document_id)
        if data is None:
            self.logger.warning(f"[{operation}] Document {document_id} not found.")
            raise NotFound(description=NOT_FOUND_MESSAGE)
        return document_to_model(data, model, document_id=document_id)

    @staticmethod
    def _to_models(items: List[tuple], model: Type[ModelT]) -> List[ModelT]:
        return [document_to_model(data, model, document_id=doc_id) for doc_id, data in items]


class InMemoryUserRepository(InMemoryRepository, BaseUserRepository):

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.collection = InMemoryCollection()

    def get_user(self, user_id: str) -> User:
        return self._fetch("get_user", self.collection, user_id, User)

    def get_all_users(self, page: int, page_size: int) -> List[User]:
        return self._to_models(self.collection.query("email_address", page, page_size), User)

    def create_user(self, user: User) -> User:
        self.collection.set(user.id, user_to_map(user))
        return user

    def update_user(self, user: User) -> User:
        self.collection.set(user.id, user_to_map(user), merge=True)
        return user

    def delete_user(self, user_id: str) -> None:
        self.collection.delete(user_id)


class InMemoryQuestionSetRepository(InMemoryRepository, BaseQuestionSetRepository):

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.collection = InMemoryCollection()

    def get_question_set(self, question_set_id: str) -> QuestionSet:
        return self._fetch("get_question_set", self.collection, question_set_id, QuestionSet)

    def get_question_set_by_tech_name(self, technology_name: str) -> QuestionSet:
        matches = self.collection.find("technology_name", technology_name)
        if not matches:
            self.logger.warning(f"[get_question_set_by_tech_name] No question set for technology: {technology_name}")
            raise NotFound(description=NOT_FOUND_MESSAGE)
        return self._to_models(matches[:1], QuestionSet)[0]

    def get_all_question_sets(self, page: int, page_size: int) -> List[QuestionSet]:
        return self._to_models(self.collection.query("technology_name", page, page_size), QuestionSet)

    def create_question_set(self, question_set: QuestionSet) -> QuestionSet:
        self.collection.set(question_set.id, question_set_to_map(question_set))
        return question_set

    def update_question_set(self, question_set: QuestionSet) -> QuestionSet:
        self.collection.set(question_set.id, question_set_to_map(question_set), merge=True)
        return question_set

    def delete_question_set(self, question_set_id: str) -> None:
        self.collection.delete(question_set_id)


class InMemoryCourseOutlineRepository(InMemoryRepository, BaseCourseOutlineRepository):

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.collection = InMemoryCollection()

    def get_course_outline(self, outline_id: str) -> CourseOutline:
        return self._fetch("get_course_outline", self.collection, outline_id, CourseOutline)

    def get_course_outlines_by_filter(
            self, page: int, page_size: int, filter_name: str, filter_value: str
    ) -> List[CourseOutline]:
        items = self.collection.query(filter_name, page, page_size, where={filter_name: filter_value})
        return self._to_models(items, CourseOutline)

    def get_all_course_outlines(self, page: int, page_size: int) -> List[CourseOutline]:
        return self._to_models(self.collection.query("technology_name", page, page_size), CourseOutline)

    def create_course_outline(self, outline: CourseOutline) -> CourseOutline:
        self.collection.set(outline.id, outline_to_map(outline))
        return outline

    def update_course_outline(self, outline: CourseOutline) -> CourseOutline:
        self.collection.set(outline.id, outline_to_map(outline))
        return outline

    def delete_course_outline(self, outline_id: str) -> None:
        self.collection.delete(outline_id)


class InMemoryMessageRepository(InMemoryRepository, BaseMessageRepository):
    """One collection per user, mirroring users/{userId}/messages."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self._collections: Dict[str, InMemoryCollection] = {}
        self._lock = threading.Lock()

    def user_collection(self, user_id: str) -> InMemoryCollection:
        with self._lock:
            return self._collections.setdefault(user_id, InMemoryCollection())

    def get_message(self, message_id: str, user_id: str) -> Message:
        return self._fetch("get_message", self.user_collection(user_id), message_id, Message)

    def get_all_user_messages(self, user_id: str, page: int, page_size: int) -> List[Message]:
        items = self.user_collection(user_id).query("created_at", page, page_size)
        return self._to_models(items, Message)

    def post_message(self, message: Message) -> Message:
        message_map = message_to_map(message)
        message_map["created_at"] = arrow.utcnow().datetime
        self.user_collection(message.user_id).set(message.id, message_map)
        return message

    def update_message(self, message: Message) -> Message:
        message_map = message_to_map(message)
        message_map["updated_at"] = arrow.utcnow().datetime
        self.user_collection(message.user_id).set(message.id, message_map, merge=True)
        return message

    def delete_message(self, message_id: str, user_id: str) -> None:
        self.user_collection(user_id).delete(message_id)


def create_memory_datastore(logger: Optional[logging.Logger] = None) -> Datastore:
    return Datastore(
        users=InMemoryUserRepository(logger),
        question_sets=InMemoryQuestionSetRepository(logger),
        course_outlines=InMemoryCourseOutlineRepository(logger),
        messages=InMemoryMessageRepository(logger),
    )
