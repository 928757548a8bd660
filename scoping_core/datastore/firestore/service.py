"""
'firestore/service.py': Firestore-backed repositories for users, question sets, course outlines and messages.
"""
import logging
from typing import List, Dict, Any, Type, Optional, Callable, TypeVar

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore
from google.cloud.firestore_v1 import SERVER_TIMESTAMP, DocumentSnapshot
from google.cloud.firestore_v1.base_query import FieldFilter
from pydantic import BaseModel
from werkzeug.exceptions import NotFound, ServiceUnavailable, HTTPException

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
from ...exceptions import DatastoreError
from . import paths
from .config import (
    USERS_COLLECTION,
    MESSAGES_COLLECTION,
    QUESTION_SETS_COLLECTION,
    COURSE_OUTLINES_COLLECTION,
    USER_ORDER_FIELD,
    QUESTION_SET_ORDER_FIELD,
    COURSE_OUTLINE_ORDER_FIELD,
    MESSAGE_ORDER_FIELD,
    TECHNOLOGY_NAME_FIELD,
    ERROR_MESSAGES,
)

ModelT = TypeVar("ModelT", bound=BaseModel)
ResultT = TypeVar("ResultT")


class FirestoreRepository:
    """Shared Firestore error handling for the entity repositories."""

    def __init__(self, client: firestore.Client, logger: Optional[logging.Logger] = None):
        self._client = client
        self.logger = logger or logging.getLogger("scoping.datastore")

    def _call(self, operation: str, func: Callable[[], ResultT]) -> ResultT:
        """
        Run a Firestore call, translating client failures.

        Raises:
            NotFound: Passed through from `func`.
            ServiceUnavailable: If Firestore returns an API error.
            DatastoreError: For any other unexpected failure.
        """
        try:
            return func()

        except HTTPException:
            raise

        except GoogleAPIError as e:
            self.logger.error(f"[{operation}] Firestore API error: {e}")
            raise ServiceUnavailable(description=ERROR_MESSAGES["firestore_unavailable"])

        except DatastoreError as e:
            self.logger.error(f"[{operation}] {e}")
            raise

        except Exception as e:
            self.logger.error(f"[{operation}] Unexpected error: {e}")
            raise DatastoreError(ERROR_MESSAGES["unexpected_error"], cause=e)

    def _fetch(self, operation: str, doc_ref, model: Type[ModelT]) -> ModelT:
        def fetch() -> ModelT:
            doc: DocumentSnapshot = doc_ref.get()
            if not doc.exists:
                self.logger.warning(f"[{operation}] Document {doc_ref.id} not found.")
                raise NotFound(description=ERROR_MESSAGES["document_not_found"])
            return document_to_model(doc.to_dict(), model, document_id=doc.id)

        return self._call(operation, fetch)

    def _collect(self, operation: str, query, model: Type[ModelT]) -> List[ModelT]:
        def collect() -> List[ModelT]:
            return [document_to_model(doc.to_dict(), model, document_id=doc.id) for doc in query.stream()]

        return self._call(operation, collect)

    @staticmethod
    def _paginate(query, page: int, page_size: int):
        page, page_size = normalize_page(page, page_size)
        return query.offset((page - 1) * page_size).limit(page_size)


class FirestoreUserRepository(FirestoreRepository, BaseUserRepository):

    def __init__(self, client: firestore.Client, collection_name: str = USERS_COLLECTION, logger: Optional[logging.Logger] = None):
        super().__init__(client, logger)
        self.collection_name = collection_name

    def get_user(self, user_id: str) -> User:
        doc_ref = paths.get_document_path(self._client, self.collection_name, user_id)
        return self._fetch("get_user", doc_ref, User)

    def get_all_users(self, page: int, page_size: int) -> List[User]:
        query = paths.get_collection(self._client, self.collection_name).order_by(
            USER_ORDER_FIELD, direction=firestore.Query.ASCENDING
        )
        return self._collect("get_all_users", self._paginate(query, page, page_size), User)

    def create_user(self, user: User) -> User:
        user_map = user_to_map(user)
        doc_ref = paths.get_document_path(self._client, self.collection_name, user.id)
        self._call("create_user", lambda: doc_ref.set(user_map))
        return user

    def update_user(self, user: User) -> User:
        user_map = user_to_map(user)
        doc_ref = paths.get_document_path(self._client, self.collection_name, user.id)
        self._call("update_user", lambda: doc_ref.set(user_map, merge=True))
        return user

    def delete_user(self, user_id: str) -> None:
        doc_ref = paths.get_document_path(self._client, self.collection_name, user_id)
        self._call("delete_user", doc_ref.delete)


class FirestoreQuestionSetRepository(FirestoreRepository, BaseQuestionSetRepository):

    def __init__(self, client: firestore.Client, collection_name: str = QUESTION_SETS_COLLECTION, logger: Optional[logging.Logger] = None):
        super().__init__(client, logger)
        self.collection_name = collection_name

    def get_question_set(self, question_set_id: str) -> QuestionSet:
        doc_ref = paths.get_document_path(self._client, self.collection_name, question_set_id)
        return self._fetch("get_question_set", doc_ref, QuestionSet)

    def get_question_set_by_tech_name(self, technology_name: str) -> QuestionSet:
        query = (
            paths.get_collection(self._client, self.collection_name)
            .where(filter=FieldFilter(TECHNOLOGY_NAME_FIELD, "==", technology_name))
            .limit(1)
        )
        matches = self._collect("get_question_set_by_tech_name", query, QuestionSet)
        if not matches:
            self.logger.warning(f"[get_question_set_by_tech_name] No question set for technology: {technology_name}")
            raise NotFound(description=ERROR_MESSAGES["document_not_found"])
        return matches[0]

    def get_all_question_sets(self, page: int, page_size: int) -> List[QuestionSet]:
        query = paths.get_collection(self._client, self.collection_name).order_by(
            QUESTION_SET_ORDER_FIELD, direction=firestore.Query.ASCENDING
        )
        return self._collect("get_all_question_sets", self._paginate(query, page, page_size), QuestionSet)

    def create_question_set(self, question_set: QuestionSet) -> QuestionSet:
        question_set_map = question_set_to_map(question_set)
        doc_ref = paths.get_document_path(self._client, self.collection_name, question_set.id)
        self._call("create_question_set", lambda: doc_ref.set(question_set_map))
        return question_set

    def update_question_set(self, question_set: QuestionSet) -> QuestionSet:
        question_set_map = question_set_to_map(question_set)
        self.logger.debug(f"[update_question_set] Updating question set: {question_set.id}")
        doc_ref = paths.get_document_path(self._client, self.collection_name, question_set.id)
        self._call("update_question_set", lambda: doc_ref.set(question_set_map, merge=True))
        return question_set

    def delete_question_set(self, question_set_id: str) -> None:
        doc_ref = paths.get_document_path(self._client, self.collection_name, question_set_id)
        self._call("delete_question_set", doc_ref.delete)


class FirestoreCourseOutlineRepository(FirestoreRepository, BaseCourseOutlineRepository):

    def __init__(self, client: firestore.Client, collection_name: str = COURSE_OUTLINES_COLLECTION, logger: Optional[logging.Logger] = None):
        super().__init__(client, logger)
        self.collection_name = collection_name

    def get_course_outline(self, outline_id: str) -> CourseOutline:
        doc_ref = paths.get_document_path(self._client, self.collection_name, outline_id)
        return self._fetch("get_course_outline", doc_ref, CourseOutline)

    def get_course_outlines_by_filter(
            self, page: int, page_size: int, filter_name: str, filter_value: str
    ) -> List[CourseOutline]:
        # Query broken down for readability
        query = paths.get_collection(self._client, self.collection_name)
        filtered_query = query.where(filter=FieldFilter(filter_name, "==", filter_value))
        ordered_query = filtered_query.order_by(filter_name, direction=firestore.Query.ASCENDING)
        paginated_query = self._paginate(ordered_query, page, page_size)
        return self._collect("get_course_outlines_by_filter", paginated_query, CourseOutline)

    def get_all_course_outlines(self, page: int, page_size: int) -> List[CourseOutline]:
        query = paths.get_collection(self._client, self.collection_name).order_by(
            COURSE_OUTLINE_ORDER_FIELD, direction=firestore.Query.ASCENDING
        )
        return self._collect("get_all_course_outlines", self._paginate(query, page, page_size), CourseOutline)

    def create_course_outline(self, outline: CourseOutline) -> CourseOutline:
        outline_map = outline_to_map(outline)
        doc_ref = paths.get_document_path(self._client, self.collection_name, outline.id)
        self._call("create_course_outline", lambda: doc_ref.set(outline_map))
        return outline

    def update_course_outline(self, outline: CourseOutline) -> CourseOutline:
        outline_map = outline_to_map(outline)
        doc_ref = paths.get_document_path(self._client, self.collection_name, outline.id)
        self._call("update_course_outline", lambda: doc_ref.set(outline_map))
        return outline

    def delete_course_outline(self, outline_id: str) -> None:
        doc_ref = paths.get_document_path(self._client, self.collection_name, outline_id)
        self._call("delete_course_outline", doc_ref.delete)


class FirestoreMessageRepository(FirestoreRepository, BaseMessageRepository):
    """Messages live in a sub-collection of their owning user: users/{userId}/messages/{messageId}."""

    def __init__(
            self,
            client: firestore.Client,
            message_collection_name: str = MESSAGES_COLLECTION,
            user_collection_name: str = USERS_COLLECTION,
            logger: Optional[logging.Logger] = None,
    ):
        super().__init__(client, logger)
        self.message_collection_name = message_collection_name
        self.user_collection_name = user_collection_name

    def _message_ref(self, user_id: str, message_id: str):
        return paths.get_user_message_path(
            self._client, self.user_collection_name, user_id, self.message_collection_name, message_id
        )

    def get_message(self, message_id: str, user_id: str) -> Message:
        return self._fetch("get_message", self._message_ref(user_id, message_id), Message)

    def get_all_user_messages(self, user_id: str, page: int, page_size: int) -> List[Message]:
        query = paths.get_user_messages(
            self._client, self.user_collection_name, user_id, self.message_collection_name
        ).order_by(MESSAGE_ORDER_FIELD, direction=firestore.Query.ASCENDING)
        return self._collect("get_all_user_messages", self._paginate(query, page, page_size), Message)

    def post_message(self, message: Message) -> Message:
        message_map: Dict[str, Any] = message_to_map(message)
        message_map["created_at"] = SERVER_TIMESTAMP
        doc_ref = self._message_ref(message.user_id, message.id)
        self._call("post_message", lambda: doc_ref.set(message_map))
        return message

    def update_message(self, message: Message) -> Message:
        message_map: Dict[str, Any] = message_to_map(message)
        message_map["updated_at"] = SERVER_TIMESTAMP
        doc_ref = self._message_ref(message.user_id, message.id)
        self._call("update_message", lambda: doc_ref.set(message_map, merge=True))
        return message

    def delete_message(self, message_id: str, user_id: str) -> None:
        self._call("delete_message", self._message_ref(user_id, message_id).delete)


def create_firestore_datastore(
        client: firestore.Client, collections: Dict[str, str], logger: Optional[logging.Logger] = None
) -> Datastore:
    """Build the four Firestore repositories sharing one client."""
    return Datastore(
        users=FirestoreUserRepository(client, collections.get("users", USERS_COLLECTION), logger),
        question_sets=FirestoreQuestionSetRepository(
            client, collections.get("question_sets", QUESTION_SETS_COLLECTION), logger
        ),
        course_outlines=FirestoreCourseOutlineRepository(
            client, collections.get("course_outlines", COURSE_OUTLINES_COLLECTION), logger
        ),
        messages=FirestoreMessageRepository(
            client,
            collections.get("messages", MESSAGES_COLLECTION),
            collections.get("users", USERS_COLLECTION),
            logger,
        ),
    )
