from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from ..entities import User, QuestionSet, CourseOutline, Message


class BaseUserRepository(ABC):

    @abstractmethod
    def get_user(self, user_id: str) -> User:
        """
        Retrieve a user by identifier.

        Raises:
            NotFound: If no user exists with that identifier.
        """
        pass

    @abstractmethod
    def get_all_users(self, page: int, page_size: int) -> List[User]:
        """Return one page of users ordered by email address."""
        pass

    @abstractmethod
    def create_user(self, user: User) -> User:
        """
        Persist a new user under `user.id`.

        Raises:
            MissingRequiredFieldsError: If name or email address is absent.
        """
        pass

    @abstractmethod
    def update_user(self, user: User) -> User:
        """Merge the populated fields of `user` into the stored record."""
        pass

    @abstractmethod
    def delete_user(self, user_id: str) -> None:
        """Delete a user. Deleting an absent user is not an error."""
        pass


class BaseQuestionSetRepository(ABC):

    @abstractmethod
    def get_question_set(self, question_set_id: str) -> QuestionSet:
        pass

    @abstractmethod
    def get_question_set_by_tech_name(self, technology_name: str) -> QuestionSet:
        """
        Return one question set whose technology name matches.

        Technology names are not unique; which match is returned is unspecified.

        Raises:
            NotFound: If no question set matches.
        """
        pass

    @abstractmethod
    def get_all_question_sets(self, page: int, page_size: int) -> List[QuestionSet]:
        """Return one page of question sets ordered by technology name."""
        pass

    @abstractmethod
    def create_question_set(self, question_set: QuestionSet) -> QuestionSet:
        pass

    @abstractmethod
    def update_question_set(self, question_set: QuestionSet) -> QuestionSet:
        pass

    @abstractmethod
    def delete_question_set(self, question_set_id: str) -> None:
        pass


class BaseCourseOutlineRepository(ABC):

    @abstractmethod
    def get_course_outline(self, outline_id: str) -> CourseOutline:
        pass

    @abstractmethod
    def get_course_outlines_by_filter(
            self, page: int, page_size: int, filter_name: str, filter_value: str
    ) -> List[CourseOutline]:
        """Return one page of outlines whose `filter_name` field equals `filter_value`."""
        pass

    @abstractmethod
    def get_all_course_outlines(self, page: int, page_size: int) -> List[CourseOutline]:
        """Return one page of outlines ordered by technology name."""
        pass

    @abstractmethod
    def create_course_outline(self, outline: CourseOutline) -> CourseOutline:
        pass

    @abstractmethod
    def update_course_outline(self, outline: CourseOutline) -> CourseOutline:
        """Overwrite the stored outline with `outline`."""
        pass

    @abstractmethod
    def delete_course_outline(self, outline_id: str) -> None:
        pass


class BaseMessageRepository(ABC):

    @abstractmethod
    def get_message(self, message_id: str, user_id: str) -> Message:
        pass

    @abstractmethod
    def get_all_user_messages(self, user_id: str, page: int, page_size: int) -> List[Message]:
        """Return one page of a user's messages ordered by creation time."""
        pass

    @abstractmethod
    def post_message(self, message: Message) -> Message:
        """
        Persist a new message under the owning user with a server-assigned creation time.

        Raises:
            MissingRequiredFieldsError: If the owner or the content is absent.
        """
        pass

    @abstractmethod
    def update_message(self, message: Message) -> Message:
        """Merge the populated fields of `message` and stamp the update time."""
        pass

    @abstractmethod
    def delete_message(self, message_id: str, user_id: str) -> None:
        pass


@dataclass
class Datastore:
    """The four entity repositories of one backend."""
    users: BaseUserRepository
    question_sets: BaseQuestionSetRepository
    course_outlines: BaseCourseOutlineRepository
    messages: BaseMessageRepository


def normalize_page(page: int, page_size: int):
    """Clamp pagination to page >= 1 (default 1) and page size >= 1 (default 10)."""
    if page is None or page < 1:
        page = 1
    if page_size is None or page_size < 1:
        page_size = 10
    return page, page_size
