"""
'services/message.py': MessageService handles user messages and the answer submission pipeline.
"""
import uuid
from logging import Logger
from typing import List

from ..completion.prompts import PENDING_MESSAGE_TEXT
from ..completion.worker import CompletionJob, CompletionWorker
from ..datastore.base import BaseMessageRepository
from ..entities import Message, MessageStatus
from ..exceptions import MissingRequiredFieldsError


class MessageService:
    """Service layer for user messages; owns the answer-to-recommendation pipeline."""
    def __init__(self, message_repository: BaseMessageRepository, completion_worker: CompletionWorker, logger: Logger):
        """
        Args:
            message_repository (BaseMessageRepository): Storage for user messages.
            completion_worker (CompletionWorker): Background worker producing recommendations.
            logger (Logger): Logger instance.
        """
        self.message_repository = message_repository
        self.completion_worker = completion_worker
        self.logger = logger

    def post_message(self, message: Message) -> Message:
        self.logger.debug("[post_message] Posting message . . .")
        message = message.model_copy(update={"id": str(uuid.uuid4())})
        try:
            return self.message_repository.post_message(message)
        except Exception:
            self.logger.error(f"[post_message] Failed to post message {message.id}")
            raise

    def submit_answers(self, messages: List[Message]) -> Message:
        """
        Persist an answer batch, acknowledge with a pending placeholder and queue the recommendation.

        Answers that fail to persist are logged and skipped. Only a failure to persist the
        placeholder is reported to the caller.

        Args:
            messages (List[Message]): Non-empty batch of answer messages owned by one user.

        Returns:
            Message: The persisted placeholder message.

        Raises:
            MissingRequiredFieldsError: If the batch is empty or lacks an owning user.
        """
        self.logger.debug("[submit_answers] Posting multiple answers . . .")

        if not messages:
            raise MissingRequiredFieldsError("answer batch must not be empty")

        user_id = messages[0].user_id
        if not user_id:
            raise MissingRequiredFieldsError("answer batch must belong to a user")

        posted_messages: List[Message] = []
        for message in messages:
            try:
                posted_messages.append(self.post_message(message))
            except Exception as e:
                self.logger.error(f"[submit_answers] Failed to post answer for user {user_id}. Error: {e}")
                continue

        pending_message = Message(
            id=str(uuid.uuid4()),
            user_id=user_id,
            message_text=PENDING_MESSAGE_TEXT,
            status=MessageStatus.PENDING,
        )
        try:
            posted_pending_message = self.message_repository.post_message(pending_message)
        except Exception as e:
            self.logger.error(f"[submit_answers] Failed to post pending message {pending_message.id}. Error: {e}")
            raise

        self.completion_worker.submit(CompletionJob(
            user_id=user_id,
            placeholder_id=posted_pending_message.id,
            messages=posted_messages,
        ))

        self.logger.debug(f"[submit_answers] Posted {len(posted_messages)}/{len(messages)} answers.")
        return posted_pending_message

    def get_message(self, message_id: str, user_id: str) -> Message:
        self.logger.debug(f"[get_message] Retrieving message {message_id} for user {user_id} . . .")
        try:
            return self.message_repository.get_message(message_id, user_id)
        except Exception:
            self.logger.error(f"[get_message] Failed to retrieve message {message_id} for user {user_id}")
            raise

    def get_all_user_messages(self, user_id: str, page: int, page_size: int) -> List[Message]:
        self.logger.debug(f"[get_all_user_messages] Retrieving all messages for user {user_id} . . .")
        try:
            return self.message_repository.get_all_user_messages(user_id, page, page_size)
        except Exception:
            self.logger.error(f"[get_all_user_messages] Failed to retrieve messages for user {user_id}")
            raise

    def update_message(self, message: Message) -> Message:
        self.logger.debug(f"[update_message] Updating message {message.id} . . .")
        try:
            return self.message_repository.update_message(message)
        except Exception:
            self.logger.error(f"[update_message] Failed to update message {message.id}")
            raise

    def delete_message(self, message_id: str, user_id: str) -> None:
        self.logger.debug(f"[delete_message] Deleting message {message_id} from user {user_id} . . .")
        try:
            self.message_repository.delete_message(message_id, user_id)
        except Exception:
            self.logger.error(f"[delete_message] Failed to delete message {message_id} from user {user_id}")
            raise
