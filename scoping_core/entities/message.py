"""
'entities/message.py': Message records, either plain text or an answer to a question.
"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .common import Question


class MessageStatus(str, Enum):
    """Lifecycle of a placeholder message produced by the answer pipeline."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Answer(BaseModel):
    """A user's answer to one scoping question."""
    technology_name: Optional[str] = None
    question: Optional[Question] = None
    answer: Optional[str] = None


class Message(BaseModel):
    """
    A message owned by a user.

    Exactly one of `message_text` or `answer` is expected to be meaningful.
    `status` is only set on placeholder messages awaiting a recommendation.
    """
    id: Optional[str] = Field(default=None, description="Server-generated identifier")
    user_id: Optional[str] = None
    message_text: Optional[str] = None
    answer: Optional[Answer] = None
    status: Optional[MessageStatus] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def question_text(self) -> Optional[str]:
        if self.answer and self.answer.question:
            return self.answer.question.text
        return None

    def answer_text(self) -> Optional[str]:
        if self.answer:
            return self.answer.answer
        return None
