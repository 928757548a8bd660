from .common import Options, Question
from .user import User
from .question_set import QuestionSet
from .outline import CourseOutline
from .message import Answer, Message, MessageStatus
from .completion import ChatCompletion, Choice, CompletionMessage, Usage

__all__ = [
    "Options",
    "Question",
    "User",
    "QuestionSet",
    "CourseOutline",
    "Answer",
    "Message",
    "MessageStatus",
    "ChatCompletion",
    "Choice",
    "CompletionMessage",
    "Usage",
]
