from .user import UserService
from .question_set import QuestionSetService
from .outline import CourseOutlineService
from .message import MessageService

__all__ = ["UserService", "QuestionSetService", "CourseOutlineService", "MessageService"]
