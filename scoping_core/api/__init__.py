from .user_routes import user_router
from .question_set_routes import question_set_router
from .outline_routes import outline_router
from .message_routes import message_router

__all__ = ["user_router", "question_set_router", "outline_router", "message_router"]
