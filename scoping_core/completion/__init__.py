from .base import BaseCompletionClient
from .openai import OpenAICompletionClient
from .worker import CompletionJob, CompletionWorker
from .prompts import PENDING_MESSAGE_TEXT, FAILED_MESSAGE_TEXT, RECOMMENDATION_CONTEXT, build_prompt

__all__ = [
    "BaseCompletionClient",
    "OpenAICompletionClient",
    "CompletionJob",
    "CompletionWorker",
    "PENDING_MESSAGE_TEXT",
    "FAILED_MESSAGE_TEXT",
    "RECOMMENDATION_CONTEXT",
    "build_prompt",
]
