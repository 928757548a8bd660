"""
'entities/completion.py': Chat-completion response contract of the completion endpoint.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class CompletionMessage(BaseModel):
    role: str
    content: str


class Choice(BaseModel):
    index: int = 0
    message: CompletionMessage
    finish_reason: Optional[str] = None


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletion(BaseModel):
    """Structured completion with token usage metadata."""
    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: List[Choice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)
