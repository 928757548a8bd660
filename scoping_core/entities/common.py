"""
'entities/common.py': Question models shared by question sets and answer messages.
"""
from typing import Optional, List
from pydantic import BaseModel, Field


class Options(BaseModel):
    """Selectable options of a multiple-choice question (checkbox when multi_answer, radio otherwise)."""
    multi_answer: bool = Field(default=False, description="Whether more than one option may be selected")
    possible_options: Optional[List[str]] = Field(default=None, description="Ordered selectable options")


class Question(BaseModel):
    """A single scoping question."""
    category: Optional[str] = Field(default=None, description="Category label")
    text: Optional[str] = Field(default=None, description="Question text")
    options: Optional[Options] = Field(default=None, description="Options for multiple-choice questions")
