from typing import Optional, List
from pydantic import BaseModel, Field

from .common import Question


class QuestionSet(BaseModel):
    """Named collection of scoping questions for one technology."""
    id: Optional[str] = Field(default=None, description="Server-generated identifier")
    technology_name: Optional[str] = None
    questions: Optional[List[Question]] = None
