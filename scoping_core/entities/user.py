from typing import Optional
from pydantic import BaseModel, Field


class User(BaseModel):
    """Questionnaire user. `name` and `email_address` are required to persist."""
    id: Optional[str] = Field(default=None, description="Server-generated identifier")
    name: Optional[str] = None
    email_address: Optional[str] = None
    corporate: bool = Field(default=False, description="Whether this is a corporate account")
    company: Optional[str] = None
