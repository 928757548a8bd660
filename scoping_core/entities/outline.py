from typing import Optional
from pydantic import BaseModel, Field


class CourseOutline(BaseModel):
    """Catalog record describing one training course."""
    id: Optional[str] = Field(default=None, description="Server-generated identifier")
    technology_name: Optional[str] = None
    course_code: Optional[str] = None
    course_name: Optional[str] = None
    outline: Optional[str] = None
