"""College Schemas — directory listing and community page responses."""

from uuid import UUID

from pydantic import BaseModel, Field


class CollegeSummaryOut(BaseModel):
    id: UUID
    name: str
    domain: str
    post_count: int = Field(ge=0)


class CollegeDetailOut(BaseModel):
    id: UUID
    name: str
    domain: str
    student_count: int = Field(ge=0)
    post_count: int = Field(ge=0)
