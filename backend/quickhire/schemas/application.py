from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ApplicationCreate(BaseModel):
    job_id: int
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    resume_link: str = Field(min_length=1)
    cover_note: str = Field(min_length=1)

    class Config:
        str_strip_whitespace = True


class ApplicationOut(BaseModel):
    id: int
    job_id: int
    name: str
    email: str
    resume_link: str
    cover_note: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True
