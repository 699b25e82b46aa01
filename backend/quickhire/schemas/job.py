from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    employment_type: str = Field(min_length=1)
    salary_range: str = Field(min_length=1)

    class Config:
        str_strip_whitespace = True


class JobOut(BaseModel):
    id: int
    title: str
    company: str
    location: str
    category: str
    description: str
    employment_type: str
    salary_range: str
    created_at: datetime | None = None
    application_count: int = 0

    class Config:
        from_attributes = True


class JobMetaOut(BaseModel):
    categories: list[str] = []
    locations: list[str] = []
    employment_types: list[str] = []
