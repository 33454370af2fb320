"""
Pydantic schemas for course endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

TITLE_MAX_LENGTH = 200
CREDITS_MAX = 60


class CourseCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=32)
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    credits: int | None = Field(default=None, ge=0, le=CREDITS_MAX)


class CourseReplace(BaseModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    credits: int | None = Field(default=None, ge=0, le=CREDITS_MAX)


class CoursePatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    credits: int | None = Field(default=None, ge=0, le=CREDITS_MAX)

    @field_validator("title")
    @classmethod
    def _title_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("title cannot be null")
        return value
