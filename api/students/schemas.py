"""
Pydantic schemas for student endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
NAME_MAX_LENGTH = 200


class StudentCreate(BaseModel):
    student_id: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    year: int = Field(..., ge=1, le=20)
    courses: list[str] = Field(default_factory=list)


class StudentReplace(BaseModel):
    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    year: int = Field(..., ge=1, le=20)
    courses: list[str] = Field(default_factory=list)


class StudentPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str | None = Field(default=None, max_length=320, pattern=EMAIL_PATTERN)
    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    year: int | None = Field(default=None, ge=1, le=20)
    courses: list[str] | None = None

    @field_validator("email", "name", "year", "courses")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value
