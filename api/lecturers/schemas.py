"""
Pydantic schemas for lecturer endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Department = Literal["Cs", "Mathematics", "Science", "Humanities", "Engineering"]


class LecturerCreate(BaseModel):
    email: str = Field(..., max_length=320)
    name: str = Field(..., min_length=1, max_length=200)
    department: Department
    courses: list[str] = Field(default_factory=list)


class LecturerPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    department: Department | None = None
    courses: list[str] | None = None

    @field_validator("department", "courses")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value
