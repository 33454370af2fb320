"""
Pydantic schemas for grade endpoints.

Only the grade value is modelled; student and course references are
checked by `integrity.references`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

GRADE_MAX_LENGTH = 32


class GradeValue(BaseModel):
    grade: str = Field(..., min_length=1, max_length=GRADE_MAX_LENGTH)

    @field_validator("grade", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        # Grades are free-form text; 85 and "85" mean the same thing.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class GradeUpdate(GradeValue):
    model_config = ConfigDict(extra="forbid")
