"""
Grade business logic.

Invariant: at most one grade per (student, course) pair, course optional.

Order of checks on every write:
1) payload checks (missing value, attempts to re-key the grade) - no store access
2) reference checks (student, and course where it must exist)
3) one store statement; its unique constraint decides duplicates
"""

from __future__ import annotations

import logging
from typing import Any

from core import errors, validation
from courses import repository as course_repository
from integrity import references, sanitizer

from . import repository, schemas

logger = logging.getLogger(__name__)


def grade_out(row: dict) -> dict[str, Any]:
    """
    Persisted grade plus display fields of its student and course.
    A reference that no longer resolves is rendered as null.
    """
    student = None
    if row.get("student_email") is not None:
        student = {
            "student_id": str(row["student_id"]),
            "name": row["student_name"],
            "email": row["student_email"],
        }

    course = None
    if row.get("course_code") is not None and row.get("course_title") is not None:
        course = {"code": str(row["course_code"]), "title": row["course_title"]}

    return {
        "id": int(row["id"]),
        "student_id": str(row["student_id"]),
        "course_code": row["course_code"],
        "grade": str(row["grade"]),
        "student": student,
        "course": course,
        "created_at": row["created_at"],
        "updated_at": row["updated_at"],
    }


def _course_key(course: Any) -> str | None:
    return None if course is None else references.require_format("course", course)


def _grade_not_found(student_id: str, course_code: str | None) -> errors.NotFound:
    return errors.NotFound(
        "grade",
        "Grade not found or does not belong to this student.",
        student=student_id,
        course=course_code,
    )


async def create_grade(payload: dict[str, Any]) -> dict[str, Any]:
    payload = validation.ensure_object(payload)
    validation.require_fields(payload, "student", "grade")

    clean = sanitizer.normalize("grade", payload)
    value = validation.parse_model(schemas.GradeValue, clean).grade

    student_id = await references.require("student", clean["student"])
    course_code = None
    if not validation.is_blank(clean.get("course")):
        course_code = await references.require("course", clean["course"])

    row = await repository.insert_grade(student_id=student_id, course_code=course_code, grade=value)
    logger.info("grade_created student=%s course=%s", student_id, course_code)
    return grade_out(row)


async def get_grade(student: str, course: str | None) -> dict[str, Any]:
    student_id = references.require_format("student", student)
    course_code = _course_key(course)
    row = await repository.get_grade(student_id=student_id, course_code=course_code)
    if row is None:
        raise _grade_not_found(student_id, course_code)
    return grade_out(row)


async def list_grades(*, student: str | None = None, course: str | None = None) -> list[dict[str, Any]]:
    student_id = references.require_format("student", student) if student else None
    course_code = references.require_format("course", course) if course else None
    rows = await repository.list_grades(student_id=student_id, course_code=course_code)
    return [grade_out(row) for row in rows]


async def list_student_grades(student: str) -> list[dict[str, Any]]:
    student_id = await references.require("student", student)
    rows = await repository.list_grades(student_id=student_id)
    return [grade_out(row) for row in rows]


async def list_course_grades(course: str) -> dict[str, Any]:
    course_code = references.require_format("course", course)
    course_row = await course_repository.get_course(course_code)
    if course_row is None:
        raise errors.NotFound("course", key=course_code)

    rows = await repository.list_grades(course_code=course_code)
    return {
        "course": str(course_row["title"]),
        "code": course_code,
        "grades": [grade_out(row) for row in rows],
    }


async def update_grade(student: str, course: str | None, payload: dict[str, Any]) -> dict[str, Any]:
    """
    Overwrite the value of the grade for (student, course).
    The course is not required to exist any more; the grade is.
    """
    payload = validation.ensure_object(payload)
    validation.require_fields(payload, "grade")
    clean = sanitizer.sanitize("grade", payload)
    value = validation.parse_model(schemas.GradeUpdate, clean).grade

    student_id = await references.require("student", student)
    course_code = _course_key(course)

    row = await repository.update_grade(student_id=student_id, course_code=course_code, grade=value)
    if row is None:
        raise _grade_not_found(student_id, course_code)
    logger.info("grade_updated student=%s course=%s", student_id, course_code)
    return grade_out(row)


async def delete_grade(student: str, course: str | None) -> dict[str, Any]:
    student_id = await references.require("student", student)
    course_code = _course_key(course)

    row = await repository.delete_grade(student_id=student_id, course_code=course_code)
    if row is None:
        raise _grade_not_found(student_id, course_code)
    logger.info("grade_deleted student=%s course=%s", student_id, course_code)
    return {"ok": True, "grade": grade_out(row)}
