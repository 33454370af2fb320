"""
Student business logic.

`student_id` is the identity and never changes after creation. Course codes
in `courses` are checked for existence on every write that sets them.
"""

from __future__ import annotations

import logging
from typing import Any

from core import errors, validation
from courses import service as course_service
from integrity import references, sanitizer

from . import repository, schemas

logger = logging.getLogger(__name__)


def _student_out(row: dict, summaries: dict[str, dict[str, str]]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "student_id": str(row["student_id"]),
        "email": str(row["email"]),
        "name": str(row["name"]),
        "year": int(row["year"]),
        "courses": course_service.populate_courses(list(row["courses"] or []), summaries),
        "created_at": row["created_at"],
        "updated_at": row["updated_at"],
    }


async def _populated(rows: list[dict]) -> list[dict[str, Any]]:
    codes = [code for row in rows for code in (row["courses"] or [])]
    summaries = await course_service.course_summaries(codes)
    return [_student_out(row, summaries) for row in rows]


async def _one(row: dict) -> dict[str, Any]:
    return (await _populated([row]))[0]


async def create_student(payload: dict[str, Any]) -> dict[str, Any]:
    payload = validation.ensure_object(payload)
    validation.require_fields(payload, "name", "student_id", "email", "year")

    clean = sanitizer.normalize("student", payload)
    clean["student_id"] = references.require_format("student", clean["student_id"])
    if clean.get("courses") is None:
        clean["courses"] = []
    data = validation.parse_model(schemas.StudentCreate, clean)
    course_codes = await references.require_all("course", data.courses)

    row = await repository.insert_student(
        student_id=data.student_id,
        email=data.email,
        name=data.name,
        year=data.year,
        courses=course_codes,
    )
    logger.info("student_created student_id=%s courses=%s", row["student_id"], len(course_codes))
    return await _one(row)


async def get_student(student_id: str) -> dict[str, Any]:
    key = references.require_format("student", student_id)
    row = await repository.get_student(key)
    if row is None:
        raise errors.NotFound("student", f"No student found with student_id: {key}", key=key)
    return await _one(row)


async def list_students(
    *,
    year: int | None = None,
    course: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[dict[str, Any]]:
    course_code = references.require_format("course", course) if course else None
    rows = await repository.list_students(year=year, course=course_code, limit=limit, offset=offset)
    return await _populated(rows)


async def _apply_update(key: str, fields: dict[str, Any]) -> dict[str, Any]:
    if "courses" in fields:
        fields["courses"] = await references.require_all("course", fields["courses"])
    row = await repository.update_student(key, fields)
    if row is None:
        raise errors.NotFound("student", f"No student found with student_id: {key}", key=key)
    return row


async def replace_student(student_id: str, payload: dict[str, Any]) -> dict[str, Any]:
    key = references.require_format("student", student_id)
    clean = sanitizer.sanitize("student", validation.ensure_object(payload))
    validation.require_fields(clean, "name", "email", "year")
    if clean.get("courses") is None:
        clean["courses"] = []
    data = validation.parse_model(schemas.StudentReplace, clean)

    row = await _apply_update(key, data.model_dump())
    logger.info("student_replaced student_id=%s", key)
    return await _one(row)


async def patch_student(student_id: str, payload: dict[str, Any]) -> dict[str, Any]:
    key = references.require_format("student", student_id)
    clean = sanitizer.sanitize("student", validation.ensure_object(payload))
    data = validation.parse_model(schemas.StudentPatch, clean)

    fields = data.model_dump(exclude_unset=True)
    row = await _apply_update(key, fields)
    logger.info("student_patched student_id=%s fields=%s", key, ",".join(sorted(fields)) or "-")
    return await _one(row)


async def delete_student(student_id: str) -> dict[str, Any]:
    key = references.require_format("student", student_id)
    row = await repository.delete_student(key)
    if row is None:
        raise errors.NotFound("student", f"No student found with student_id: {key}", key=key)
    # Grades of this student stay until reconciliation prunes them.
    logger.info("student_deleted student_id=%s", key)
    return {"ok": True, "student": await _one(row)}
