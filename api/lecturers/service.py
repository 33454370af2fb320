"""
Lecturer business logic.

The email address is both the lookup key and the identity; it is compared
lowercased and cannot be changed by an update.
"""

from __future__ import annotations

import logging
from typing import Any

from core import errors, validation
from courses import service as course_service
from integrity import references, sanitizer

from . import repository, schemas

logger = logging.getLogger(__name__)


def _lecturer_out(row: dict, summaries: dict[str, dict[str, str]]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "email": str(row["email"]),
        "name": row["name"],
        "department": str(row["department"]),
        "courses": course_service.populate_courses(list(row["courses"] or []), summaries),
        "created_at": row["created_at"],
        "updated_at": row["updated_at"],
    }


async def _populated(rows: list[dict]) -> list[dict[str, Any]]:
    codes = [code for row in rows for code in (row["courses"] or [])]
    summaries = await course_service.course_summaries(codes)
    return [_lecturer_out(row, summaries) for row in rows]


async def _one(row: dict) -> dict[str, Any]:
    return (await _populated([row]))[0]


def _not_found(key: str) -> errors.NotFound:
    return errors.NotFound("lecturer", "Lecturer not found with this email.", key=key)


async def create_lecturer(payload: dict[str, Any]) -> dict[str, Any]:
    payload = validation.ensure_object(payload)
    validation.require_fields(payload, "name", "email", "department")

    clean = sanitizer.normalize("lecturer", payload)
    clean["email"] = references.require_format("lecturer", clean["email"])
    if clean.get("courses") is None:
        clean["courses"] = []
    data = validation.parse_model(schemas.LecturerCreate, clean)
    course_codes = await references.require_all("course", data.courses)

    row = await repository.insert_lecturer(
        email=data.email,
        name=data.name,
        department=data.department,
        courses=course_codes,
    )
    logger.info("lecturer_created email=%s department=%s", row["email"], row["department"])
    return await _one(row)


async def get_lecturer(email: str) -> dict[str, Any]:
    key = references.require_format("lecturer", email)
    row = await repository.get_lecturer(key)
    if row is None:
        raise _not_found(key)
    return await _one(row)


async def list_lecturers(
    *,
    department: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[dict[str, Any]]:
    department = sanitizer.canonical_department(department) if department else None
    rows = await repository.list_lecturers(department=department, limit=limit, offset=offset)
    return await _populated(rows)


async def patch_lecturer(email: str, payload: dict[str, Any]) -> dict[str, Any]:
    key = references.require_format("lecturer", email)
    clean = sanitizer.sanitize("lecturer", validation.ensure_object(payload))
    data = validation.parse_model(schemas.LecturerPatch, clean)

    fields = data.model_dump(exclude_unset=True)
    if "courses" in fields:
        fields["courses"] = await references.require_all("course", fields["courses"])

    row = await repository.update_lecturer(key, fields)
    if row is None:
        raise _not_found(key)
    logger.info("lecturer_patched email=%s fields=%s", key, ",".join(sorted(fields)) or "-")
    return await _one(row)


async def delete_lecturer(email: str) -> dict[str, Any]:
    key = references.require_format("lecturer", email)
    row = await repository.delete_lecturer(key)
    if row is None:
        raise _not_found(key)
    logger.info("lecturer_deleted email=%s", key)
    return {
        "ok": True,
        "lecturer": {
            "name": row["name"],
            "email": str(row["email"]),
            "department": str(row["department"]),
        },
    }
