"""
Course business logic.

Course code is the identity: uppercased on the way in, never updatable.
Deleting a course leaves student/lecturer lists and grades untouched
(see `integrity.service.reconcile`).
"""

from __future__ import annotations

import logging
from typing import Any

from core import errors, validation
from integrity import references, sanitizer

from . import repository, schemas

logger = logging.getLogger(__name__)

DEFAULT_SORT = "code:asc"


def course_out(row: dict) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "code": str(row["code"]),
        "title": str(row["title"]),
        "credits": row["credits"],
        "created_at": row["created_at"],
        "updated_at": row["updated_at"],
    }


async def course_summaries(codes: list[str]) -> dict[str, dict[str, str]]:
    """
    code -> {"code", "title"} for the codes that still exist.
    """
    rows = await repository.get_courses_by_codes(sorted(set(codes)))
    return {str(row["code"]): {"code": str(row["code"]), "title": str(row["title"])} for row in rows}


def populate_courses(codes: list[str], summaries: dict[str, dict[str, str]]) -> list[dict[str, str]]:
    # Dangling codes are skipped, like a populate join would.
    return [summaries[code] for code in codes if code in summaries]


def _parse_sort(sort_by: str | None) -> tuple[str, bool]:
    """
    "title:desc" -> ("title", True). Direction defaults to ascending.
    """
    raw = (sort_by or DEFAULT_SORT).strip()
    field, _, order = raw.partition(":")
    field = field.strip().lower()
    order = (order or "asc").strip().lower()
    if field not in repository.SORTABLE_COLUMNS or order not in {"asc", "desc"}:
        raise errors.ValidationFailed(
            "sort_by must be <field>:<asc|desc>.",
            details=[{"field": "sort_by", "message": f"sortable fields: {', '.join(repository.SORTABLE_COLUMNS)}"}],
        )
    return field, order == "desc"


async def create_course(payload: dict[str, Any]) -> dict[str, Any]:
    payload = validation.ensure_object(payload)
    validation.require_fields(payload, "code", "title")

    clean = sanitizer.normalize("course", payload)
    clean["code"] = references.require_format("course", clean["code"])
    data = validation.parse_model(schemas.CourseCreate, clean)

    row = await repository.insert_course(code=data.code, title=data.title, credits=data.credits)
    logger.info("course_created code=%s", row["code"])
    return course_out(row)


async def get_course(code: str) -> dict[str, Any]:
    key = references.require_format("course", code)
    row = await repository.get_course(key)
    if row is None:
        raise errors.NotFound("course", key=key)
    return course_out(row)


async def list_courses(
    *,
    credits: int | None = None,
    title: str | None = None,
    sort_by: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> dict[str, Any]:
    column, descending = _parse_sort(sort_by)
    title = (title or "").strip() or None

    rows = await repository.list_courses(
        credits=credits,
        title=title,
        sort_by=column,
        descending=descending,
        limit=limit,
        offset=offset,
    )
    total = await repository.count_courses(credits=credits, title=title)
    return {
        "courses": [course_out(row) for row in rows],
        "total": total,
        "limit": limit,
        "offset": offset,
    }


async def replace_course(code: str, payload: dict[str, Any]) -> dict[str, Any]:
    key = references.require_format("course", code)
    clean = sanitizer.sanitize("course", validation.ensure_object(payload))
    validation.require_fields(clean, "title")
    data = validation.parse_model(schemas.CourseReplace, clean)

    row = await repository.update_course(key, {"title": data.title, "credits": data.credits})
    if row is None:
        raise errors.NotFound("course", key=key)
    logger.info("course_replaced code=%s", key)
    return course_out(row)


async def patch_course(code: str, payload: dict[str, Any]) -> dict[str, Any]:
    key = references.require_format("course", code)
    clean = sanitizer.sanitize("course", validation.ensure_object(payload))
    data = validation.parse_model(schemas.CoursePatch, clean)

    fields = data.model_dump(exclude_unset=True)
    row = await repository.update_course(key, fields)
    if row is None:
        raise errors.NotFound("course", key=key)
    logger.info("course_patched code=%s fields=%s", key, ",".join(sorted(fields)) or "-")
    return course_out(row)


async def delete_course(code: str) -> dict[str, Any]:
    key = references.require_format("course", code)
    row = await repository.delete_course(key)
    if row is None:
        raise errors.NotFound("course", key=key)
    # References held by students, lecturers and grades are left as they are.
    logger.info("course_deleted code=%s", key)
    return {"ok": True, "course": course_out(row)}
