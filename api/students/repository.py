"""
Student persistence (raw SQL).

`courses` is a TEXT[] of course codes kept in insertion order. It is a
denormalized list: nothing here checks the codes against `courses`.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db, errors

_COLUMNS = "id, student_id, email, name, year, courses, created_at, updated_at"

UPDATABLE_COLUMNS = ("email", "name", "year", "courses")

_UNIQUE_FIELDS = {
    "students_student_id_key": "student_id",
    "students_email_key": "email",
}


def _duplicate(exc: asyncpg.exceptions.UniqueViolationError) -> errors.DuplicateKey:
    return errors.DuplicateKey("student", _UNIQUE_FIELDS.get(db.constraint_name(exc), "student_id"))


async def insert_student(
    *,
    student_id: str,
    email: str,
    name: str,
    year: int,
    courses: list[str],
) -> dict[str, Any]:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO students (student_id, email, name, year, courses)
            VALUES ($1, $2, $3, $4, $5::text[])
            RETURNING {_COLUMNS}
            """,
            student_id,
            email,
            name,
            year,
            list(courses),
        )
    except asyncpg.exceptions.UniqueViolationError as exc:
        raise _duplicate(exc) from exc
    if row is None:
        raise RuntimeError("Failed to create student.")
    return row


async def get_student(student_id: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM students
        WHERE student_id = $1
        """,
        student_id,
    )


async def list_students(
    *,
    year: int | None = None,
    course: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM students
        WHERE ($1::int IS NULL OR year = $1)
          AND ($2::text IS NULL OR $2 = ANY(courses))
        ORDER BY student_id ASC
        LIMIT $3
        OFFSET $4
        """,
        year,
        course,
        limit,
        offset,
    )


async def update_student(student_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
    assignments: list[str] = []
    args: list[Any] = [student_id]
    for column, value in fields.items():
        if column not in UPDATABLE_COLUMNS:
            raise ValueError(f"Column is not updatable: {column!r}")
        args.append(list(value) if column == "courses" else value)
        cast = "::text[]" if column == "courses" else ""
        assignments.append(f"{column} = ${len(args)}{cast}")
    assignments.append("updated_at = now()")

    try:
        return await db.fetch_one(
            f"""
            UPDATE students
            SET {", ".join(assignments)}
            WHERE student_id = $1
            RETURNING {_COLUMNS}
            """,
            *args,
        )
    except asyncpg.exceptions.UniqueViolationError as exc:
        raise _duplicate(exc) from exc


async def delete_student(student_id: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        DELETE FROM students
        WHERE student_id = $1
        RETURNING {_COLUMNS}
        """,
        student_id,
    )
