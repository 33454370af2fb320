"""
Lecturer persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db, errors

_COLUMNS = "id, email, name, department, courses, created_at, updated_at"

UPDATABLE_COLUMNS = ("name", "department", "courses")


async def insert_lecturer(
    *,
    email: str,
    name: str,
    department: str,
    courses: list[str],
) -> dict[str, Any]:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO lecturers (email, name, department, courses)
            VALUES ($1, $2, $3, $4::text[])
            RETURNING {_COLUMNS}
            """,
            email,
            name,
            department,
            list(courses),
        )
    except asyncpg.exceptions.UniqueViolationError as exc:
        raise errors.DuplicateKey("lecturer", "email") from exc
    if row is None:
        raise RuntimeError("Failed to create lecturer.")
    return row


async def get_lecturer(email: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM lecturers
        WHERE email = $1
        """,
        email,
    )


async def list_lecturers(
    *,
    department: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM lecturers
        WHERE ($1::text IS NULL OR department = $1)
        ORDER BY email ASC
        LIMIT $2
        OFFSET $3
        """,
        department,
        limit,
        offset,
    )


async def update_lecturer(email: str, fields: dict[str, Any]) -> dict[str, Any] | None:
    assignments: list[str] = []
    args: list[Any] = [email]
    for column, value in fields.items():
        if column not in UPDATABLE_COLUMNS:
            raise ValueError(f"Column is not updatable: {column!r}")
        args.append(list(value) if column == "courses" else value)
        cast = "::text[]" if column == "courses" else ""
        assignments.append(f"{column} = ${len(args)}{cast}")
    assignments.append("updated_at = now()")

    return await db.fetch_one(
        f"""
        UPDATE lecturers
        SET {", ".join(assignments)}
        WHERE email = $1
        RETURNING {_COLUMNS}
        """,
        *args,
    )


async def delete_lecturer(email: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        DELETE FROM lecturers
        WHERE email = $1
        RETURNING {_COLUMNS}
        """,
        email,
    )
