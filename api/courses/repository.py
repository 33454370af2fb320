"""
Course persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db, errors

_COLUMNS = "id, code, title, credits, created_at, updated_at"

# Column whitelist for dynamic UPDATE / ORDER BY clauses.
UPDATABLE_COLUMNS = ("title", "credits")
SORTABLE_COLUMNS = ("code", "title", "credits", "created_at")


async def insert_course(*, code: str, title: str, credits: int | None) -> dict[str, Any]:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO courses (code, title, credits)
            VALUES ($1, $2, $3)
            RETURNING {_COLUMNS}
            """,
            code,
            title,
            credits,
        )
    except asyncpg.exceptions.UniqueViolationError as exc:
        raise errors.DuplicateKey("course", "code") from exc
    if row is None:
        raise RuntimeError("Failed to create course.")
    return row


async def get_course(code: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM courses
        WHERE code = $1
        """,
        code,
    )


async def get_courses_by_codes(codes: list[str]) -> list[dict[str, Any]]:
    if not codes:
        return []
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM courses
        WHERE code = ANY($1::text[])
        """,
        list(codes),
    )


async def list_courses(
    *,
    credits: int | None = None,
    title: str | None = None,
    sort_by: str = "code",
    descending: bool = False,
    limit: int = 10,
    offset: int = 0,
) -> list[dict[str, Any]]:
    """
    Filtered page of courses. `title` is a case-insensitive substring match.
    """
    if sort_by not in SORTABLE_COLUMNS:
        raise ValueError(f"Unsupported sort column: {sort_by!r}")
    direction = "DESC" if descending else "ASC"
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM courses
        WHERE ($1::int IS NULL OR credits = $1)
          AND ($2::text IS NULL OR strpos(lower(title), lower($2)) > 0)
        ORDER BY {sort_by} {direction}, id ASC
        LIMIT $3
        OFFSET $4
        """,
        credits,
        title,
        limit,
        offset,
    )


async def count_courses(*, credits: int | None = None, title: str | None = None) -> int:
    total = await db.fetch_val(
        """
        SELECT count(*)
        FROM courses
        WHERE ($1::int IS NULL OR credits = $1)
          AND ($2::text IS NULL OR strpos(lower(title), lower($2)) > 0)
        """,
        credits,
        title,
    )
    return int(total or 0)


async def update_course(code: str, fields: dict[str, Any]) -> dict[str, Any] | None:
    """
    Set the given columns on one course. An empty `fields` only bumps
    `updated_at`. Returns None when the course does not exist.
    """
    assignments: list[str] = []
    args: list[Any] = [code]
    for column, value in fields.items():
        if column not in UPDATABLE_COLUMNS:
            raise ValueError(f"Column is not updatable: {column!r}")
        args.append(value)
        assignments.append(f"{column} = ${len(args)}")
    assignments.append("updated_at = now()")

    return await db.fetch_one(
        f"""
        UPDATE courses
        SET {", ".join(assignments)}
        WHERE code = $1
        RETURNING {_COLUMNS}
        """,
        *args,
    )


async def delete_course(code: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        DELETE FROM courses
        WHERE code = $1
        RETURNING {_COLUMNS}
        """,
        code,
    )
