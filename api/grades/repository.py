"""
Grade persistence (raw SQL).

A grade is addressed by its (student_id, course_code) pair; course_code may
be NULL. The `grades_student_course_key` constraint (NULLS NOT DISTINCT) is
what guarantees one grade per pair under concurrent inserts.

Every read/write returns the grade joined with the student's and the
course's display columns. LEFT JOINs keep grades whose references are gone.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db, errors

_GRADE_COLUMNS = "id, student_id, course_code, grade, created_at, updated_at"

_ENRICHED = """
    SELECT
      g.id,
      g.student_id,
      g.course_code,
      g.grade,
      g.created_at,
      g.updated_at,
      s.name AS student_name,
      s.email AS student_email,
      c.title AS course_title
    FROM {source} g
    LEFT JOIN students s ON s.student_id = g.student_id
    LEFT JOIN courses c ON c.code = g.course_code
"""

_PAIR = "student_id = $1 AND course_code IS NOT DISTINCT FROM $2::text"


async def insert_grade(*, student_id: str, course_code: str | None, grade: str) -> dict[str, Any]:
    try:
        row = await db.fetch_one(
            f"""
            WITH changed AS (
              INSERT INTO grades (student_id, course_code, grade)
              VALUES ($1, $2::text, $3)
              RETURNING {_GRADE_COLUMNS}
            )
            {_ENRICHED.format(source="changed")}
            """,
            student_id,
            course_code,
            grade,
        )
    except asyncpg.exceptions.UniqueViolationError as exc:
        raise errors.DuplicateAssignment(student_id, course_code) from exc
    if row is None:
        raise RuntimeError("Failed to create grade.")
    return row


async def get_grade(*, student_id: str, course_code: str | None) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        {_ENRICHED.format(source="grades")}
        WHERE g.student_id = $1
          AND g.course_code IS NOT DISTINCT FROM $2::text
        """,
        student_id,
        course_code,
    )


async def list_grades(
    *,
    student_id: str | None = None,
    course_code: str | None = None,
) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        {_ENRICHED.format(source="grades")}
        WHERE ($1::text IS NULL OR g.student_id = $1)
          AND ($2::text IS NULL OR g.course_code = $2)
        ORDER BY g.student_id ASC, g.course_code ASC NULLS FIRST, g.id ASC
        """,
        student_id,
        course_code,
    )


async def update_grade(*, student_id: str, course_code: str | None, grade: str) -> dict[str, Any] | None:
    """
    Overwrite the value of an existing grade. Only `grade` changes; the
    (student, course) pair is fixed. Returns None when there is no such pair.
    """
    return await db.fetch_one(
        f"""
        WITH changed AS (
          UPDATE grades
          SET grade = $3,
              updated_at = now()
          WHERE {_PAIR}
          RETURNING {_GRADE_COLUMNS}
        )
        {_ENRICHED.format(source="changed")}
        """,
        student_id,
        course_code,
        grade,
    )


async def delete_grade(*, student_id: str, course_code: str | None) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        WITH changed AS (
          DELETE FROM grades
          WHERE {_PAIR}
          RETURNING {_GRADE_COLUMNS}
        )
        {_ENRICHED.format(source="changed")}
        """,
        student_id,
        course_code,
    )
