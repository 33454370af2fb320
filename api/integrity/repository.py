"""
Integrity persistence: reference lookups and reconciliation SQL.
"""

from __future__ import annotations

from typing import Any

from core import db

_EXISTS_SQL = {
    "course": "SELECT 1 AS ok FROM courses WHERE code = $1 LIMIT 1",
    "student": "SELECT 1 AS ok FROM students WHERE student_id = $1 LIMIT 1",
    "lecturer": "SELECT 1 AS ok FROM lecturers WHERE email = $1 LIMIT 1",
}

_EXISTING_KEYS_SQL = {
    "course": "SELECT code AS key FROM courses WHERE code = ANY($1::text[])",
    "student": "SELECT student_id AS key FROM students WHERE student_id = ANY($1::text[])",
    "lecturer": "SELECT email AS key FROM lecturers WHERE email = ANY($1::text[])",
}


async def reference_exists(kind: str, key: str) -> bool:
    row = await db.fetch_one(_EXISTS_SQL[kind], key)
    return row is not None


async def existing_references(kind: str, keys: list[str]) -> set[str]:
    if not keys:
        return set()
    rows = await db.fetch_all(_EXISTING_KEYS_SQL[kind], list(keys))
    return {str(row["key"]) for row in rows}


async def prune_student_course_refs() -> list[str]:
    """
    Drop course codes that no longer exist from every student's list.
    Order of the remaining entries is kept. Returns touched student ids.
    """
    rows = await db.fetch_all(
        """
        UPDATE students s
        SET courses = ARRAY(
                SELECT u.code
                FROM unnest(s.courses) WITH ORDINALITY AS u(code, ord)
                WHERE EXISTS (SELECT 1 FROM courses c WHERE c.code = u.code)
                ORDER BY u.ord
            ),
            updated_at = now()
        WHERE EXISTS (
            SELECT 1
            FROM unnest(s.courses) AS x(code)
            WHERE NOT EXISTS (SELECT 1 FROM courses c WHERE c.code = x.code)
        )
        RETURNING s.student_id
        """
    )
    return [str(row["student_id"]) for row in rows]


async def prune_lecturer_course_refs() -> list[str]:
    rows = await db.fetch_all(
        """
        UPDATE lecturers l
        SET courses = ARRAY(
                SELECT u.code
                FROM unnest(l.courses) WITH ORDINALITY AS u(code, ord)
                WHERE EXISTS (SELECT 1 FROM courses c WHERE c.code = u.code)
                ORDER BY u.ord
            ),
            updated_at = now()
        WHERE EXISTS (
            SELECT 1
            FROM unnest(l.courses) AS x(code)
            WHERE NOT EXISTS (SELECT 1 FROM courses c WHERE c.code = x.code)
        )
        RETURNING l.email
        """
    )
    return [str(row["email"]) for row in rows]


_ORPHANED_GRADES_WHERE = """
    NOT EXISTS (SELECT 1 FROM students s WHERE s.student_id = g.student_id)
    OR (
        g.course_code IS NOT NULL
        AND NOT EXISTS (SELECT 1 FROM courses c WHERE c.code = g.course_code)
    )
"""


async def list_orphaned_grades() -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT g.id, g.student_id, g.course_code, g.grade
        FROM grades g
        WHERE {_ORPHANED_GRADES_WHERE}
        ORDER BY g.id
        """
    )


async def delete_orphaned_grades() -> int:
    rows = await db.fetch_all(
        f"""
        DELETE FROM grades g
        WHERE {_ORPHANED_GRADES_WHERE}
        RETURNING g.id
        """
    )
    return len(rows)
