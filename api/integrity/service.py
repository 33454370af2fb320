"""
Reference reconciliation.

Course deletion does not cascade: student/lecturer course lists and grades
may keep pointing at courses that are gone. `reconcile()` is the explicit
cleanup step for that drift.
"""

from __future__ import annotations

import logging

from . import repository

logger = logging.getLogger(__name__)


async def reconcile(*, prune_grades: bool = False) -> dict:
    students = await repository.prune_student_course_refs()
    lecturers = await repository.prune_lecturer_course_refs()
    orphaned = await repository.list_orphaned_grades()

    removed = 0
    if prune_grades and orphaned:
        removed = await repository.delete_orphaned_grades()

    logger.info(
        "reconcile_complete students=%s lecturers=%s orphaned_grades=%s removed_grades=%s",
        len(students),
        len(lecturers),
        len(orphaned),
        removed,
    )
    return {
        "students_updated": students,
        "lecturers_updated": lecturers,
        "orphaned_grades": [
            {
                "id": int(row["id"]),
                "student": row["student_id"],
                "course": row["course_code"],
                "grade": row["grade"],
            }
            for row in orphaned
        ],
        "grades_removed": removed,
    }
