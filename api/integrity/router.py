"""
Integrity maintenance endpoints (admin only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies

from . import service

router = APIRouter()


@router.post("/integrity/reconcile")
async def reconcile(
    prune_grades: bool = Query(default=False),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    """
    Remove dangling course references from students and lecturers.

    Grades pointing at missing students/courses are reported; they are
    deleted only when `prune_grades=true`.
    """
    return await service.reconcile(prune_grades=prune_grades)
