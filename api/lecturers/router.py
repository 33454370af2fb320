"""
Lecturer API endpoints. Lecturers are addressed by email.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query, status

from auth import dependencies as auth_dependencies

from . import service

router = APIRouter()


@router.post("/lecturers", status_code=status.HTTP_201_CREATED)
async def create_lecturer(
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_lecturer(payload)


@router.get("/lecturers")
async def list_lecturers(
    department: str | None = Query(default=None, max_length=40),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    lecturers = await service.list_lecturers(department=department, limit=limit, offset=offset)
    return {
        "lecturers": lecturers,
        "limit": limit,
        "offset": offset,
        "count": len(lecturers),
    }


@router.get("/lecturers/{email}")
async def get_lecturer(
    email: str,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_lecturer(email)


@router.patch("/lecturers/{email}")
async def patch_lecturer(
    email: str,
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.patch_lecturer(email, payload)


@router.delete("/lecturers/{email}")
async def delete_lecturer(
    email: str,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_lecturer(email)
