"""
Student API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query, status

from auth import dependencies as auth_dependencies

from . import service

router = APIRouter()


@router.post("/students", status_code=status.HTTP_201_CREATED)
async def create_student(
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_student(payload)


@router.get("/students")
async def list_students(
    year: int | None = Query(default=None, ge=1),
    course: str | None = Query(default=None, max_length=32),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    students = await service.list_students(year=year, course=course, limit=limit, offset=offset)
    return {
        "students": students,
        "limit": limit,
        "offset": offset,
        "count": len(students),
    }


@router.get("/students/{student_id}")
async def get_student(
    student_id: str,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_student(student_id)


@router.put("/students/{student_id}")
async def replace_student(
    student_id: str,
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.replace_student(student_id, payload)


@router.patch("/students/{student_id}")
async def patch_student(
    student_id: str,
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.patch_student(student_id, payload)


@router.delete("/students/{student_id}")
async def delete_student(
    student_id: str,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_student(student_id)
