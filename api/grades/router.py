"""
Grade API endpoints.

Grades are addressed by student id and course code, never by row id.
`/no-course` routes address the single course-less grade of a student.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query, status

from auth import dependencies as auth_dependencies

from . import service

router = APIRouter()


@router.post("/grades", status_code=status.HTTP_201_CREATED)
async def create_grade(
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_grade(payload)


@router.get("/grades")
async def list_grades(
    student: str | None = Query(default=None, max_length=64),
    course: str | None = Query(default=None, max_length=32),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    grades = await service.list_grades(student=student, course=course)
    return {"grades": grades, "count": len(grades)}


@router.get("/grades/courses/{code}")
async def list_course_grades(
    code: str,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.list_course_grades(code)


@router.get("/grades/student/{student_id}")
async def list_student_grades(
    student_id: str,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    grades = await service.list_student_grades(student_id)
    return {"grades": grades, "count": len(grades)}


@router.get("/grades/student/{student_id}/course/{code}")
async def get_grade(
    student_id: str,
    code: str,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_grade(student_id, code)


@router.put("/grades/student/{student_id}/course/{code}")
async def update_grade(
    student_id: str,
    code: str,
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_grade(student_id, code, payload)


@router.delete("/grades/student/{student_id}/course/{code}")
async def delete_grade(
    student_id: str,
    code: str,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_grade(student_id, code)


@router.get("/grades/student/{student_id}/no-course")
async def get_course_less_grade(
    student_id: str,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_grade(student_id, None)


@router.put("/grades/student/{student_id}/no-course")
async def update_course_less_grade(
    student_id: str,
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_grade(student_id, None, payload)


@router.delete("/grades/student/{student_id}/no-course")
async def delete_course_less_grade(
    student_id: str,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_grade(student_id, None)
