"""
Course API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query, status

from auth import dependencies as auth_dependencies

from . import service

router = APIRouter()


@router.post("/courses", status_code=status.HTTP_201_CREATED)
async def create_course(
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_course(payload)


@router.get("/courses")
async def list_courses(
    credits: int | None = Query(default=None, ge=0),
    title: str | None = Query(default=None, max_length=200),
    sort_by: str | None = Query(default=None, alias="sortBy", max_length=40),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.list_courses(
        credits=credits,
        title=title,
        sort_by=sort_by,
        limit=limit,
        offset=offset,
    )


@router.get("/courses/{code}")
async def get_course(
    code: str,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_course(code)


@router.put("/courses/{code}")
async def replace_course(
    code: str,
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    """
    Full update: `title` is required, `credits` is reset when omitted.
    """
    return await service.replace_course(code, payload)


@router.patch("/courses/{code}")
async def patch_course(
    code: str,
    payload: dict = Body(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.patch_course(code, payload)


@router.delete("/courses/{code}")
async def delete_course(
    code: str,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_course(code)
