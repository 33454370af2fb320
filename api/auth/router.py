"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from . import dependencies, schemas, service

router = APIRouter()


@router.get("/auth/me", response_model=schemas.IdentityResponse)
async def read_me(current_user: dict = Depends(dependencies.get_current_user)) -> schemas.IdentityResponse:
    return service.me(current_user)
