"""
Auth business logic: turn a bearer token into a caller identity.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import schemas, security

logger = logging.getLogger(__name__)


def get_identity_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
        role = security.normalize_role(payload.get("role"))
    except security.AuthSecurityError as exc:
        logger.info("auth_rejected reason=%s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token subject.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {"subject": subject, "role": role}


def ensure_admin(identity: dict) -> dict:
    if identity.get("role") != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied: Admins only.",
        )
    return identity


def me(identity: dict) -> schemas.IdentityResponse:
    return schemas.IdentityResponse(
        subject=identity["subject"],
        role=identity["role"],
        is_admin=identity["role"] == "admin",
    )
