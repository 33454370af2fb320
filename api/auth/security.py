"""
Auth security helpers.

Only access-token verification is served over HTTP. `build_access_token()`
mints tokens with the same claims for operators' scripts and the test suite.
"""

from __future__ import annotations

import os
import time
from typing import Any

import jwt

ROLES = ("admin", "student")


class AuthSecurityError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return os.environ.get("JWT_SECRET", "dev-change-this-secret").strip() or "dev-change-this-secret"


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def access_token_expire_minutes() -> int:
    return _env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def now_epoch_s() -> int:
    return int(time.time())


def normalize_role(role: str | None) -> str:
    value = (role or "").strip().lower()
    if value not in ROLES:
        raise AuthSecurityError("Token carries an unknown role.")
    return value


def build_access_token(*, subject: str, role: str, expires_in_s: int | None = None) -> str:
    issued_at = now_epoch_s()
    ttl = expires_in_s if expires_in_s is not None else access_token_expire_minutes() * 60

    payload = {
        "sub": str(subject),
        "role": normalize_role(role),
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    return payload
