"""
Auth API schemas (response models).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class IdentityResponse(BaseModel):
    subject: str
    role: Literal["admin", "student"]
    is_admin: bool
