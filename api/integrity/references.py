"""
Reference validation.

A reference is the identity key of another entity:
- course   -> course code (case-insensitive, stored uppercase)
- student  -> student id
- lecturer -> email (case-insensitive, stored lowercase)

`exists()` never raises for a badly shaped identifier; it is simply not
found. `require()` is the variant services use before a dependent write:
it tells "malformed" apart from "missing".
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from core import errors

from . import repository

COURSE = "course"
STUDENT = "student"
LECTURER = "lecturer"

_PATTERNS = {
    COURSE: re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]{0,31}$"),
    STUDENT: re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,63}$"),
    LECTURER: re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$"),
}


def normalize_identifier(kind: str, identifier: Any) -> str | None:
    """
    Return the canonical key for `identifier`, or None when it has the wrong
    shape for `kind`'s key.
    """
    if kind not in _PATTERNS:
        raise ValueError(f"Unknown reference kind: {kind!r}")
    if not isinstance(identifier, str):
        return None

    value = identifier.strip()
    if not _PATTERNS[kind].match(value):
        return None

    if kind == COURSE:
        return value.upper()
    if kind == LECTURER:
        return value.lower()
    return value


def require_format(kind: str, identifier: Any) -> str:
    key = normalize_identifier(kind, identifier)
    if key is None:
        raise errors.InvalidIdentifierFormat(kind)
    return key


async def exists(kind: str, identifier: Any) -> bool:
    key = normalize_identifier(kind, identifier)
    if key is None:
        return False
    return await repository.reference_exists(kind, key)


async def require(kind: str, identifier: Any) -> str:
    key = require_format(kind, identifier)
    if not await repository.reference_exists(kind, key):
        raise errors.NotFound(kind, f"Referenced {kind} not found.", key=key)
    return key


async def require_all(kind: str, identifiers: Iterable[Any]) -> list[str]:
    """
    Validate a list of references with a single lookup.
    Order and duplicates of the input are preserved in the result.
    """
    keys = [require_format(kind, identifier) for identifier in identifiers]
    if not keys:
        return []

    found = await repository.existing_references(kind, sorted(set(keys)))
    missing = sorted({key for key in keys if key not in found})
    if missing:
        raise errors.NotFound(kind, f"Referenced {kind} not found.", keys=missing)
    return keys
