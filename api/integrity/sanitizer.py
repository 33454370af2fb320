"""
Update payload sanitizer.

Owns the identity-immutability policy for every entity and brings string
fields with a canonical form into that form. Type and enum conformance is not
checked here; the feature schemas and the table constraints do that next.
"""

from __future__ import annotations

from typing import Any, Callable

from core import errors

DEPARTMENTS = ("Cs", "Mathematics", "Science", "Humanities", "Engineering")

IDENTITY_FIELDS: dict[str, tuple[str, ...]] = {
    "course": ("code",),
    "student": ("student_id",),
    "lecturer": ("email",),
    "grade": ("student", "course"),
}


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _upper(value: Any) -> Any:
    return value.strip().upper() if isinstance(value, str) else value


def _email(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def canonical_department(value: Any) -> Any:
    """
    "cs" -> "Cs", "MATHEMATICS" -> "Mathematics". Non-strings pass through.
    """
    if not isinstance(value, str):
        return value
    word = value.strip()
    return word[:1].upper() + word[1:].lower()


def _course_codes(value: Any) -> Any:
    if not isinstance(value, list):
        return value
    return [_upper(item) for item in value]


_NORMALIZERS: dict[str, dict[str, Callable[[Any], Any]]] = {
    "course": {"title": _strip},
    "student": {"name": _strip, "email": _email, "courses": _course_codes},
    "lecturer": {"name": _strip, "department": canonical_department, "courses": _course_codes},
    "grade": {"grade": _strip},
}

_IDENTITY_NORMALIZERS: dict[str, Callable[[Any], Any]] = {
    "code": _upper,
    "student_id": _strip,
    "email": _email,
}


def _check_kind(kind: str) -> None:
    if kind not in IDENTITY_FIELDS:
        raise ValueError(f"Unknown entity kind: {kind!r}")


def _apply_normalizers(kind: str, payload: dict[str, Any]) -> dict[str, Any]:
    clean = dict(payload)
    for field, normalizer in _NORMALIZERS[kind].items():
        if field in clean:
            clean[field] = normalizer(clean[field])
    return clean


def sanitize(kind: str, payload: dict[str, Any]) -> dict[str, Any]:
    """
    Clean an update payload for `kind`.

    Raises `ImmutableFieldMutationAttempt` when the payload names an identity
    field at all (a null value counts). Unknown fields are left in place.
    """
    _check_kind(kind)
    for field in IDENTITY_FIELDS[kind]:
        if field in payload:
            raise errors.ImmutableFieldMutationAttempt(kind, field)
    return _apply_normalizers(kind, payload)


def normalize(kind: str, payload: dict[str, Any]) -> dict[str, Any]:
    """
    Creation-time counterpart of `sanitize()`: identity fields are allowed
    and canonicalized too.
    """
    _check_kind(kind)
    clean = _apply_normalizers(kind, payload)
    for field in IDENTITY_FIELDS[kind]:
        if field in clean and field in _IDENTITY_NORMALIZERS:
            clean[field] = _IDENTITY_NORMALIZERS[field](clean[field])
    return clean
