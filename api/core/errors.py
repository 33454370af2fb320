"""
Domain errors and their HTTP rendering.

Services raise these; `register_exception_handlers()` turns them into
`{"error": <kind>, "message": <text>, ...}` responses with a stable `kind`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RecordsError(Exception):
    kind = "server_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.kind, "message": self.message, **self.extra}


class MissingField(RecordsError):
    kind = "missing_field"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(fields)}.", fields=list(fields))
        self.fields = list(fields)


class ValidationFailed(RecordsError):
    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message, details=details or [])


class InvalidIdentifierFormat(RecordsError):
    kind = "invalid_identifier_format"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, entity: str) -> None:
        super().__init__(f"Invalid {entity} identifier format.", entity=entity)
        self.entity = entity


class ImmutableFieldMutationAttempt(RecordsError):
    kind = "immutable_field"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, entity: str, field: str) -> None:
        super().__init__(f"{entity.capitalize()} {field} cannot be modified.", entity=entity, field=field)
        self.entity = entity
        self.field = field


class NotFound(RecordsError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, message: str | None = None, **extra: Any) -> None:
        super().__init__(message or f"{entity.capitalize()} not found.", entity=entity, **extra)
        self.entity = entity


class DuplicateAssignment(RecordsError):
    kind = "duplicate_assignment"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, student_id: str, course_code: str | None) -> None:
        super().__init__(
            "Grade for this student and course already exists.",
            student=student_id,
            course=course_code,
        )


class DuplicateKey(RecordsError):
    kind = "duplicate_key"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, entity: str, field: str) -> None:
        super().__init__(f"A {entity} with this {field} already exists.", entity=entity, field=field)
        self.entity = entity
        self.field = field


class StoreUnavailable(RecordsError):
    kind = "store_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def _handle_records_error(request: Request, exc: RecordsError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed method=%s path=%s kind=%s",
            request.method,
            request.url.path,
            exc.kind,
            exc_info=exc,
        )
    else:
        logger.info(
            "request_rejected method=%s path=%s kind=%s message=%s",
            request.method,
            request.url.path,
            exc.kind,
            exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RecordsError, _handle_records_error)
