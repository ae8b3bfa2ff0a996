"""Application error taxonomy and the JSON envelope every error renders to.

``AppError`` subclasses are raised by services; ``main`` turns them into
``{"error": {statusCode, code, message, timestamp, path, details?}}``.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

from fastapi import Request, status
from fastapi.responses import ORJSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"

    def __init__(self, message: str = "Bad Request", details: Any = None) -> None:
        super().__init__(message, details)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: Optional[str] = None) -> None:
        if identifier is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} with id {identifier} not found", identifier)


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class DatabaseError(AppError):
    code = "DATABASE_ERROR"

    def __init__(self, message: str = "Database error", details: Any = None) -> None:
        super().__init__(message, details)


class PrescriptionRangeNotFoundError(AppError):
    """No pricing range covers the (normalized) prescription."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "PRESCRIPTION_RANGE_NOT_FOUND"

    def __init__(self, prescription: Any = None) -> None:
        super().__init__(
            "No se encontró una tabla de precios que cubra esta prescripción",
            prescription,
        )


def error_envelope(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any = None,
) -> ORJSONResponse:
    body: Dict[str, Any] = {
        "statusCode": status_code,
        "code": code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
    }
    if details is not None:
        body["details"] = details
    if status_code >= 500:
        logger.error("Server error %s %s at %s: %s", status_code, code, request.url.path, message)
    else:
        logger.warning("Client error %s %s at %s: %s", status_code, code, request.url.path, message)
    return ORJSONResponse(status_code=status_code, content={"error": body})

