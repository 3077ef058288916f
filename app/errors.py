# app/errors.py
"""Error taxonomy and the single error translator.

Every failure that reaches a caller is an ``AppError``: one exception type
tagged with an ``ErrorKind``. Code that decides how to respond switches on
``kind``, not on the Python type.

``translate_error`` normalizes anything raised into an ``AppError`` and
``error_response`` is the only function that writes an error response body.
"""

import logging
import traceback
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    INTERNAL = "internal"


_DEFAULT_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_DEFAULT_MESSAGE = {
    ErrorKind.NOT_FOUND: "Not Found",
    ErrorKind.VALIDATION: "Validation Error",
    ErrorKind.UNAUTHORIZED: "Unauthorized",
    ErrorKind.INTERNAL: "Internal Server Error",
}

_KIND_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: ErrorKind.VALIDATION,
    status.HTTP_401_UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
    422: ErrorKind.VALIDATION,
}


class AppError(Exception):
    """Application error carrying a kind, an HTTP status and optional details."""

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Any = None,
        cause: Optional[BaseException] = None,
    ):
        message = message or _DEFAULT_MESSAGE[kind]
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code or _DEFAULT_STATUS[kind]
        self.details = details
        self.cause = cause

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.value!r}, status_code={self.status_code}, message={self.message!r})"

    @classmethod
    def not_found(cls, message: str = "Not Found", details: Any = None) -> "AppError":
        return cls(ErrorKind.NOT_FOUND, message, details=details)

    @classmethod
    def validation(cls, message: str = "Validation Error", details: Any = None) -> "AppError":
        # details mirror the message unless the caller has something richer
        return cls(ErrorKind.VALIDATION, message, details=message if details is None else details)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized", details: Any = None) -> "AppError":
        return cls(ErrorKind.UNAUTHORIZED, message, details=details)

    @classmethod
    def internal(
        cls,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> "AppError":
        return cls(ErrorKind.INTERNAL, message, status_code=status_code, cause=cause)

    def stack(self) -> str:
        source = self.cause or self
        return "".join(traceback.format_exception(type(source), source, source.__traceback__))

    def to_response(self, include_stack: bool = False) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"status": self.status_code, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        if include_stack:
            payload["stack"] = self.stack()
        return payload


def translate_error(exc: BaseException) -> AppError:
    """Normalize any exception into an AppError."""
    if isinstance(exc, AppError):
        return exc

    if isinstance(exc, RequestValidationError):
        messages = [
            f"{'.'.join(str(loc) for loc in e.get('loc', ()))}: {e.get('msg')}"
            for e in exc.errors()
        ]
        return AppError(ErrorKind.VALIDATION, "; ".join(messages) or None, details=messages, cause=exc)

    if isinstance(exc, StarletteHTTPException):
        kind = _KIND_BY_STATUS.get(exc.status_code, ErrorKind.INTERNAL)
        return AppError(kind, str(exc.detail) if exc.detail else None, status_code=exc.status_code, cause=exc)

    logger.error("Unhandled error: %s", exc, exc_info=(type(exc), exc, exc.__traceback__))
    return AppError.internal(str(exc) or None, cause=exc)


def error_response(err: AppError, include_stack: bool = False) -> JSONResponse:
    if err.status_code >= 500:
        logger.error(
            "Request failed: %s", err.message,
            extra={"status_code": err.status_code, "error_kind": err.kind.value},
        )
    else:
        logger.warning(
            "Request rejected: %s", err.message,
            extra={"status_code": err.status_code, "error_kind": err.kind.value},
        )
    return JSONResponse(status_code=err.status_code, content=err.to_response(include_stack))
