"""Structured errors returned by the callable endpoints."""

from enum import Enum
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse


class ErrorKind(str, Enum):
    """Error kinds surfaced to callers. Values are part of the wire contract."""

    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_DENIED = "permission-denied"
    INVALID_ARGUMENT = "invalid-argument"
    NOT_FOUND = "not-found"
    INTERNAL = "internal"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class CallableError(Exception):
    """Raised by a callable operation; carries a kind, a short user-facing message and optional details."""

    def __init__(self, kind: ErrorKind, message: str, details: Any = None) -> None:
        self.kind = kind
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return {"error": body}


async def callable_error_handler(_request: Request, exc: CallableError) -> JSONResponse:
    """Render CallableError as {"error": {"kind", "message", "details"}} with a matching status code."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHENTICATED else None
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict(), headers=headers)
