from __future__ import annotations

import logging
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.INVALID_TRANSITION: 400,
    ErrorKind.STORAGE_UNAVAILABLE: 503,
}

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.UNAUTHENTICATED: "Authentication required",
    ErrorKind.FORBIDDEN: "You do not have access to this resource",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.BAD_REQUEST: "Bad request",
    ErrorKind.INVALID_TRANSITION: "Invalid status transition",
    ErrorKind.STORAGE_UNAVAILABLE: "Storage is unavailable",
}


class ProcedureError(Exception):
    """A denial or failure surfaced to the caller with a machine-readable kind."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


def not_found(message: str | None = None) -> ProcedureError:
    return ProcedureError(ErrorKind.NOT_FOUND, message)


def bad_request(message: str | None = None) -> ProcedureError:
    return ProcedureError(ErrorKind.BAD_REQUEST, message)


def storage_unavailable(message: str | None = None) -> ProcedureError:
    return ProcedureError(ErrorKind.STORAGE_UNAVAILABLE, message)


async def procedure_error_handler(request: Request, exc: ProcedureError) -> JSONResponse:
    if exc.kind is ErrorKind.STORAGE_UNAVAILABLE:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s denied: %s (%s)", request.method, request.url.path, exc.kind.value, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed input as ``BAD_REQUEST`` with per-field details."""
    details = [
        {"field": ".".join(str(loc) for loc in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    error = ProcedureError(ErrorKind.BAD_REQUEST, "Invalid input")
    return JSONResponse(status_code=error.status_code, content={"error": {**error.to_dict(), "details": details}})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProcedureError, procedure_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
