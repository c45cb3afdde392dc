"""
Domain errors raised by the services.

Each error carries one human-readable message and the HTTP status it is
rendered with. Services raise them and never swallow them; the handlers
registered on the app turn them into ``{"detail": message}`` responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class FamilyError(Exception):
    """Base class for every error surfaced by the family services."""

    status_code = 400
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"detail": self.message}
        if self.retryable:
            payload["retryable"] = True
        return payload


class AuthError(FamilyError):
    """No authenticated caller."""

    status_code = 401


class AuthorizationError(FamilyError):
    """Caller is not entitled to act on this invitation or family."""

    status_code = 403


class NotFoundError(FamilyError):
    status_code = 404


class InvalidStateError(FamilyError):
    """The referenced records exist but are in a state that forbids the operation."""

    status_code = 409


class ConflictError(FamilyError):
    """A concurrent transaction touched the same records; safe to retry."""

    status_code = 409
    retryable = True


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FamilyError)
    async def handle_family_error(request: Request, exc: FamilyError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
