"""
Error Hierarchy
===============
Typed exceptions for every failure a request can end in. Routers and
services raise these; the global handlers in ``app.error_handlers`` turn
them into ``{"error": <message>, "code": <code>}`` responses.

Store failures are always reported as ``StoreError`` with a generic
message so database details never reach the client.
"""

from __future__ import annotations

from typing import Optional


class FitTrackError(Exception):
    """Base class for all errors surfaced to API callers."""

    http_status: int = 500
    code: str = "internal_error"
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None) -> None:
        self.message = message or self.default_message
        if code:
            self.code = code
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {"error": self.message, "code": self.code}


class InvalidArgument(FitTrackError):
    """Malformed id, missing required field, non-numeric duration."""

    http_status = 400
    code = "invalid_argument"
    default_message = "Invalid request"


class Unauthorized(FitTrackError):
    """No session identity on the request."""

    http_status = 401
    code = "unauthorized"
    default_message = "Unauthorized"


class Forbidden(FitTrackError):
    """Authenticated, but not the owner and not an admin."""

    http_status = 403
    code = "forbidden"
    default_message = "Forbidden"


class NotFound(FitTrackError):
    http_status = 404
    code = "not_found"
    default_message = "Not found"


class Conflict(FitTrackError):
    # Duplicate registrations are reported as a plain 400.
    http_status = 400
    code = "conflict"
    default_message = "Already exists"


class StoreError(FitTrackError):
    """Any Supabase / PostgREST failure not classified above."""

    http_status = 500
    code = "db_error"
    default_message = "Database error"
