"""
Domain errors for the submission portal.

Every error carries an HTTP status and a machine-readable code so the API layer
can render it as `{"detail": {"error": <code>, "message": <text>}}`.
"""

from __future__ import annotations


class PortalError(Exception):
    """Base class for all portal failures."""

    status_code = 500
    code = "portal_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"error": self.code, "message": self.message}


class ValidationError(PortalError):
    """Malformed or missing input, rejected before any store mutation."""

    status_code = 400
    code = "validation_error"


class Conflict(PortalError):
    status_code = 400
    code = "conflict"


class NotFound(PortalError):
    """Unknown submission, track, artwork or FAQ."""

    status_code = 404
    code = "not_found"


class OutOfRange(NotFound):
    """Track index outside the submission's current track list."""

    code = "out_of_range"


class PermissionDenied(PortalError):
    status_code = 403
    code = "permission_denied"


class InvalidStateTransition(PortalError):
    """A status change the submission lifecycle does not allow."""

    status_code = 409
    code = "invalid_state_transition"


class InvalidStatus(InvalidStateTransition):
    """Requested status is not one of the terminal review statuses."""

    status_code = 400
    code = "invalid_status"
