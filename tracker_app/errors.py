"""
Error types for the task tracker service.

Every failure a client can trigger is a ``TrackerError`` subclass carrying
the HTTP status code it maps to.  The API blueprint turns any of them into
the ``{"error": "..."}`` envelope, so stores and the access gate can simply
raise.
"""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for client-visible errors."""

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class MissingFieldError(TrackerError):
    """A required request field was absent or empty."""

    status_code = 400


class InvalidCredentialsError(TrackerError):
    """Login username/password did not match a registered identity."""

    status_code = 400

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AuthRequiredError(TrackerError):
    """No ``Authorization: Bearer <token>`` header was presented."""

    status_code = 401

    def __init__(
        self, message: str = "Access denied. Token required in format: Bearer <token>"
    ):
        super().__init__(message)


class InvalidTokenError(TrackerError):
    """The presented token failed signature, format, or expiry checks."""

    status_code = 401

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TaskNotFoundError(TrackerError):
    """No task with the requested id exists."""

    status_code = 404

    def __init__(self, message: str = "Task not found"):
        super().__init__(message)
