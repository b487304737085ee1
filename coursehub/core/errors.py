"""Domain error taxonomy.

Services raise these; the exception handlers registered in
coursehub.main turn them into the `{"ok": false, "kind", "message"}`
envelope with the matching HTTP status.  Nothing below the service layer
should leak a driver exception to the transport: repositories translate
store failures into DuplicateKeyError or InternalError.
"""

from __future__ import annotations


class CourseHubError(Exception):
    kind = "internal"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CourseHubError):
    """Missing or out-of-range input.  No side effect was performed."""

    kind = "validation"
    status_code = 400


class AuthError(CourseHubError):
    """Actor lacks the required role or ownership."""

    kind = "auth"
    status_code = 403


class InvalidCredentialsError(AuthError):
    status_code = 401

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class NotFoundError(CourseHubError):
    kind = "not_found"
    status_code = 404


class ConflictError(CourseHubError):
    """A uniqueness invariant would be violated."""

    kind = "conflict"
    status_code = 409


class InternalError(CourseHubError):
    """Store or hashing failure.  The message is always opaque."""

    kind = "internal"
    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


class DuplicateKeyError(ValueError):
    """Raised by a repository when a unique key rejects a write."""


def require_fields(**fields: object) -> None:
    """Raise ValidationError naming every blank or missing field."""
    missing = [
        name
        for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
