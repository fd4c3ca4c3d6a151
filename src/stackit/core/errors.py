"""Error taxonomy shared by the service layer and the HTTP handlers.

Services raise these exceptions; ``stackit.main`` translates them into JSON
responses using the ``status_code`` carried by each class.
"""

from __future__ import annotations


class StackItError(Exception):
    """Base exception for all domain failures."""

    status_code: int = 500
    default_detail: str = "Internal error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(StackItError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    default_detail = "Not found"


class InvalidArgumentError(StackItError):
    """Raised for malformed values and cross-reference mismatches."""

    status_code = 400
    default_detail = "Invalid argument"


class UnauthorizedError(StackItError):
    """Raised when the caller identity is missing or invalid."""

    status_code = 401
    default_detail = "Authentication required"


class ForbiddenError(StackItError):
    """Raised when an authenticated caller is not permitted to act."""

    status_code = 403
    default_detail = "Not permitted"


class ConflictError(StackItError):
    """Raised on uniqueness violations that cannot be resolved by retrying."""

    status_code = 409
    default_detail = "Conflict"
