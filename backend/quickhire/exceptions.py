"""Domain-level exception hierarchy."""

from __future__ import annotations


class QuickHireError(Exception):
    """Base exception for service-layer errors.

    ``message`` is safe to show to API clients.
    """

    status_code = 400

    def __init__(self, message: str = "Request failed.") -> None:
        super().__init__(message)
        self.message = message


class PayloadValidationError(QuickHireError):
    """Raised when a write payload fails field validation."""

    def __init__(self, message: str, errors: list[str], fields: dict[str, str]) -> None:
        super().__init__(message)
        self.errors = errors
        self.fields = fields


class InvalidJobIdError(QuickHireError):
    """Raised when a job identifier is not a well-formed positive integer."""

    def __init__(self, message: str = "Invalid job id.") -> None:
        super().__init__(message)


class InvalidReferenceError(QuickHireError):
    """Raised when a payload references another entity with a malformed id."""


class JobNotFoundError(QuickHireError):
    """Raised when a requested job does not exist."""

    status_code = 404

    def __init__(self, message: str = "Job not found.") -> None:
        super().__init__(message)


class AdminAccessRequired(QuickHireError):
    """Raised when a write endpoint is called without valid admin credentials."""

    status_code = 401

    def __init__(self, message: str = "Admin access required.") -> None:
        super().__init__(message)


class StoreUnavailableError(QuickHireError):
    """Raised when the relational store cannot be reached.

    Distinct from an empty result: callers must never read this as "no rows".
    """

    status_code = 500

    def __init__(self, message: str = "Internal server error.") -> None:
        super().__init__(message)
