"""Catalog error taxonomy.

Each error carries the HTTP status it maps to and a details mapping that is
merged into the JSON error body next to ``message``.
"""

from typing import Any, Optional


class CatalogError(Exception):
    """Base class for all catalog errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a JSON response body."""
        return {"message": self.message, **self.details}


class InvalidFilter(CatalogError):
    """Malformed or contradictory query parameter."""

    status_code = 400

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(reason)


class InvalidRequest(CatalogError):
    """Malformed request payload or path parameter."""

    status_code = 400


class NotFound(CatalogError):
    """One or more referenced identifiers do not exist."""

    status_code = 404

    def __init__(self, message: str, missing: Optional[list[str]] = None) -> None:
        self.missing = missing or []
        super().__init__(message, {"missing": self.missing} if missing else None)


class SeedingDisabled(CatalogError):
    status_code = 403


class StoreUnavailable(CatalogError):
    """The record store cannot serve requests right now."""

    status_code = 503

    def __init__(
        self, message: str = "Database connection unavailable. Please try again later."
    ) -> None:
        super().__init__(message, {"error": "DATABASE_NOT_CONNECTED"})


class InternalError(CatalogError):
    status_code = 500
