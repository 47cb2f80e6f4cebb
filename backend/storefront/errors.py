# backend/storefront/errors.py
"""
Error taxonomy.

Every error carries the HTTP status it is surfaced with; the handlers in
main.py render them as {"success": false, "message": ...}.
"""

from fastapi import status


class StorefrontError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Malformed input rejected before it reaches a service."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND


class CapacityError(StorefrontError):
    """Pickup slot has no remaining capacity for the requested date."""
    status_code = status.HTTP_409_CONFLICT


class StorageError(StorefrontError):
    """Read or write of a persisted document failed."""


class CorruptStateError(StorageError):
    """A document exists but cannot be parsed or fails its schema."""


class ExternalServiceError(StorefrontError):
    status_code = status.HTTP_502_BAD_GATEWAY


def format_validation_errors(errors: list[dict]) -> str:
    """Flatten pydantic error dicts into one human-readable line."""
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "Invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"
