"""
Exception taxonomy for the person query gateway.

Every error raised by the gateway derives from GatewayError, so callers can
catch the whole family at once. Store-level psycopg exceptions are translated
into these classes at the gateway boundary and chained with ``raise ... from``.

Usage:
    from person_gateway.errors import NotFoundError

    try:
        gateway.delete_by_id(42)
    except NotFoundError:
        ...
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for all gateway errors."""

    default_message = "Gateway error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidArgumentError(GatewayError, ValueError):
    """
    A required parameter is missing, empty, or outside the accepted vocabulary.

    Always raised before any store access is attempted.
    """

    default_message = "Invalid argument"


class NotFoundError(GatewayError, LookupError):
    """
    The operation requires an existing row by id and none exists.

    Only raised by operations that logically need the row (update, delete).
    Plain reads report absence as ``None`` or an empty list instead.
    """

    default_message = "Person not found"

    def __init__(self, message: str | None = None, person_id: int | None = None) -> None:
        if message is None and person_id is not None:
            message = f"No person exists with id={person_id}"
        super().__init__(message)
        self.person_id = person_id


class ConstraintViolationError(GatewayError):
    """A required field is blank, or the store rejected the row (NOT NULL, UNIQUE, ...)."""

    default_message = "Constraint violation"


class StoreUnavailableError(GatewayError, ConnectionError):
    """Connectivity or transport failure talking to the store. Not retried here."""

    default_message = "Store unavailable"


__all__ = [
    "GatewayError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConstraintViolationError",
    "StoreUnavailableError",
]
