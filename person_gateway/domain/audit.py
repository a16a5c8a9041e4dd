"""
Pre-commit hooks run by the gateway before a person row is written.

A hook receives the mutable column values about to be written and the
timestamp of the current unit of work. Hooks may adjust the values in place or
raise a GatewayError to abort the write before the store is touched.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Sequence

from person_gateway.errors import ConstraintViolationError

PersistHook = Callable[[Dict[str, Any], datetime], None]

REQUIRED_TEXT_FIELDS = ("name", "lastname")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def require_names(values: Dict[str, Any], now: datetime) -> None:
    """Reject rows whose required text fields are missing or blank."""
    del now
    missing = [
        field
        for field in REQUIRED_TEXT_FIELDS
        if values.get(field) is None or not str(values[field]).strip()
    ]
    if missing:
        raise ConstraintViolationError(f"Required field(s) missing: {', '.join(missing)}")


def stamp_created_at(values: Dict[str, Any], now: datetime) -> None:
    values["created_at"] = now


def stamp_updated_at(values: Dict[str, Any], now: datetime) -> None:
    values["updated_at"] = now


DEFAULT_PRE_INSERT_HOOKS: Sequence[PersistHook] = (require_names, stamp_created_at)
DEFAULT_PRE_UPDATE_HOOKS: Sequence[PersistHook] = (require_names, stamp_updated_at)


def run_hooks(
    hooks: Sequence[PersistHook], values: Dict[str, Any], now: datetime
) -> Dict[str, Any]:
    for hook in hooks:
        hook(values, now)
    return values


__all__ = [
    "DEFAULT_PRE_INSERT_HOOKS",
    "DEFAULT_PRE_UPDATE_HOOKS",
    "PersistHook",
    "require_names",
    "run_hooks",
    "stamp_created_at",
    "stamp_updated_at",
    "utc_now",
]
