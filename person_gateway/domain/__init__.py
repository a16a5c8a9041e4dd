"""
Domain package for the person query gateway.

Exports the Person record, the read-only projection shapes, the query
vocabulary, and the pre-commit audit hooks.
"""

from person_gateway.domain.audit import (
    DEFAULT_PRE_INSERT_HOOKS,
    DEFAULT_PRE_UPDATE_HOOKS,
    PersistHook,
)
from person_gateway.domain.models import (
    AggregateSummary,
    NameCase,
    NameLength,
    Person,
    PersonField,
    PersonName,
    SortDirection,
    SortKey,
)

__all__ = [
    "AggregateSummary",
    "DEFAULT_PRE_INSERT_HOOKS",
    "DEFAULT_PRE_UPDATE_HOOKS",
    "NameCase",
    "NameLength",
    "PersistHook",
    "Person",
    "PersonField",
    "PersonName",
    "SortDirection",
    "SortKey",
]
