"""
Person query gateway - named query operations over a single `persons` table.

This package provides a small data-access layer on PostgreSQL covering the
usual object-relational query patterns:

- CRUD with explicit transactions and pre-commit audit hooks
- Exact, substring and compound lookups
- Multi-key sorting and inclusive range queries
- "Where id in" lookups
- Projections, name concatenation, aggregates and sub-queries

Operations are exposed as PersonGateway methods and, by name, through the
operation registry used by the CLI.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from person_gateway.config import Settings, get_settings
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
from person_gateway.errors import (
    ConstraintViolationError,
    GatewayError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
)
from person_gateway.gateway import PersonGateway
from person_gateway.operations import available_operations, run_operation
from person_gateway.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "AggregateSummary",
    "NameCase",
    "NameLength",
    "Person",
    "PersonField",
    "PersonName",
    "SortDirection",
    "SortKey",
    # Errors
    "ConstraintViolationError",
    "GatewayError",
    "InvalidArgumentError",
    "NotFoundError",
    "StoreUnavailableError",
    # Gateway and operations
    "PersonGateway",
    "available_operations",
    "run_operation",
    # Logging
    "configure_logging",
    "get_logger",
]
