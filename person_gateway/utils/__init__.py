"""
Utilities package for the person query gateway.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of domain-specific logic.
"""

from person_gateway.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
