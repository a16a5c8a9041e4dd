"""
Infrastructure package for the person query gateway.

Centralizes database connectivity concerns (DSN, pooling, schema bootstrap).
Keep this layer focused on I/O and resource management, decoupled from
query and operation logic.
"""

from person_gateway.infrastructure.db_factory import (
    PoolManager,
    apply_schema,
    build_dsn,
    get_sync_connection,
    get_sync_pool,
)

__all__ = [
    "PoolManager",
    "apply_schema",
    "build_dsn",
    "get_sync_connection",
    "get_sync_pool",
]
