"""
Database connection factory utilities for the person query gateway.

Provides centralized management of the PostgreSQL connection pool with proper
lifecycle management. The PoolManager singleton ensures the pool is closed on
application exit.

The one-off connection used for bootstrap tasks (schema creation, seeding)
retries transient connection failures using tenacity. The pool used by the
gateway does not retry; callers decide.
"""

from __future__ import annotations

import atexit
import threading
from contextlib import contextmanager
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Generator, Optional, Union

import psycopg
from psycopg import Connection
from psycopg_pool import ConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from person_gateway.config import Settings, get_settings
from person_gateway.utils.logging import get_logger

log = get_logger(__name__)

# Shipped as package data so non-editable installs can bootstrap the table.
DEFAULT_SCHEMA_PATH: Traversable = files("person_gateway") / "db" / "init.sql"


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def _connection_kwargs(settings: Settings) -> dict:
    """Per-connection libpq options applied to every pooled connection."""
    return {"options": f"-c statement_timeout={settings.db_statement_timeout_ms}"}


class PoolManager:
    """
    Thread-safe singleton for managing the database connection pool.

    Handles lifecycle management with automatic cleanup via atexit hook.
    """

    _instance: Optional["PoolManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "PoolManager":
        """Create or return the singleton instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._pool: Optional[ConnectionPool] = None
                atexit.register(cls._instance.close_all)
            return cls._instance

    def get_pool(
        self, min_size: Optional[int] = None, max_size: Optional[int] = None
    ) -> ConnectionPool:
        """
        Get or create the connection pool.

        Parameters
        ----------
        min_size : int | None
            Minimum number of idle connections to keep. Defaults to settings.
        max_size : int | None
            Maximum total connections in the pool. Defaults to settings.

        Returns
        -------
        ConnectionPool
            The managed pool instance.
        """
        with self._lock:
            if self._pool is None:
                settings = get_settings()
                self._pool = ConnectionPool(
                    conninfo=build_dsn(settings),
                    min_size=min_size or settings.db_pool_min_size,
                    max_size=max_size or settings.db_pool_max_size,
                    timeout=settings.db_pool_timeout,
                    kwargs=_connection_kwargs(settings),
                    name="person_gateway",
                    open=True,
                )
                log.info(
                    "Connection pool opened",
                    extra={"db_host": settings.db_host, "db_name": settings.db_name},
                )
            return self._pool

    @contextmanager
    def connection(self) -> Generator[Connection, None, None]:
        """
        Context manager for obtaining a connection from the pool.

        Example
        -------
            manager = PoolManager()
            with manager.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
        """
        pool = self.get_pool()
        with pool.connection() as conn:
            yield conn

    def close_all(self) -> None:
        """
        Close the managed pool and release resources.

        This is called automatically on exit via atexit hook.
        """
        with self._lock:
            if self._pool is not None:
                try:
                    self._pool.close()
                except psycopg.Error:
                    log.warning("Error while closing connection pool", exc_info=True)
                finally:
                    self._pool = None


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.
    Use this for one-off bootstrap operations. The gateway uses the pool.

    Returns
    -------
    Connection
        A new psycopg connection instance.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn or build_dsn())


def get_sync_pool(min_size: Optional[int] = None, max_size: Optional[int] = None) -> ConnectionPool:
    """Get or create the connection pool via PoolManager."""
    return PoolManager().get_pool(min_size=min_size, max_size=max_size)


def apply_schema(
    conn: Connection, schema_path: Union[Path, Traversable] = DEFAULT_SCHEMA_PATH
) -> None:
    """
    Execute the DDL script at ``schema_path`` and commit.

    The script is idempotent (``CREATE ... IF NOT EXISTS``).
    """
    ddl = schema_path.read_text(encoding="utf-8")
    with conn.cursor() as cur:
        cur.execute(ddl)
    conn.commit()
    log.info("Schema applied", extra={"schema_path": str(schema_path)})


__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "PoolManager",
    "apply_schema",
    "build_dsn",
    "get_sync_connection",
    "get_sync_pool",
]
