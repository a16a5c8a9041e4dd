"""
In-memory stand-ins for the psycopg pool, connection and cursor.

Each ``execute`` pops the next queued result set (a list of rows) or the next
queued error, and records ``(query, params)`` so tests can assert on what the
gateway sent without a database.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, List, Optional, Tuple

import pytest

from person_gateway.gateway import PersonGateway

FIXED_NOW = datetime(2024, 5, 17, 12, 30, tzinfo=timezone.utc)


class FakeCursor:
    def __init__(self, pool: "FakePool", row_factory: Any = None) -> None:
        self._pool = pool
        self.row_factory = row_factory
        self._rows: List[Any] = []

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb

    def execute(self, query: Any, params: Any = None) -> "FakeCursor":
        self._pool.executed.append((query, params))
        if self._pool.errors:
            raise self._pool.errors.pop(0)
        self._rows = list(self._pool.results.pop(0)) if self._pool.results else []
        return self

    def fetchone(self) -> Optional[Any]:
        return self._rows[0] if self._rows else None

    def fetchall(self) -> List[Any]:
        return list(self._rows)


class FakeTransaction:
    def __init__(self, pool: "FakePool") -> None:
        self._pool = pool

    def __enter__(self) -> "FakeTransaction":
        self._pool.transactions += 1
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        del exc, tb
        if exc_type is None:
            self._pool.commits += 1
        else:
            self._pool.rollbacks += 1
        return False


class FakeConnection:
    def __init__(self, pool: "FakePool") -> None:
        self._pool = pool

    def cursor(self, *args: Any, **kwargs: Any) -> FakeCursor:
        del args
        return FakeCursor(self._pool, row_factory=kwargs.get("row_factory"))

    def transaction(self) -> FakeTransaction:
        return FakeTransaction(self._pool)


class FakePool:
    def __init__(self) -> None:
        self.results: List[List[Any]] = []
        self.errors: List[Exception] = []
        self.connect_error: Optional[Exception] = None
        self.executed: List[Tuple[Any, Any]] = []
        self.borrowed = 0
        self.transactions = 0
        self.commits = 0
        self.rollbacks = 0

    def queue(self, *result_sets: List[Any]) -> "FakePool":
        self.results.extend(list(rows) for rows in result_sets)
        return self

    @contextmanager
    def connection(self) -> Iterator[FakeConnection]:
        if self.connect_error is not None:
            raise self.connect_error
        self.borrowed += 1
        yield FakeConnection(self)


def person_row(
    person_id: int,
    name: str,
    lastname: str,
    language: Optional[str] = None,
    created_at: Optional[datetime] = FIXED_NOW,
    updated_at: Optional[datetime] = None,
) -> dict:
    """A dict row shaped like the gateway's person SELECT list."""
    return {
        "id": person_id,
        "name": name,
        "lastname": lastname,
        "programming_language": language,
        "created_at": created_at,
        "updated_at": updated_at,
    }


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool()


@pytest.fixture
def fake_gateway(fake_pool: FakePool) -> PersonGateway:
    return PersonGateway(pool=fake_pool, clock=lambda: FIXED_NOW)  # type: ignore[arg-type]


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_row():
    return person_row
