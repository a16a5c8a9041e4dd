from __future__ import annotations

import psycopg
import pytest
from psycopg import errors as pg_errors
from psycopg_pool import PoolTimeout

from person_gateway.domain.models import Person
from person_gateway.errors import (
    ConstraintViolationError,
    GatewayError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
)
from person_gateway.gateway import queries

EXPECTED_ID = 7


def test_insert_stamps_created_at_and_returns_assigned_id(
    fake_gateway, fake_pool, make_row, fixed_now
) -> None:
    fake_pool.queue([make_row(EXPECTED_ID, "Andres", "Guzman", "Java")])

    created = fake_gateway.insert(
        Person(name="Andres", lastname="Guzman", programming_language="Java")
    )

    assert created.id == EXPECTED_ID
    assert created.name == "Andres"
    assert created.created_at == fixed_now
    query, params = fake_pool.executed[0]
    assert query == queries.INSERT_PERSON
    assert params["created_at"] == fixed_now
    assert params["updated_at"] is None
    assert params["programming_language"] == "Java"
    assert fake_pool.commits == 1
    assert fake_pool.rollbacks == 0


def test_insert_rejects_person_that_already_has_an_id(fake_gateway, fake_pool) -> None:
    with pytest.raises(InvalidArgumentError):
        fake_gateway.insert(Person(id=3, name="Andres", lastname="Guzman"))

    assert fake_pool.borrowed == 0


def test_insert_rejects_none(fake_gateway, fake_pool) -> None:
    with pytest.raises(InvalidArgumentError):
        fake_gateway.insert(None)  # type: ignore[arg-type]

    assert fake_pool.borrowed == 0


def test_insert_with_blank_name_is_a_constraint_violation_before_store_access(
    fake_gateway, fake_pool
) -> None:
    with pytest.raises(ConstraintViolationError, match="name"):
        fake_gateway.insert(Person(name="   ", lastname="Guzman"))

    assert fake_pool.executed == []
    assert fake_pool.borrowed == 0


def test_insert_translates_store_integrity_error_and_rolls_back(fake_gateway, fake_pool) -> None:
    fake_pool.errors.append(pg_errors.NotNullViolation("null value in column \"name\""))

    with pytest.raises(ConstraintViolationError) as excinfo:
        fake_gateway.insert(Person(name="Andres", lastname="Guzman"))

    assert isinstance(excinfo.value.__cause__, psycopg.IntegrityError)
    assert fake_pool.rollbacks == 1
    assert fake_pool.commits == 0


def test_find_by_id_returns_person_or_none(fake_gateway, fake_pool, make_row) -> None:
    fake_pool.queue([make_row(1, "Andres", "Guzman", "Java")], [])

    found = fake_gateway.find_by_id(1)
    missing = fake_gateway.find_by_id(99)

    assert found is not None and found.id == 1
    assert missing is None
    assert fake_pool.executed[0] == (queries.SELECT_BY_ID, {"id": 1})
    assert fake_pool.transactions == 0


@pytest.mark.parametrize("bad_id", [None, 0, -4, "1", 1.5, True])
def test_find_by_id_rejects_malformed_ids_without_store_access(
    fake_gateway, fake_pool, bad_id
) -> None:
    with pytest.raises(InvalidArgumentError):
        fake_gateway.find_by_id(bad_id)

    assert fake_pool.borrowed == 0


def test_update_stamps_updated_at_and_keeps_created_at_out_of_the_write(
    fake_gateway, fake_pool, make_row, fixed_now
) -> None:
    fake_pool.queue([make_row(2, "Barry", "White", "Go", updated_at=fixed_now)])
    person = Person(id=2, name="Barry", lastname="White", programming_language="Go")

    updated = fake_gateway.update(person)

    query, params = fake_pool.executed[0]
    assert query == queries.UPDATE_PERSON
    assert params["id"] == 2
    assert params["updated_at"] == fixed_now
    assert "created_at" not in params
    assert updated.updated_at == fixed_now
    assert fake_pool.commits == 1


def test_update_of_missing_row_raises_not_found_and_rolls_back(fake_gateway, fake_pool) -> None:
    fake_pool.queue([])

    with pytest.raises(NotFoundError) as excinfo:
        fake_gateway.update(Person(id=42, name="Nobody", lastname="Here"))

    assert excinfo.value.person_id == 42
    assert fake_pool.rollbacks == 1


def test_update_requires_an_id(fake_gateway, fake_pool) -> None:
    with pytest.raises(InvalidArgumentError):
        fake_gateway.update(Person(name="New", lastname="Person"))

    assert fake_pool.borrowed == 0


def test_update_programming_language_reads_under_lock_then_writes(
    fake_gateway, fake_pool, make_row, fixed_now
) -> None:
    fake_pool.queue(
        [make_row(3, "Lionel", "Messi", "Kotlin")],
        [make_row(3, "Lionel", "Messi", "Python", updated_at=fixed_now)],
    )

    updated = fake_gateway.update_programming_language(3, "Python")

    (select_query, select_params), (update_query, update_params) = fake_pool.executed
    assert select_query == queries.SELECT_BY_ID_FOR_UPDATE
    assert select_params == {"id": 3}
    assert update_query == queries.UPDATE_PERSON
    assert update_params["programming_language"] == "Python"
    assert update_params["name"] == "Lionel"
    assert update_params["lastname"] == "Messi"
    assert updated.programming_language == "Python"
    assert fake_pool.transactions == 1
    assert fake_pool.commits == 1


def test_update_programming_language_of_missing_row_raises_not_found(
    fake_gateway, fake_pool
) -> None:
    fake_pool.queue([])

    with pytest.raises(NotFoundError):
        fake_gateway.update_programming_language(5, "Python")

    assert len(fake_pool.executed) == 1
    assert fake_pool.rollbacks == 1


def test_delete_by_id_returns_removed_person(fake_gateway, fake_pool, make_row) -> None:
    fake_pool.queue([make_row(4, "Leo", "Marin", "Java")])

    deleted = fake_gateway.delete_by_id(4)

    assert deleted.id == 4
    assert fake_pool.executed[0] == (queries.DELETE_PERSON, {"id": 4})
    assert fake_pool.commits == 1


def test_delete_by_id_reports_not_found(fake_gateway, fake_pool) -> None:
    fake_pool.queue([])

    with pytest.raises(NotFoundError, match="id=9"):
        fake_gateway.delete_by_id(9)

    assert fake_pool.rollbacks == 1


def test_connection_failure_surfaces_as_store_unavailable(fake_gateway, fake_pool) -> None:
    fake_pool.errors.append(psycopg.OperationalError("server closed the connection unexpectedly"))

    with pytest.raises(StoreUnavailableError) as excinfo:
        fake_gateway.list_all()

    assert isinstance(excinfo.value.__cause__, psycopg.OperationalError)
    # Not retried by the gateway.
    assert len(fake_pool.executed) == 1


def test_pool_timeout_surfaces_as_store_unavailable(fake_gateway, fake_pool) -> None:
    fake_pool.connect_error = PoolTimeout("couldn't get a connection after 30.00 sec")

    with pytest.raises(StoreUnavailableError):
        fake_gateway.count_all()

    assert fake_pool.executed == []


def test_custom_pre_insert_hooks_run_in_order(fake_pool, make_row, fixed_now) -> None:
    from person_gateway.gateway import PersonGateway

    calls = []

    def first(values, now):
        calls.append(("first", now))
        values["programming_language"] = "Rust"

    def second(values, now):
        calls.append(("second", values["programming_language"]))

    gateway = PersonGateway(
        pool=fake_pool,  # type: ignore[arg-type]
        pre_insert_hooks=(first, second),
        clock=lambda: fixed_now,
    )
    fake_pool.queue([make_row(1, "Ana", "Lopez", "Rust")])

    gateway.insert(Person(name="Ana", lastname="Lopez"))

    assert calls == [("first", fixed_now), ("second", "Rust")]
    assert fake_pool.executed[0][1]["programming_language"] == "Rust"


def test_client_side_data_error_surfaces_as_invalid_argument(fake_gateway, fake_pool) -> None:
    fake_pool.errors.append(
        psycopg.DataError("PostgreSQL text fields cannot contain NUL (0x00) bytes")
    )

    with pytest.raises(InvalidArgumentError) as excinfo:
        fake_gateway.list_all()

    assert isinstance(excinfo.value.__cause__, psycopg.DataError)


def test_other_store_errors_are_wrapped_in_gateway_error(fake_gateway, fake_pool) -> None:
    fake_pool.errors.append(pg_errors.UndefinedTable('relation "public.persons" does not exist'))

    with pytest.raises(GatewayError) as excinfo:
        fake_gateway.count_all()

    assert isinstance(excinfo.value.__cause__, psycopg.ProgrammingError)
    assert not isinstance(excinfo.value, psycopg.Error)
