"""
Query gateway over the `persons` table.

Each public method is one named operation: it validates its parameters,
borrows a pooled connection, runs one fixed query, and maps rows back to
domain types. Mutations run inside an explicit transaction scope and pass the
row through the pre-commit hooks first; reads run without one.

Usage:
    from person_gateway.gateway import PersonGateway
    from person_gateway.domain import Person

    gateway = PersonGateway()
    created = gateway.insert(Person(name="Andres", lastname="Guzman", programming_language="Java"))
    gateway.find_by_id(created.id)
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import (
    Any,
    Callable,
    Dict,
    Generator,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

import psycopg
from psycopg import Connection
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from person_gateway.domain.audit import (
    DEFAULT_PRE_INSERT_HOOKS,
    DEFAULT_PRE_UPDATE_HOOKS,
    PersistHook,
    run_hooks,
    utc_now,
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
    person_from_row,
)
from person_gateway.errors import (
    ConstraintViolationError,
    GatewayError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
)
from person_gateway.gateway import queries
from person_gateway.utils.logging import get_logger

log = get_logger(__name__)

FieldLike = Union[PersonField, str]
SortLike = Union[SortKey, str]

# Default order of the range queries: name descending, then lastname ascending.
DEFAULT_RANGE_SORT: Tuple[SortKey, ...] = (
    SortKey(PersonField.NAME, SortDirection.DESC),
    SortKey(PersonField.LASTNAME, SortDirection.ASC),
)

_PERSON_DATA_FIELDS = (
    PersonField.ID,
    PersonField.NAME,
    PersonField.LASTNAME,
    PersonField.PROGRAMMING_LANGUAGE,
)


# -- Parameter validation ----------------------------------------------------


def _require_id(value: Any, name: str = "person_id") -> int:
    if value is None:
        raise InvalidArgumentError(f"'{name}' is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"'{name}' must be an integer, got {type(value).__name__}")
    if value < 1:
        raise InvalidArgumentError(f"'{name}' must be a positive integer, got {value}")
    return value


def _require_text(value: Any, name: str) -> str:
    if value is None:
        raise InvalidArgumentError(f"'{name}' is required")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"'{name}' must be a string, got {type(value).__name__}")
    if not value:
        raise InvalidArgumentError(f"'{name}' must not be empty")
    if "\x00" in value:
        raise InvalidArgumentError(f"'{name}' must not contain NUL characters")
    return value


def _coerce_field(field: Any) -> PersonField:
    if field is None:
        raise InvalidArgumentError("'field' is required")
    try:
        return PersonField(field)
    except ValueError as exc:
        allowed = ", ".join(f.value for f in PersonField)
        raise InvalidArgumentError(f"Unknown field '{field}'. Allowed: {allowed}") from exc


def _coerce_text_field(field: Any) -> PersonField:
    coerced = _coerce_field(field)
    if not coerced.is_text:
        raise InvalidArgumentError(f"Field '{coerced.value}' is not a text field")
    return coerced


def _require_value(field: PersonField, value: Any) -> Any:
    if field.is_text:
        return _require_text(value, field.value)
    return _require_id(value, field.value)


def _require_bound(field: PersonField, value: Any, name: str) -> Any:
    """Range bounds: any int for id (zero and negatives allowed), non-empty text otherwise."""
    if field.is_text:
        return _require_text(value, name)
    if value is None:
        raise InvalidArgumentError(f"'{name}' is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"'{name}' must be an integer, got {type(value).__name__}")
    return value


def _coerce_sort(sort: Any) -> Tuple[SortKey, ...]:
    if sort is None:
        raise InvalidArgumentError("'sort' is required")
    if isinstance(sort, (SortKey, str)):
        sort = [sort]
    keys: List[SortKey] = []
    for item in sort:
        if isinstance(item, SortKey):
            keys.append(item)
            continue
        if not isinstance(item, str):
            raise InvalidArgumentError(f"Invalid sort key {item!r}")
        try:
            keys.append(SortKey.parse(item))
        except ValueError as exc:
            raise InvalidArgumentError(f"Invalid sort key '{item}'") from exc
    if not keys:
        raise InvalidArgumentError("'sort' must contain at least one key")
    return tuple(keys)


def _coerce_case(case: Any) -> NameCase:
    if case is None:
        raise InvalidArgumentError("'case' is required")
    try:
        return NameCase(case)
    except ValueError as exc:
        allowed = ", ".join(c.value for c in NameCase)
        raise InvalidArgumentError(f"Unknown case mode '{case}'. Allowed: {allowed}") from exc


def _coerce_criteria(criteria: Any) -> Dict[PersonField, Any]:
    if not criteria:
        raise InvalidArgumentError("'criteria' must name at least one field")
    coerced: Dict[PersonField, Any] = {}
    for field, value in dict(criteria).items():
        key = _coerce_field(field)
        coerced[key] = _require_value(key, value)
    return coerced


def _coerce_fields(fields: Any) -> Tuple[PersonField, ...]:
    if not fields:
        raise InvalidArgumentError("'fields' must name at least one field")
    if isinstance(fields, (PersonField, str)):
        fields = [fields]
    return tuple(_coerce_field(field) for field in fields)


def _to_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _to_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


class PersonGateway:
    """
    Closed set of named query operations against the `persons` table.

    Parameters
    ----------
    pool : ConnectionPool | None
        Pool to borrow connections from. Defaults to the process-wide pool
        managed by ``PoolManager``.
    pre_insert_hooks, pre_update_hooks : sequence of PersistHook
        Run, in order, on the column values before every insert/update.
    clock : callable
        Source of the timestamp handed to the hooks.
    """

    def __init__(
        self,
        pool: Optional[ConnectionPool] = None,
        pre_insert_hooks: Sequence[PersistHook] = DEFAULT_PRE_INSERT_HOOKS,
        pre_update_hooks: Sequence[PersistHook] = DEFAULT_PRE_UPDATE_HOOKS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if pool is None:
            from person_gateway.infrastructure.db_factory import get_sync_pool

            pool = get_sync_pool()
        self._pool = pool
        self._pre_insert_hooks = tuple(pre_insert_hooks)
        self._pre_update_hooks = tuple(pre_update_hooks)
        self._clock = clock

    # -- Connection scopes ---------------------------------------------------

    @contextmanager
    def _connection(self, operation: str) -> Generator[Connection, None, None]:
        """Borrow a pooled connection, translating store errors at the boundary."""
        try:
            with self._pool.connection() as conn:
                yield conn
        except psycopg.IntegrityError as exc:
            log.warning(
                f"[CONSTRAINT] {operation} rejected by store",
                extra={"operation": operation, "sqlstate": exc.sqlstate},
            )
            raise ConstraintViolationError(str(exc).strip() or None) from exc
        except psycopg.DataError as exc:
            # Raised by the client-side dumpers too, before anything is sent.
            log.warning(
                f"[INVALID] {operation} rejected a parameter value",
                extra={"operation": operation, "error": str(exc)},
            )
            raise InvalidArgumentError(str(exc).strip() or None) from exc
        except (psycopg.OperationalError, psycopg.InterfaceError) as exc:
            log.error(
                f"[UNAVAILABLE] {operation} failed to reach store",
                extra={"operation": operation, "error": str(exc)},
            )
            raise StoreUnavailableError(str(exc).strip() or None) from exc
        except psycopg.Error as exc:
            log.error(
                f"[STORE ERROR] {operation} failed",
                extra={"operation": operation, "sqlstate": exc.sqlstate},
            )
            raise GatewayError(str(exc).strip() or None) from exc

    @contextmanager
    def _transaction(self, operation: str) -> Generator[Connection, None, None]:
        """Connection with an open transaction: commit on success, rollback on any error."""
        with self._connection(operation) as conn:
            with conn.transaction():
                yield conn

    # -- Fetch helpers -------------------------------------------------------

    def _fetch_persons(
        self, operation: str, query: Any, params: Optional[Mapping[str, Any]] = None
    ) -> List[Person]:
        log.debug(f"[QUERY] {operation}", extra={"operation": operation})
        with self._connection(operation) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                return [person_from_row(row) for row in cur.fetchall()]

    def _fetch_person(
        self, operation: str, query: Any, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[Person]:
        log.debug(f"[QUERY] {operation}", extra={"operation": operation})
        with self._connection(operation) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                row = cur.fetchone()
        return person_from_row(row) if row is not None else None

    def _fetch_rows(
        self, operation: str, query: Any, params: Optional[Mapping[str, Any]] = None
    ) -> List[Tuple[Any, ...]]:
        log.debug(f"[QUERY] {operation}", extra={"operation": operation})
        with self._connection(operation) as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return [tuple(row) for row in cur.fetchall()]

    def _fetch_row(
        self, operation: str, query: Any, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[Tuple[Any, ...]]:
        log.debug(f"[QUERY] {operation}", extra={"operation": operation})
        with self._connection(operation) as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                row = cur.fetchone()
        return tuple(row) if row is not None else None

    def _fetch_scalar(
        self, operation: str, query: Any, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        row = self._fetch_row(operation, query, params)
        return row[0] if row is not None else None

    def _fetch_column(
        self, operation: str, query: Any, params: Optional[Mapping[str, Any]] = None
    ) -> List[Any]:
        return [row[0] for row in self._fetch_rows(operation, query, params)]

    # -- CRUD ----------------------------------------------------------------

    def insert(self, person: Person) -> Person:
        """
        Persist a new person and return it with its store-assigned id.

        Raises InvalidArgumentError if ``person`` already carries an id and
        ConstraintViolationError if a required field is blank.
        """
        if person is None:
            raise InvalidArgumentError("'person' is required")
        if not person.is_new:
            raise InvalidArgumentError(
                f"insert expects a new person without id, got id={person.id}"
            )
        values: Dict[str, Any] = {
            "name": person.name,
            "lastname": person.lastname,
            "programming_language": person.programming_language,
            "created_at": None,
            "updated_at": None,
        }
        run_hooks(self._pre_insert_hooks, values, self._clock())

        with self._transaction("insert") as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(queries.INSERT_PERSON, values)
                row = cur.fetchone()
        created = person_from_row(row)
        log.info("[INSERT] person created", extra={"person_id": created.id})
        return created

    def find_by_id(self, person_id: int) -> Optional[Person]:
        person_id = _require_id(person_id)
        return self._fetch_person("find_by_id", queries.SELECT_BY_ID, {"id": person_id})

    def update(self, person: Person) -> Person:
        """
        Overwrite the mutable fields of an existing person.

        ``created_at`` is never rewritten; ``updated_at`` comes from the
        pre-update hooks. Raises NotFoundError if no row has ``person.id``.
        """
        if person is None:
            raise InvalidArgumentError("'person' is required")
        person_id = _require_id(person.id, "person.id")
        values = self._update_values(person)
        with self._transaction("update") as conn:
            updated = self._write_update(conn, person_id, values)
        log.info("[UPDATE] person updated", extra={"person_id": person_id})
        return updated

    def update_programming_language(self, person_id: int, language: Optional[str]) -> Person:
        """Read-modify-write of the programming language under a row lock."""
        person_id = _require_id(person_id)
        if language is not None:
            language = _require_text(language, "language")
        with self._transaction("update_programming_language") as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(queries.SELECT_BY_ID_FOR_UPDATE, {"id": person_id})
                row = cur.fetchone()
            if row is None:
                raise NotFoundError(person_id=person_id)
            current = person_from_row(row)
            values = self._update_values(
                current.model_copy(update={"programming_language": language})
            )
            updated = self._write_update(conn, person_id, values)
        log.info(
            "[UPDATE] programming language changed",
            extra={"person_id": person_id, "language": language},
        )
        return updated

    def _update_values(self, person: Person) -> Dict[str, Any]:
        values: Dict[str, Any] = {
            "id": person.id,
            "name": person.name,
            "lastname": person.lastname,
            "programming_language": person.programming_language,
            "updated_at": None,
        }
        return run_hooks(self._pre_update_hooks, values, self._clock())

    @staticmethod
    def _write_update(conn: Connection, person_id: int, values: Dict[str, Any]) -> Person:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(queries.UPDATE_PERSON, values)
            row = cur.fetchone()
        if row is None:
            raise NotFoundError(person_id=person_id)
        return person_from_row(row)

    def delete_by_id(self, person_id: int) -> Person:
        """Delete a person and return the removed row. Raises NotFoundError if absent."""
        person_id = _require_id(person_id)
        with self._transaction("delete_by_id") as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(queries.DELETE_PERSON, {"id": person_id})
                row = cur.fetchone()
            if row is None:
                raise NotFoundError(person_id=person_id)
        log.info("[DELETE] person deleted", extra={"person_id": person_id})
        return person_from_row(row)

    # -- Exact, substring and compound lookups -------------------------------

    def find_one_by(self, field: FieldLike, value: Any) -> Optional[Person]:
        """First person (lowest id) whose ``field`` equals ``value`` exactly."""
        key = _coerce_field(field)
        value = _require_value(key, value)
        return self._fetch_person(
            "find_one_by", queries.select_where_equals([key], limit_one=True), {key.value: value}
        )

    def find_by(self, field: FieldLike, value: Any) -> List[Person]:
        key = _coerce_field(field)
        value = _require_value(key, value)
        return self._fetch_persons(
            "find_by", queries.select_where_equals([key]), {key.value: value}
        )

    def find_one_by_name(self, name: str) -> Optional[Person]:
        return self.find_one_by(PersonField.NAME, name)

    def find_by_programming_language(self, language: str) -> List[Person]:
        return self.find_by(PersonField.PROGRAMMING_LANGUAGE, language)

    def find_by_containing(self, field: FieldLike, substring: str) -> List[Person]:
        """Persons whose text ``field`` contains ``substring`` (case-sensitive)."""
        key = _coerce_text_field(field)
        substring = _require_text(substring, "substring")
        return self._fetch_persons(
            "find_by_containing", queries.select_containing(key), {"value": substring}
        )

    def find_by_name_containing(self, substring: str) -> List[Person]:
        return self.find_by_containing(PersonField.NAME, substring)

    def find_one_by_name_containing(self, substring: str) -> Optional[Person]:
        substring = _require_text(substring, "substring")
        return self._fetch_person(
            "find_one_by_name_containing",
            queries.select_containing(PersonField.NAME, limit_one=True),
            {"value": substring},
        )

    def find_by_all(self, criteria: Mapping[FieldLike, Any]) -> List[Person]:
        """Persons matching every ``field == value`` pair in ``criteria``."""
        coerced = _coerce_criteria(criteria)
        return self._fetch_persons(
            "find_by_all",
            queries.select_where_equals(coerced),
            {field.value: value for field, value in coerced.items()},
        )

    def find_by_programming_language_and_name(self, language: str, name: str) -> List[Person]:
        return self.find_by_all(
            {PersonField.PROGRAMMING_LANGUAGE: language, PersonField.NAME: name}
        )

    # -- Listing, sorting and ranges -----------------------------------------

    def list_all(self) -> List[Person]:
        return self._fetch_persons("list_all", queries.SELECT_ALL, None)

    def list_all_sorted(self, sort: Union[SortLike, Sequence[SortLike]]) -> List[Person]:
        """All persons ordered by each key in turn, each ascending or descending."""
        keys = _coerce_sort(sort)
        return self._fetch_persons("list_all_sorted", queries.select_sorted(keys), None)

    def list_all_order_by_name(self) -> List[Person]:
        return self.list_all_sorted([SortKey(PersonField.NAME)])

    def list_all_order_by_name_desc_lastname_desc(self) -> List[Person]:
        return self.list_all_sorted(
            [
                SortKey(PersonField.NAME, SortDirection.DESC),
                SortKey(PersonField.LASTNAME, SortDirection.DESC),
            ]
        )

    def find_between(
        self,
        field: FieldLike,
        low: Any,
        high: Any,
        sort: Union[SortLike, Sequence[SortLike]] = DEFAULT_RANGE_SORT,
    ) -> List[Person]:
        """
        Persons whose ``field`` lies in ``[low, high]``, both bounds inclusive.

        Text fields compare lexicographically in the store's collation.
        """
        key = _coerce_field(field)
        low = _require_bound(key, low, "low")
        high = _require_bound(key, high, "high")
        keys = _coerce_sort(sort)
        return self._fetch_persons(
            "find_between", queries.select_between(key, keys), {"low": low, "high": high}
        )

    def find_between_ids(
        self, low: int, high: int, sort: Union[SortLike, Sequence[SortLike]] = DEFAULT_RANGE_SORT
    ) -> List[Person]:
        return self.find_between(PersonField.ID, low, high, sort)

    def find_between_names(
        self, low: str, high: str, sort: Union[SortLike, Sequence[SortLike]] = DEFAULT_RANGE_SORT
    ) -> List[Person]:
        return self.find_between(PersonField.NAME, low, high, sort)

    def find_by_ids(self, ids: Iterable[int]) -> List[Person]:
        """
        "Where id in" lookup. Ids with no row are simply absent from the result.

        An empty collection returns ``[]`` without touching the store.
        """
        if ids is None:
            raise InvalidArgumentError("'ids' is required")
        unique = sorted({_require_id(person_id, "ids[]") for person_id in ids})
        if not unique:
            return []
        return self._fetch_persons("find_by_ids", queries.SELECT_BY_IDS, {"ids": unique})

    def last_inserted(self) -> Optional[Person]:
        """The person with the highest id, if any."""
        return self._fetch_person("last_inserted", queries.SELECT_LAST_INSERTED, None)

    # -- Projections ---------------------------------------------------------

    def project_fields(
        self,
        fields: Union[FieldLike, Sequence[FieldLike]],
        criteria: Optional[Mapping[FieldLike, Any]] = None,
    ) -> List[Tuple[Any, ...]]:
        """Plain tuples of ``fields`` for every row (optionally AND-filtered), ordered by id."""
        keys = _coerce_fields(fields)
        coerced = _coerce_criteria(criteria) if criteria is not None else {}
        return self._fetch_rows(
            "project_fields",
            queries.select_fields(keys, coerced),
            {field.value: value for field, value in coerced.items()} or None,
        )

    def find_names_and_languages(
        self, language: Optional[str] = None, name: Optional[str] = None
    ) -> List[Tuple[Any, ...]]:
        criteria: Dict[FieldLike, Any] = {}
        if language is not None:
            criteria[PersonField.PROGRAMMING_LANGUAGE] = language
        if name is not None:
            criteria[PersonField.NAME] = name
        return self.project_fields(
            [PersonField.NAME, PersonField.PROGRAMMING_LANGUAGE], criteria or None
        )

    def find_person_data(self) -> List[Tuple[Any, ...]]:
        return self.project_fields(
            _PERSON_DATA_FIELDS,
        )

    def find_person_data_by_id(self, person_id: int) -> Optional[Tuple[Any, ...]]:
        person_id = _require_id(person_id)
        rows = self.project_fields(
            _PERSON_DATA_FIELDS,
            {PersonField.ID: person_id},
        )
        return rows[0] if rows else None

    def find_name_by_id(self, person_id: int) -> Optional[str]:
        person_id = _require_id(person_id)
        return self._fetch_scalar("find_name_by_id", queries.SELECT_NAME_BY_ID, {"id": person_id})

    def find_full_name_by_id(self, person_id: int) -> Optional[str]:
        person_id = _require_id(person_id)
        return self._fetch_scalar(
            "find_full_name_by_id", queries.SELECT_FULL_NAME_BY_ID, {"id": person_id}
        )

    def find_all_names(self) -> List[str]:
        return self._fetch_column("find_all_names", queries.SELECT_ALL_NAMES)

    def find_all_names_distinct(self) -> List[str]:
        return self._fetch_column("find_all_names_distinct", queries.SELECT_DISTINCT_NAMES)

    def find_all_person_names(self) -> List[PersonName]:
        rows = self._fetch_rows("find_all_person_names", queries.SELECT_PERSON_NAMES)
        return [PersonName(name=name, lastname=lastname) for name, lastname in rows]

    def find_all_with_language(self) -> List[Tuple[Person, Optional[str]]]:
        """Each person paired with its programming language."""
        log.debug("[QUERY] find_all_with_language", extra={"operation": "find_all_with_language"})
        with self._connection("find_all_with_language") as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(queries.SELECT_ALL_WITH_LANGUAGE)
                rows = cur.fetchall()
        return [(person_from_row(row), row["language"]) for row in rows]

    def project_full_names(self, case: Union[NameCase, str] = NameCase.RAW) -> List[str]:
        """``"name lastname"`` for every row, raw, upper-cased or lower-cased."""
        mode = _coerce_case(case)
        return self._fetch_column("project_full_names", queries.SELECT_FULL_NAMES[mode])

    # -- Aggregates and sub-queries ------------------------------------------

    def count_all(self) -> int:
        return int(self._fetch_scalar("count_all", queries.COUNT_ALL) or 0)

    def count_distinct(self, field: FieldLike) -> int:
        key = _coerce_field(field)
        return int(
            self._fetch_scalar("count_distinct", queries.select_count_distinct(key)) or 0
        )

    def min_value(self, field: FieldLike) -> Any:
        """
        Smallest stored value of ``field`` in its natural order.

        Text fields compare lexicographically in the store's collation; use
        ``min_length`` for the length-based minimum.
        """
        key = _coerce_field(field)
        return self._fetch_scalar("min_value", queries.select_extreme("min", key))

    def max_value(self, field: FieldLike) -> Any:
        """Largest stored value of ``field``; lexicographic for text (see ``max_length``)."""
        key = _coerce_field(field)
        return self._fetch_scalar("max_value", queries.select_extreme("max", key))

    def min_length(self, field: FieldLike = PersonField.NAME) -> Optional[int]:
        key = _coerce_text_field(field)
        return _to_int(
            self._fetch_scalar("min_length", queries.select_extreme("min", key, by_length=True))
        )

    def max_length(self, field: FieldLike = PersonField.NAME) -> Optional[int]:
        key = _coerce_text_field(field)
        return _to_int(
            self._fetch_scalar("max_length", queries.select_extreme("max", key, by_length=True))
        )

    def aggregate_summary(self, field: FieldLike = PersonField.ID) -> AggregateSummary:
        """
        min, max, sum, avg and count over one field in a single round trip.

        Text fields are measured by character length.
        """
        key = _coerce_field(field)
        row = self._fetch_row("aggregate_summary", queries.select_summary(key))
        if row is None:
            return AggregateSummary()
        minimum, maximum, total, average, count = row
        return AggregateSummary(
            min=_to_int(minimum),
            max=_to_int(maximum),
            sum=_to_int(total) or 0,
            avg=_to_float(average),
            count=_to_int(count) or 0,
        )

    def name_lengths(self) -> List[NameLength]:
        return self._name_lengths("name_lengths", queries.SELECT_NAME_LENGTHS)

    def shortest_names(self) -> List[NameLength]:
        """Every row tied at the minimum name length."""
        return self._name_lengths("shortest_names", queries.SELECT_SHORTEST_NAMES)

    def longest_names(self) -> List[NameLength]:
        """Every row tied at the maximum name length."""
        return self._name_lengths("longest_names", queries.SELECT_LONGEST_NAMES)

    def _name_lengths(self, operation: str, query: str) -> List[NameLength]:
        return [
            NameLength(name=name, length=length)
            for name, length in self._fetch_rows(operation, query)
        ]


__all__ = ["DEFAULT_RANGE_SORT", "PersonGateway"]
