"""
SQL for the person query gateway.

Fixed queries are literal parameterized strings. Queries whose column or sort
order is chosen by the caller are composed with ``psycopg.sql`` from the
``PersonField`` whitelist, never from caller-supplied text.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Sequence

from psycopg import sql

from person_gateway.domain.models import NameCase, PersonField, SortDirection, SortKey

TABLE = "public.persons"

# Aliases map store columns onto Person attribute names.
PERSON_COLUMNS = (
    "id, name, lastname, programing_language AS programming_language, "
    "create_at AS created_at, updated_at"
)

# -- Mutations ---------------------------------------------------------------

INSERT_PERSON = (
    f"INSERT INTO {TABLE} (name, lastname, programing_language, create_at, updated_at) "
    "VALUES (%(name)s, %(lastname)s, %(programming_language)s, %(created_at)s, %(updated_at)s) "
    f"RETURNING {PERSON_COLUMNS}"
)

UPDATE_PERSON = (
    f"UPDATE {TABLE} SET name = %(name)s, lastname = %(lastname)s, "
    "programing_language = %(programming_language)s, updated_at = %(updated_at)s "
    f"WHERE id = %(id)s RETURNING {PERSON_COLUMNS}"
)

DELETE_PERSON = f"DELETE FROM {TABLE} WHERE id = %(id)s RETURNING {PERSON_COLUMNS}"

# -- Entity reads ------------------------------------------------------------

SELECT_BY_ID = f"SELECT {PERSON_COLUMNS} FROM {TABLE} WHERE id = %(id)s"

SELECT_BY_ID_FOR_UPDATE = f"{SELECT_BY_ID} FOR UPDATE"

SELECT_ALL = f"SELECT {PERSON_COLUMNS} FROM {TABLE} ORDER BY id"

SELECT_BY_IDS = f"SELECT {PERSON_COLUMNS} FROM {TABLE} WHERE id = ANY(%(ids)s) ORDER BY id"

SELECT_LAST_INSERTED = (
    f"SELECT {PERSON_COLUMNS} FROM {TABLE} WHERE id = (SELECT max(id) FROM {TABLE})"
)

SELECT_ALL_WITH_LANGUAGE = (
    f"SELECT {PERSON_COLUMNS}, programing_language AS language FROM {TABLE} ORDER BY id"
)

# -- Projections -------------------------------------------------------------

SELECT_NAME_BY_ID = f"SELECT name FROM {TABLE} WHERE id = %(id)s"

SELECT_FULL_NAME_BY_ID = f"SELECT name || ' ' || lastname FROM {TABLE} WHERE id = %(id)s"

SELECT_ALL_NAMES = f"SELECT name FROM {TABLE} ORDER BY id"

SELECT_DISTINCT_NAMES = f"SELECT DISTINCT name FROM {TABLE} ORDER BY name"

SELECT_PERSON_NAMES = f"SELECT name, lastname FROM {TABLE} ORDER BY id"

SELECT_FULL_NAMES: Dict[NameCase, str] = {
    NameCase.RAW: f"SELECT name || ' ' || lastname FROM {TABLE} ORDER BY id",
    NameCase.UPPER: f"SELECT upper(name || ' ' || lastname) FROM {TABLE} ORDER BY id",
    NameCase.LOWER: f"SELECT lower(concat(name, ' ', lastname)) FROM {TABLE} ORDER BY id",
}

SELECT_NAME_LENGTHS = f"SELECT name, length(name) AS length FROM {TABLE} ORDER BY id"

SELECT_SHORTEST_NAMES = (
    f"SELECT name, length(name) AS length FROM {TABLE} "
    f"WHERE length(name) = (SELECT min(length(name)) FROM {TABLE}) ORDER BY id"
)

SELECT_LONGEST_NAMES = (
    f"SELECT name, length(name) AS length FROM {TABLE} "
    f"WHERE length(name) = (SELECT max(length(name)) FROM {TABLE}) ORDER BY id"
)

# -- Aggregates --------------------------------------------------------------

COUNT_ALL = f"SELECT count(*) FROM {TABLE}"

# -- Composed queries --------------------------------------------------------

_DIRECTIONS = {
    SortDirection.ASC: sql.SQL("ASC"),
    SortDirection.DESC: sql.SQL("DESC"),
}


def _column(field: PersonField) -> sql.Identifier:
    return sql.Identifier(field.column)


def order_by(sort: Sequence[SortKey]) -> sql.Composable:
    """ORDER BY clause for ``sort`` with ``id`` as the final tiebreaker."""
    terms = [
        sql.SQL("{} {}").format(_column(key.field), _DIRECTIONS[key.direction]) for key in sort
    ]
    if not any(key.field is PersonField.ID for key in sort):
        terms.append(sql.SQL("id ASC"))
    return sql.SQL("ORDER BY {}").format(sql.SQL(", ").join(terms))


def where_equals(criteria: Iterable[PersonField]) -> sql.Composable:
    """WHERE clause AND-ing ``column = %(column)s`` for each field."""
    return sql.SQL("WHERE {}").format(
        sql.SQL(" AND ").join(
            sql.SQL("{} = {}").format(_column(field), sql.Placeholder(field.value))
            for field in criteria
        )
    )


def select_where_equals(criteria: Iterable[PersonField], limit_one: bool = False) -> sql.Composed:
    query = sql.SQL("SELECT {columns} FROM {table} {where} ORDER BY id").format(
        columns=sql.SQL(PERSON_COLUMNS),
        table=sql.SQL(TABLE),
        where=where_equals(criteria),
    )
    if limit_one:
        query = query + sql.SQL(" LIMIT 1")
    return query


def select_containing(field: PersonField, limit_one: bool = False) -> sql.Composed:
    # strpos keeps the match case-sensitive and treats % and _ literally.
    query = sql.SQL(
        "SELECT {columns} FROM {table} WHERE strpos({column}, %(value)s) > 0 ORDER BY id"
    ).format(columns=sql.SQL(PERSON_COLUMNS), table=sql.SQL(TABLE), column=_column(field))
    if limit_one:
        query = query + sql.SQL(" LIMIT 1")
    return query


def select_sorted(sort: Sequence[SortKey]) -> sql.Composed:
    return sql.SQL("SELECT {columns} FROM {table} {order}").format(
        columns=sql.SQL(PERSON_COLUMNS), table=sql.SQL(TABLE), order=order_by(sort)
    )


def select_between(field: PersonField, sort: Sequence[SortKey]) -> sql.Composed:
    return sql.SQL(
        "SELECT {columns} FROM {table} WHERE {column} BETWEEN %(low)s AND %(high)s {order}"
    ).format(
        columns=sql.SQL(PERSON_COLUMNS),
        table=sql.SQL(TABLE),
        column=_column(field),
        order=order_by(sort),
    )


def select_fields(
    fields: Sequence[PersonField], criteria: Mapping[PersonField, object] | None = None
) -> sql.Composed:
    query = sql.SQL("SELECT {fields} FROM {table}").format(
        fields=sql.SQL(", ").join(_column(field) for field in fields),
        table=sql.SQL(TABLE),
    )
    if criteria:
        query = query + sql.SQL(" ") + where_equals(criteria)
    return query + sql.SQL(" ORDER BY id")


def select_count_distinct(field: PersonField) -> sql.Composed:
    return sql.SQL("SELECT count(DISTINCT {column}) FROM {table}").format(
        column=_column(field), table=sql.SQL(TABLE)
    )


def select_extreme(function: str, field: PersonField, by_length: bool = False) -> sql.Composed:
    """``SELECT min|max(column)`` or, with ``by_length``, of ``length(column)``."""
    if function not in ("min", "max"):
        raise ValueError(f"Unsupported aggregate '{function}'")
    return sql.SQL("SELECT {function}({expr}) FROM {table}").format(
        function=sql.SQL(function),
        expr=_measure(field, by_length),
        table=sql.SQL(TABLE),
    )


def select_summary(field: PersonField) -> sql.Composed:
    """min, max, sum, avg and count in one row; text columns are measured by length."""
    expr = _measure(field, field.is_text)
    return sql.SQL(
        "SELECT min({e}), max({e}), coalesce(sum({e}), 0), avg({e}), count({e}) FROM {table}"
    ).format(e=expr, table=sql.SQL(TABLE))


def _measure(field: PersonField, by_length: bool) -> sql.Composable:
    if by_length:
        return sql.SQL("length({})").format(_column(field))
    return _column(field)
