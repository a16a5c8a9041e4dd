"""
Registry of named gateway operations.

An explicit name -> handler table: the caller selects an operation by name,
supplies typed parameters, and gets the gateway's typed result back. The CLI
uses ``Operation.parse_params`` to turn ``key=value`` strings into those
typed parameters.

Usage (example from CLI):
    from person_gateway.operations import run_operation

    run_operation("find_by_ids", {"ids": [1, 2, 3]})
    run_operation("project_full_names", {"case": "upper"})
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from person_gateway.domain.models import NameCase, Person, PersonField, SortKey
from person_gateway.errors import GatewayError, InvalidArgumentError
from person_gateway.gateway import PersonGateway
from person_gateway.utils.logging import get_logger

log = get_logger(__name__)

Handler = Callable[..., Any]


@dataclass(frozen=True)
class Param:
    """A named operation parameter and the parser for its string form."""

    name: str
    parse: Callable[[str], Any] = str
    required: bool = True


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    handler: Handler
    params: Tuple[Param, ...] = ()
    mutating: bool = False

    def parse_params(self, raw: Mapping[str, str]) -> Dict[str, Any]:
        """
        Convert ``key=value`` strings into typed keyword arguments.

        Raises InvalidArgumentError for unknown, missing or unparsable values.
        """
        known = {param.name: param for param in self.params}
        unknown = sorted(set(raw) - set(known))
        if unknown:
            raise InvalidArgumentError(
                f"Unknown parameter(s) for '{self.name}': {', '.join(unknown)}"
            )
        parsed: Dict[str, Any] = {}
        for param in self.params:
            if param.name not in raw:
                if param.required:
                    raise InvalidArgumentError(
                        f"Operation '{self.name}' requires parameter '{param.name}'"
                    )
                continue
            try:
                parsed[param.name] = param.parse(raw[param.name])
            except ValueError as exc:
                raise InvalidArgumentError(
                    f"Invalid value for '{param.name}': {raw[param.name]!r}"
                ) from exc
        return parsed


def _int_list(value: str) -> List[int]:
    return [int(part) for part in value.split(",") if part.strip()]


def _str_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _sort_list(value: str) -> List[SortKey]:
    return [SortKey.parse(part) for part in _str_list(value)]


def _field_value(field: Any, value: Any) -> Any:
    """Ids arrive as strings from the CLI; everything else is text."""
    try:
        is_id = PersonField(field) is PersonField.ID
    except ValueError:
        return value
    if not (is_id and isinstance(value, str)):
        return value
    try:
        return int(value)
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid value for 'value': {value!r}") from exc


def _call(method: str) -> Handler:
    def handler(gateway: PersonGateway, **params: Any) -> Any:
        return getattr(gateway, method)(**params)

    return handler


def _insert(
    gateway: PersonGateway, name: str, lastname: str, language: Optional[str] = None
) -> Person:
    return gateway.insert(Person(name=name, lastname=lastname, programming_language=language))


def _by_field(method: str) -> Handler:
    def handler(gateway: PersonGateway, field: str, value: Any) -> Any:
        return getattr(gateway, method)(field, _field_value(field, value))

    return handler


_ID = Param("person_id", int)
_FIELD = Param("field")
_OPTIONAL_FIELD = Param("field", required=False)
_SORT = Param("sort", _sort_list, required=False)


def _op(name: str, description: str, *params: Param) -> Operation:
    """A read operation forwarding its keyword arguments to the gateway method of the same name."""
    return Operation(name, description, _call(name), params)


def _operation_table() -> Dict[str, Operation]:
    """Every operation the gateway exposes, keyed by name."""
    operations = [
        # CRUD
        Operation(
            "insert",
            "Insert a new person.",
            _insert,
            (Param("name"), Param("lastname"), Param("language", required=False)),
            mutating=True,
        ),
        _op("find_by_id", "Person by id.", _ID),
        Operation(
            "update_programming_language",
            "Change the programming language of an existing person.",
            _call("update_programming_language"),
            (_ID, Param("language")),
            mutating=True,
        ),
        Operation(
            "delete_by_id", "Delete a person by id.", _call("delete_by_id"), (_ID,), mutating=True
        ),
        # Exact, substring and compound lookups
        Operation(
            "find_one_by",
            "First person whose field equals value.",
            _by_field("find_one_by"),
            (_FIELD, Param("value")),
        ),
        Operation(
            "find_by",
            "Persons whose field equals value.",
            _by_field("find_by"),
            (_FIELD, Param("value")),
        ),
        _op("find_one_by_name", "First person with this name.", Param("name")),
        _op(
            "find_by_programming_language",
            "Persons using a programming language.",
            Param("language"),
        ),
        _op(
            "find_by_containing",
            "Persons whose text field contains a substring (case-sensitive).",
            _FIELD,
            Param("substring"),
        ),
        _op(
            "find_by_name_containing",
            "Persons whose name contains a substring.",
            Param("substring"),
        ),
        _op(
            "find_one_by_name_containing",
            "First person whose name contains a substring.",
            Param("substring"),
        ),
        _op(
            "find_by_programming_language_and_name",
            "Persons matching both language and name.",
            Param("language"),
            Param("name"),
        ),
        # Listing, sorting and ranges
        _op("list_all", "All persons by id."),
        _op(
            "list_all_sorted",
            "All persons sorted by keys like 'name:desc,lastname'.",
            Param("sort", _sort_list),
        ),
        _op("list_all_order_by_name", "All persons by name."),
        _op(
            "list_all_order_by_name_desc_lastname_desc",
            "All persons by name desc, lastname desc.",
        ),
        _op(
            "find_between_ids",
            "Persons with low <= id <= high.",
            Param("low", int),
            Param("high", int),
            _SORT,
        ),
        _op(
            "find_between_names",
            "Persons with low <= name <= high.",
            Param("low"),
            Param("high"),
            _SORT,
        ),
        _op("find_by_ids", "Persons whose id is in a set.", Param("ids", _int_list)),
        _op("last_inserted", "Person with the highest id."),
        # Projections
        _op("project_fields", "Plain tuples of the given fields.", Param("fields", _str_list)),
        _op(
            "find_names_and_languages",
            "(name, language) pairs, optionally filtered.",
            Param("language", required=False),
            Param("name", required=False),
        ),
        _op("find_person_data", "(id, name, lastname, language) tuples."),
        _op("find_person_data_by_id", "(id, name, lastname, language) of one person.", _ID),
        _op("find_name_by_id", "Name of one person.", _ID),
        _op("find_full_name_by_id", "'name lastname' of one person.", _ID),
        _op("find_all_names", "Every name."),
        _op("find_all_names_distinct", "Every distinct name."),
        _op("find_all_person_names", "(name, lastname) of everyone."),
        _op("find_all_with_language", "Each person with its language."),
        _op(
            "project_full_names",
            "'name lastname' of everyone, case raw|upper|lower.",
            Param("case", NameCase, required=False),
        ),
        # Aggregates and sub-queries
        _op("count_all", "Number of persons."),
        _op("count_distinct", "Distinct values of a field.", _FIELD),
        _op("min_value", "Minimum of a field (lexicographic for text).", _FIELD),
        _op("max_value", "Maximum of a field (lexicographic for text).", _FIELD),
        _op("min_length", "Shortest length of a text field.", _OPTIONAL_FIELD),
        _op("max_length", "Longest length of a text field.", _OPTIONAL_FIELD),
        _op("aggregate_summary", "min, max, sum, avg and count of a field.", _OPTIONAL_FIELD),
        _op("name_lengths", "(name, length) of everyone."),
        _op("shortest_names", "Names tied at the minimum length."),
        _op("longest_names", "Names tied at the maximum length."),
    ]
    return {operation.name: operation for operation in operations}


def available_operations() -> List[str]:
    """List available operation names."""
    return sorted(_operation_table().keys())


def registered_operations() -> List[Operation]:
    """Registered operations sorted by name."""
    return [operation for _, operation in sorted(_operation_table().items())]


def get_operation(name: str) -> Operation:
    operations = _operation_table()
    if name not in operations:
        raise InvalidArgumentError(
            f"Unknown operation '{name}'. Available: {', '.join(sorted(operations))}"
        )
    return operations[name]


def run_operation(
    name: str,
    params: Optional[Mapping[str, Any]] = None,
    gateway: Optional[PersonGateway] = None,
) -> Any:
    """
    Run one named operation and return its result.

    Parameters
    ----------
    name : str
        Registered operation name (see ``available_operations()``).
    params : mapping | None
        Typed keyword arguments for the operation.
    gateway : PersonGateway | None
        Gateway to run against. Defaults to one over the shared pool.

    Raises
    ------
    GatewayError
        Whatever the gateway raises; nothing is retried or swallowed here.
    """
    operation = get_operation(name)
    gateway = gateway or PersonGateway()
    kwargs = dict(params or {})

    log.info(f"[OPERATION START] {name}", extra={"operation": name, "params": sorted(kwargs)})
    try:
        result = operation.handler(gateway, **kwargs)
    except GatewayError:
        log.exception(f"[OPERATION FAILED] {name}", extra={"operation": name})
        raise
    log.info(f"[OPERATION SUCCESS] {name}", extra={"operation": name})
    return result


__all__ = [
    "Operation",
    "Param",
    "available_operations",
    "get_operation",
    "registered_operations",
    "run_operation",
]
