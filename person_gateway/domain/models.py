"""
Domain models for the person query gateway.

Defines the ``Person`` record aligned with `person_gateway/db/init.sql`, the read-only shapes
returned by projection and aggregate queries, and the small vocabulary used to
describe queries (fields, sort keys, case modes).
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Person(BaseModel):
    """
    Representation of a single row in the `persons` table.

    A person whose ``id`` is ``None`` has not been persisted yet. Once the
    store has assigned an id, equality is by id alone.
    """

    id: Optional[int] = Field(None, description="Primary key, assigned by the store on insert.")
    name: str = Field(..., description="Given name.")
    lastname: str = Field(..., description="Family name.")
    programming_language: Optional[str] = Field(
        None, description="Preferred programming language (column `programing_language`)."
    )
    created_at: Optional[datetime] = Field(None, description="Set once by the pre-insert hook.")
    updated_at: Optional[datetime] = Field(None, description="Set by the pre-update hook.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @property
    def is_new(self) -> bool:
        return self.id is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Person):
            return NotImplemented
        if self.id is not None and other.id is not None:
            return self.id == other.id
        return super().__eq__(other)

    def __hash__(self) -> int:
        if self.id is not None:
            return hash((Person, self.id))
        return hash((self.name, self.lastname, self.programming_language))

    def __str__(self) -> str:
        return (
            f"{{ id='{self.id}', name='{self.name}', lastname='{self.lastname}', "
            f"programming_language='{self.programming_language}' }}"
        )


class PersonName(BaseModel):
    """Name-only projection of a person."""

    name: str
    lastname: str

    model_config = {"frozen": True}


class NameLength(BaseModel):
    """A name together with its character count."""

    name: str
    length: int

    model_config = {"frozen": True}


class AggregateSummary(BaseModel):
    """
    min, max, sum, avg and count computed over one field in a single row.

    On an empty table ``min``, ``max`` and ``avg`` are ``None`` while ``sum``
    and ``count`` are zero.
    """

    min: Optional[int] = None
    max: Optional[int] = None
    sum: int = 0
    avg: Optional[float] = None
    count: int = 0

    model_config = {"frozen": True}


class PersonField(str, Enum):
    """Queryable attributes of a person. The only source of column names in SQL."""

    ID = "id"
    NAME = "name"
    LASTNAME = "lastname"
    PROGRAMMING_LANGUAGE = "programming_language"

    @property
    def column(self) -> str:
        return _COLUMNS[self]

    @property
    def is_text(self) -> bool:
        return self is not PersonField.ID


_COLUMNS: Dict[PersonField, str] = {
    PersonField.ID: "id",
    PersonField.NAME: "name",
    PersonField.LASTNAME: "lastname",
    PersonField.PROGRAMMING_LANGUAGE: "programing_language",
}


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class NameCase(str, Enum):
    """Case applied to the concatenated ``name lastname`` projection."""

    RAW = "raw"
    UPPER = "upper"
    LOWER = "lower"


@dataclass(frozen=True)
class SortKey:
    """One key of a multi-key sort order."""

    field: PersonField
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def parse(cls, spec: str) -> "SortKey":
        """
        Build a sort key from ``"field"`` or ``"field:direction"``.

        Raises ValueError for unknown fields or directions.
        """
        field_name, _, direction = spec.strip().partition(":")
        return cls(
            field=PersonField(field_name.strip()),
            direction=SortDirection(direction.strip().lower() or SortDirection.ASC.value),
        )


def person_from_row(row: Dict[str, Any]) -> Person:
    """Build a Person from a dict row produced by the gateway's SELECT list."""
    return Person.model_validate(row)


__all__ = [
    "AggregateSummary",
    "NameCase",
    "NameLength",
    "Person",
    "PersonField",
    "PersonName",
    "SortDirection",
    "SortKey",
    "person_from_row",
]
