"""
Rendering of operation results for the CLI.

Persons, name lengths, aggregate summaries and projection tuples are shown as
rich tables; scalars are printed as-is. ``to_jsonable`` gives the JSON view
of the same results.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from person_gateway.domain.models import AggregateSummary, NameLength, Person, PersonName


def to_jsonable(result: Any) -> Any:
    """Convert an operation result into plain JSON-compatible values."""
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if isinstance(result, (list, tuple)):
        return [to_jsonable(item) for item in result]
    if isinstance(result, datetime):
        return result.isoformat()
    return result


def _cell(value: Any) -> str:
    if value is None:
        return "[dim]null[/dim]"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return escape(str(value))


def _person_table(
    title: str, persons: Sequence[Person], extra: Optional[List[Any]] = None
) -> Table:
    table = Table(title=title, box=box.ROUNDED, caption=f"{len(persons)} row(s)")
    table.add_column("ID", justify="right", style="magenta", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Lastname", style="cyan")
    table.add_column("Language", style="green")
    table.add_column("Created", style="dim")
    table.add_column("Updated", style="dim")
    if extra is not None:
        table.add_column("Language (projected)", style="yellow")
    for index, person in enumerate(persons):
        cells = [
            _cell(person.id),
            _cell(person.name),
            _cell(person.lastname),
            _cell(person.programming_language),
            _cell(person.created_at),
            _cell(person.updated_at),
        ]
        if extra is not None:
            cells.append(_cell(extra[index]))
        table.add_row(*cells)
    return table


def _generic_table(title: str, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> Table:
    table = Table(title=title, box=box.ROUNDED, caption=f"{len(rows)} row(s)")
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*(_cell(value) for value in row))
    return table


def build_renderable(operation: str, result: Any) -> Any:
    """Pick a rich renderable (or plain string) for ``result``."""
    if result is None:
        return "[yellow]No result.[/yellow]"
    if isinstance(result, Person):
        return _person_table(operation, [result])
    if isinstance(result, AggregateSummary):
        return _generic_table(
            operation,
            ["min", "max", "sum", "avg", "count"],
            [(result.min, result.max, result.sum, result.avg, result.count)],
        )
    if isinstance(result, tuple):
        return _generic_table(operation, [f"col{i + 1}" for i in range(len(result))], [result])
    if not isinstance(result, list):
        return f"[bold]{escape(operation)}[/bold] = {escape(str(result))}"
    if not result:
        return "[yellow]No rows.[/yellow]"

    first = result[0]
    if isinstance(first, Person):
        return _person_table(operation, result)
    if isinstance(first, tuple) and len(first) == 2 and isinstance(first[0], Person):
        return _person_table(operation, [p for p, _ in result], [lang for _, lang in result])
    if isinstance(first, NameLength):
        return _generic_table(operation, ["name", "length"], [(r.name, r.length) for r in result])
    if isinstance(first, PersonName):
        rows = [(r.name, r.lastname) for r in result]
        return _generic_table(operation, ["name", "lastname"], rows)
    if isinstance(first, tuple):
        return _generic_table(operation, [f"col{i + 1}" for i in range(len(first))], result)
    return _generic_table(operation, ["value"], [(value,) for value in result])


def print_result(operation: str, result: Any, console: Optional[Console] = None) -> None:
    """Render one operation result to the console."""
    console = console or Console()
    console.print(build_renderable(operation, result))


__all__ = ["build_renderable", "print_result", "to_jsonable"]
