"""
Seed script for the person query gateway.

Applies the schema and inserts a fixed set of demo people through the gateway,
so every row goes through the same pre-insert hooks as application writes.
"""

from __future__ import annotations

import sys
import time
from typing import List, Tuple

import typer
from psycopg_pool import ConnectionPool

from person_gateway.domain.models import Person
from person_gateway.gateway import PersonGateway
from person_gateway.infrastructure.db_factory import apply_schema, build_dsn, get_sync_connection

app = typer.Typer(help="Create the persons table and load demo rows.")

DEMO_PERSONS: List[Tuple[str, str, str]] = [
    ("Andres", "Guzman", "Java"),
    ("Barry", "White", "JavaScript"),
    ("Lionel", "Messi", "Kotlin"),
    ("Cristiano", "Ronaldo", "Python"),
    ("Pepe", "Doe", "Java"),
    ("Lalo", "Mena", "Python"),
    ("Luis", "Miguel", "Kotlin"),
    ("Barry", "Allen", "Go"),
]


def _demo_people() -> List[Person]:
    return [
        Person(name=name, lastname=lastname, programming_language=language)
        for name, lastname, language in DEMO_PERSONS
    ]


def _truncate(dsn: str) -> None:
    with get_sync_connection(dsn) as conn:
        with conn.cursor() as cur:
            cur.execute("TRUNCATE TABLE public.persons RESTART IDENTITY;")
        conn.commit()


def _seed(gateway: PersonGateway, people: List[Person]) -> List[Person]:
    return [gateway.insert(person) for person in people]


@app.command()
def main(
    dsn: str | None = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
    reset: bool = typer.Option(
        False,
        "--reset",
        help="Truncate the table (and restart ids) before seeding.",
    ),
) -> None:
    """
    Apply the schema and insert the demo people.
    """
    start = time.perf_counter()
    conn_dsn = dsn or build_dsn()

    conn = get_sync_connection(conn_dsn)
    try:
        apply_schema(conn)
    finally:
        conn.close()

    if reset:
        typer.echo("Truncating persons...")
        _truncate(conn_dsn)

    with ConnectionPool(conninfo=conn_dsn, min_size=1, max_size=2, open=True) as pool:
        created = _seed(PersonGateway(pool=pool), _demo_people())

    duration = time.perf_counter() - start
    typer.echo(f"Inserted {len(created)} persons in {duration:.2f}s.")
    for person in created:
        typer.echo(f"  {person}")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
