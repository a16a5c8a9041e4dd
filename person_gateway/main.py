from __future__ import annotations

import json
import sys
from typing import List, Optional

import typer

from person_gateway.config import get_settings
from person_gateway.errors import GatewayError
from person_gateway.infrastructure.db_factory import apply_schema, get_sync_connection
from person_gateway.operations import get_operation, registered_operations, run_operation
from person_gateway.reporter import print_result, to_jsonable
from person_gateway.utils.logging import configure_logging

app = typer.Typer(help="Person query gateway CLI.")


def _parse_pairs(pairs: List[str]) -> dict:
    parsed = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected key=value, got '{pair}'", param_hint="--param")
        parsed[key.strip()] = value
    return parsed


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"pool=({settings.db_pool_min_size},{settings.db_pool_max_size}) "
        f"statement_timeout={settings.db_statement_timeout_ms}ms env={settings.app_env}"
    )


@app.command()
def operations() -> None:
    """
    List the named operations and their parameters.
    """
    for operation in registered_operations():
        params = " ".join(p.name if p.required else f"[{p.name}]" for p in operation.params)
        marker = "*" if operation.mutating else " "
        typer.echo(f"{marker} {operation.name:<45} {params:<30} {operation.description}")


@app.command("init-db")
def init_db() -> None:
    """
    Create the persons table if it does not exist.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    conn = get_sync_connection()
    try:
        apply_schema(conn)
    finally:
        conn.close()
    typer.echo("Schema ready.")


@app.command()
def run(
    operation: str = typer.Argument(..., help="Operation name (see `operations`)."),
    param: Optional[List[str]] = typer.Option(
        None,
        "--param",
        "-p",
        help="Operation parameter as key=value (repeatable).",
    ),
    output: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json.",
    ),
) -> None:
    """
    Run one named operation and print its result.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    try:
        selected = get_operation(operation)
        params = selected.parse_params(_parse_pairs(param or []))
        result = run_operation(operation, params)
    except GatewayError as exc:
        typer.echo(f"{type(exc).__name__}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if output == "json":
        typer.echo(json.dumps(to_jsonable(result), indent=2))
    else:
        print_result(operation, result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
