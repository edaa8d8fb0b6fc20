"""Database connection CLI commands."""

from __future__ import annotations

from typing import Any, Callable

import click
from rich.table import Table

from dbconnector.cli.utils import console, print_exception
from dbconnector.config.models import DatabaseType, Role
from dbconnector.db.connection import resolve_adapter
from dbconnector.db.connector import DBConnector
from dbconnector.exceptions import ConfigurationError, DatabaseError


def connection_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the engine, database and role options shared by every command."""
    func = click.option(
        "--role", "-r", required=True,
        type=click.Choice([r.value for r in Role]),
        help="Access role whose credentials are used",
    )(func)
    func = click.option("--database", "-d", required=True, help="Database name")(func)
    func = click.option(
        "--engine", "-e", "engine", required=True,
        type=click.Choice([t.value for t in DatabaseType], case_sensitive=False),
        help="Database engine",
    )(func)
    return func


@click.group(name="db")
@click.pass_context
def db_group(ctx: click.Context) -> None:
    """🗄️  Database connection tools."""
    pass


@db_group.command(name="dsn")
@connection_options
@click.pass_context
def dsn_command(ctx: click.Context, engine: str, database: str, role: str) -> None:
    """Show the connection string for a role without connecting."""
    try:
        adapter = resolve_adapter(engine, database, role)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration Error: {exc}[/red]")
        raise SystemExit(1) from exc

    table = Table(show_header=False, box=None)
    table.add_column("Property", style="cyan", width=10)
    table.add_column("Value", style="green")
    table.add_row("DSN:", adapter.build_connection_string())
    table.add_row("Driver:", adapter.get_driver_name())
    table.add_row("User:", adapter.credentials.username)
    console.print(table)


@db_group.command(name="test")
@connection_options
@click.pass_context
def test_connection_command(ctx: click.Context, engine: str, database: str, role: str) -> None:
    """Connect and run SELECT 1."""
    try:
        with DBConnector(engine, database, role) as db:
            db.fetch_column("SELECT 1")
            dsn = db.dsn
    except ConfigurationError as exc:
        console.print(f"[red]Configuration Error: {exc}[/red]")
        raise SystemExit(1) from exc
    except Exception as exc:
        print_exception("Connection test failed", exc, (ctx.obj or {}).get("verbose", False))
        raise SystemExit(1) from exc

    console.print(f"[green]✅ Connection successful[/green] ({dsn}, role {role})")


@db_group.command(name="query")
@click.argument("sql")
@connection_options
@click.pass_context
def query_command(ctx: click.Context, sql: str, engine: str, database: str, role: str) -> None:
    """Run a query and print its rows."""
    try:
        with DBConnector(engine, database, role) as db:
            rows = db.fetch_all(sql)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration Error: {exc}[/red]")
        raise SystemExit(1) from exc
    except DatabaseError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1) from exc
    except Exception as exc:
        print_exception("Query failed", exc, (ctx.obj or {}).get("verbose", False))
        raise SystemExit(1) from exc

    if not rows:
        console.print("[yellow]No rows returned[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    for column in rows[0]:
        table.add_column(str(column), style="cyan")
    for row in rows:
        table.add_row(*("NULL" if value is None else str(value) for value in row.values()))
    console.print(table)
    console.print(f"\n[dim]Total: {len(rows)} row(s)[/dim]")
