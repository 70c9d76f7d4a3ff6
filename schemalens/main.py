"""schemalens - Main entry point."""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from .config import settings
from .database.models import Schema
from .dialects import get_dialect
from .errors import SchemaLensError
from .logging_utils import configure_logging

app = typer.Typer(
    name="schemalens",
    help="Inspect database metadata in a canonical schema form",
    add_completion=False,
)

console = Console()


async def _inspect(client: str, schema_name: Optional[str]) -> Schema:
    config = settings.to_database_config()
    config.client = client
    if schema_name:
        config.connection.schema_name = schema_name

    async with get_dialect(config) as dialect:
        return await dialect.schema_inspector.get_schema()


def _format_args(args) -> str:
    return ", ".join(json.dumps(arg) if isinstance(arg, dict) else str(arg) for arg in args)


@app.command()
def inspect(
    client: Optional[str] = typer.Option(None, "--client", "-c", help="Dialect (bigquery or clickhouse)"),
    schema_name: Optional[str] = typer.Option(None, "--schema", "-s", help="Namespace to inspect"),
    as_json: bool = typer.Option(False, "--json", help="Print the schema as JSON"),
):
    """Inspect the configured database and print its canonical schema."""
    configure_logging(settings.log_level)

    try:
        schema = asyncio.run(_inspect(client or settings.client, schema_name))
    except SchemaLensError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except ImportError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error inspecting {client or settings.client}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(schema.to_dict(), default=str))
        return

    for table in schema.tables:
        rich_table = RichTable(title=table.name)
        rich_table.add_column("Column")
        rich_table.add_column("Type")
        rich_table.add_column("Args")
        rich_table.add_column("Not null")
        rich_table.add_column("Default")
        for column in table.columns:
            rich_table.add_row(
                column.name,
                column.type,
                _format_args(column.args),
                "yes" if column.not_nullable else "",
                column.default_to or "",
            )
        console.print(rich_table)

    console.print(f"[green]{len(schema.tables)} tables inspected[/green]")


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Client: {settings.client}")
    console.print(f"  Host: {settings.host or 'Not set'}")
    console.print(f"  Database: {settings.database or 'Not set'}")
    console.print(f"  Schema: {settings.schema_name or 'Dialect default'}")
    console.print(f"  Project: {settings.project_id or 'Not set'}")
    console.print(f"  Password configured: {'Yes' if settings.password else 'No'}")


if __name__ == "__main__":
    app()
