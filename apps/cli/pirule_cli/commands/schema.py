"""Schema inspection commands for the pirule CLI.

- schema show: List the tables and actions of a pipeline schema
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from apps.cli.pirule_cli.commands.common import resolve_schema
from pirule.errors import SchemaLoadError

console = Console()


def _width(bitwidth: int | None) -> str:
    return "string" if bitwidth is None else f"{bitwidth} bits"


def show_command(schema_path: Path | None = None) -> None:
    """Print the tables and actions of a pipeline schema.

    Example:
        $ pirule schema show --schema pipelines/sai.yaml
    """
    try:
        schema = resolve_schema(schema_path)
    except SchemaLoadError as e:
        console.print(f"[red]Error loading pipeline schema: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    console.print(f"\n[bold]Pipeline:[/bold] {schema.name}\n")

    tables = Table(title="Tables")
    tables.add_column("Table", style="cyan")
    tables.add_column("Match fields")
    tables.add_column("Actions")
    for table in schema.tables:
        fields = ", ".join(f"{field.id} ({_width(field.bitwidth)})" for field in table.match_fields)
        tables.add_row(table.id, fields, "\n".join(table.actions))
    console.print(tables)

    actions = Table(title="Actions")
    actions.add_column("Action", style="cyan")
    actions.add_column("Parameters")
    for action in schema.actions:
        params = ", ".join(f"{param.id} ({_width(param.bitwidth)})" for param in action.params)
        actions.add_row(action.id, params or "-")
    console.print(actions)


__all__ = ["show_command"]
