"""pirule CLI - Typer command-line interface for building and installing flow rules."""

from __future__ import annotations

from pathlib import Path

import typer

from apps.cli.pirule_cli.commands import schema_app
from pirule.common.logging import setup_logging

app = typer.Typer(
    name="pirule",
    help="pirule CLI - programmable-pipeline flow rules",
    add_completion=False,
)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Configure JSON logging before any command runs."""
    setup_logging(log_level)


@schema_app.command(name="show")
def schema_show(
    schema: Path | None = typer.Option(None, "--schema", "-s", help="Pipeline schema YAML file"),
) -> None:
    """
    Show the tables and actions of a pipeline schema.

    Examples:
        pirule schema show
        pirule schema show --schema pipelines/fabric.yaml
    """
    from apps.cli.pirule_cli.commands.schema import show_command

    show_command(schema_path=schema)


app.add_typer(schema_app, name="schema")


@app.command()
def build(
    rule_file: Path = typer.Argument(..., help="Rule request YAML file"),
    schema: Path | None = typer.Option(None, "--schema", "-s", help="Pipeline schema YAML file"),
) -> None:
    """
    Assemble a flow rule and print it as ONOS JSON without submitting it.

    Examples:
        pirule build rules/router_interface.yaml
    """
    from apps.cli.pirule_cli.commands.rule import build_command

    build_command(rule_file=rule_file, schema_path=schema)


@app.command()
def install(
    rule_file: Path = typer.Argument(..., help="Rule request YAML file"),
    schema: Path | None = typer.Option(None, "--schema", "-s", help="Pipeline schema YAML file"),
) -> None:
    """
    Assemble a flow rule and submit it once to ONOS.

    Examples:
        pirule install rules/router_interface.yaml
        ONOS_URL=http://onos:8181/onos/v1 pirule install rules/router_interface.yaml
    """
    from apps.cli.pirule_cli.commands.rule import install_command

    install_command(rule_file=rule_file, schema_path=schema)


if __name__ == "__main__":
    app()
