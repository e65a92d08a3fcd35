"""Flow rule commands for the pirule CLI.

- build: Assemble a rule from a YAML request and print its ONOS JSON
- install: Assemble a rule and submit it once to ONOS
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from apps.cli.pirule_cli.commands.common import resolve_schema
from pirule.common.config import get_config
from pirule.common.logging import get_logger
from pirule.core.use_cases.install_rule import InstallRuleUseCase, build_rule
from pirule.errors import GatewayUnavailableError, PipelineError, SubmissionRejected
from pirule.gateways.codec import flow_rule_to_json
from pirule.gateways.onos_rest import OnosRestGateway
from pirule.schemas.request import RuleRequest

console = Console()
logger = get_logger(__name__)


def build_command(rule_file: Path, schema_path: Path | None = None) -> None:
    """Assemble the rule described by *rule_file* and print it.

    Nothing is submitted.

    Example:
        $ pirule build rules/router_interface.yaml
    """
    try:
        request = RuleRequest.from_file(rule_file)
        rule = build_rule(resolve_schema(schema_path), request, app_id=get_config().app_id)
    except PipelineError as e:
        console.print(f"[red]Cannot build rule: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[bold]Rule id:[/bold] {rule.rule_id}")
    console.print_json(json.dumps(flow_rule_to_json(rule)))


def install_command(rule_file: Path, schema_path: Path | None = None) -> None:
    """Assemble the rule described by *rule_file* and submit it once to ONOS.

    Exit codes: 1 for construction errors, 2 for a rejected submission,
    3 when ONOS cannot be reached.

    Example:
        $ pirule install rules/router_interface.yaml
    """
    try:
        request = RuleRequest.from_file(rule_file)
        schema = resolve_schema(schema_path)
    except PipelineError as e:
        console.print(f"[red]Cannot build rule: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    config = get_config()
    with OnosRestGateway.from_config(config) as gateway:
        use_case = InstallRuleUseCase(gateway=gateway, schema=schema, app_id=config.app_id)
        try:
            rule = use_case.execute(request)
        except PipelineError as e:
            console.print(f"[red]Cannot build rule: {escape(str(e))}[/red]")
            raise typer.Exit(1) from e
        except SubmissionRejected as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(2) from e
        except GatewayUnavailableError as e:
            console.print(f"[red]Gateway unavailable: {escape(str(e))}[/red]")
            logger.exception("Rule submission failed")
            raise typer.Exit(3) from e

    console.print(f"[green]✓[/green] Submitted rule {rule.rule_id[:12]} to {rule.device_id}")


__all__ = ["build_command", "install_command"]
