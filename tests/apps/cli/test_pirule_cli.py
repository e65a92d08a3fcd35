"""CLI tests for the pirule schema, build and install commands."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from apps.cli.main import app
from pirule.errors import GatewayUnavailableError

RULE_YAML = """\
table: ingress.routing.router_interface_table
match:
  router_interface_id: Ethernet/32
action: ingress.routing.set_port_and_src_mac
params:
  src_mac: 0x90fb760098
  port: Ethernet32
priority: 777
device_id: device:leaf1
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide Typer CLI runner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the CLI callback from replacing pytest's log handlers."""
    with patch("apps.cli.pirule_cli.main.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def rule_file(tmp_path: Path) -> Path:
    path = tmp_path / "router_interface.yaml"
    path.write_text(RULE_YAML)
    return path


@pytest.fixture
def mock_gateway():
    """Patch the ONOS gateway used by install with a context-managed mock."""
    with patch("apps.cli.pirule_cli.commands.rule.OnosRestGateway") as mock_gateway_cls:
        gateway = MagicMock()
        gateway.__enter__.return_value = gateway
        gateway.__exit__.return_value = None
        mock_gateway_cls.from_config.return_value = gateway
        yield gateway


@pytest.mark.unit
class TestSchemaCommand:
    """pirule schema show."""

    def test_shows_bundled_schema(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["schema", "show"])

        assert result.exit_code == 0
        assert "Pipeline: sai" in result.stdout

    def test_missing_schema_file_exits_1(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["schema", "show", "--schema", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Error loading pipeline schema" in result.stdout


@pytest.mark.unit
class TestBuildCommand:
    """pirule build."""

    def test_prints_rule(self, cli_runner: CliRunner, rule_file: Path) -> None:
        result = cli_runner.invoke(app, ["build", str(rule_file)])

        assert result.exit_code == 0
        assert "Rule id:" in result.stdout
        payload = json.loads(result.stdout.split("\n", 1)[1])
        assert payload["deviceId"] == "device:leaf1"
        assert payload["treatment"]["instructions"][0]["actionParams"]["src_mac"] == "0090fb760098"

    def test_same_rule_id_every_run(self, cli_runner: CliRunner, rule_file: Path) -> None:
        first = cli_runner.invoke(app, ["build", str(rule_file)])
        second = cli_runner.invoke(app, ["build", str(rule_file)])

        assert first.stdout.splitlines()[0] == second.stdout.splitlines()[0]

    def test_construction_error_exits_1(
        self, cli_runner: CliRunner, tmp_path: Path
    ) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text(RULE_YAML.replace("device_id: device:leaf1", "device_id: leaf1"))

        result = cli_runner.invoke(app, ["build", str(bad)])

        assert result.exit_code == 1
        assert "Cannot build rule" in result.stdout

    def test_missing_rule_file_exits_1(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["build", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1


@pytest.mark.unit
class TestInstallCommand:
    """pirule install."""

    def test_submits_once(
        self, cli_runner: CliRunner, rule_file: Path, mock_gateway: MagicMock
    ) -> None:
        from pirule.core.ports.rule_submission import SubmissionOutcome

        mock_gateway.submit.return_value = SubmissionOutcome.accept()

        result = cli_runner.invoke(app, ["install", str(rule_file)])

        assert result.exit_code == 0
        mock_gateway.submit.assert_called_once()
        assert "Submitted rule" in result.stdout
        assert "device:leaf1" in result.stdout

    def test_rejection_exits_2(
        self, cli_runner: CliRunner, rule_file: Path, mock_gateway: MagicMock
    ) -> None:
        from pirule.core.ports.rule_submission import SubmissionOutcome

        mock_gateway.submit.return_value = SubmissionOutcome.reject("not master")

        result = cli_runner.invoke(app, ["install", str(rule_file)])

        assert result.exit_code == 2
        assert "Submission rejected: not master" in result.stdout

    def test_unreachable_gateway_exits_3(
        self, cli_runner: CliRunner, rule_file: Path, mock_gateway: MagicMock
    ) -> None:
        mock_gateway.submit.side_effect = GatewayUnavailableError("connection refused")

        result = cli_runner.invoke(app, ["install", str(rule_file)])

        assert result.exit_code == 3
        assert "Gateway unavailable" in result.stdout

    def test_construction_error_never_submits(
        self, cli_runner: CliRunner, tmp_path: Path, mock_gateway: MagicMock
    ) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text(RULE_YAML.replace("priority: 777", "priority: -1"))

        result = cli_runner.invoke(app, ["install", str(bad)])

        assert result.exit_code == 1
        mock_gateway.submit.assert_not_called()
