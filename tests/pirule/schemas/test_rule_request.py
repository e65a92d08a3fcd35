"""Tests for loading RuleRequest from YAML."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pirule.core.use_cases.install_rule import build_rule
from pirule.schemas.pipeline import PipelineSchema
from pirule.schemas.request import RuleRequest, RuleRequestError


@pytest.mark.unit
class TestRuleRequestFromFile:
    """YAML loading and validation."""

    def test_loads_hex_and_string_values(self, tmp_path: Path) -> None:
        path = tmp_path / "rule.yaml"
        path.write_text(
            "table: ingress.routing.router_interface_table\n"
            "match: {router_interface_id: Ethernet/32}\n"
            "action: ingress.routing.set_port_and_src_mac\n"
            "params: {src_mac: 0x90fb760098, port: Ethernet32}\n"
            "priority: 777\n"
            "device_id: device:leaf1\n"
        )

        request = RuleRequest.from_file(path)

        assert request.params["src_mac"] == 0x90FB760098
        assert request.match["router_interface_id"] == "Ethernet/32"
        assert request.permanent is True
        assert request.app_id is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RuleRequestError, match="not found"):
            RuleRequest.from_file(tmp_path / "missing.yaml")

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "rule.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(RuleRequestError, match="structure"):
            RuleRequest.from_file(path)

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "rule.yaml"
        path.write_text("table: t\naction: a\npriority: 1\ndevice_id: device:x\ncolour: red\n")

        with pytest.raises(RuleRequestError, match="Invalid rule file"):
            RuleRequest.from_file(path)

    def test_request_is_immutable(self, router_interface_request: RuleRequest) -> None:
        with pytest.raises(ValidationError):
            router_interface_request.priority = 1  # type: ignore[misc]


@pytest.mark.unit
class TestRuleRequestColonValues:
    """Colon-separated octets in rule files keep their literal bytes."""

    def _write(self, tmp_path: Path, src_mac: str) -> Path:
        path = tmp_path / "rule.yaml"
        path.write_text(
            "table: ingress.routing.router_interface_table\n"
            "match: {router_interface_id: Ethernet/32}\n"
            "action: ingress.routing.set_port_and_src_mac\n"
            "params:\n"
            f"  src_mac: {src_mac}\n"
            "  port: Ethernet32\n"
            "priority: 777\n"
            "device_id: device:leaf1\n"
        )
        return path

    def test_all_digit_mac_stays_string(self, tmp_path: Path) -> None:
        request = RuleRequest.from_file(self._write(tmp_path, "12:34:56:00:00:00"))

        assert request.params["src_mac"] == "12:34:56:00:00:00"

    def test_all_digit_mac_encodes_literal_octets(
        self, tmp_path: Path, sai_schema: PipelineSchema
    ) -> None:
        request = RuleRequest.from_file(self._write(tmp_path, "12:34:56:00:00:00"))

        rule = build_rule(sai_schema, request, app_id="org.foo.app")

        assert rule.treatment.action.get("src_mac") == bytes.fromhex("123456000000")

    @pytest.mark.parametrize(
        ("literal", "expected"),
        [("0x90fb760098", 0x90FB760098), ("1234", 1234), ("-7", -7), ("1_000", 1000)],
    )
    def test_plain_integers_still_parsed(self, tmp_path: Path, literal: str, expected: int) -> None:
        request = RuleRequest.from_file(self._write(tmp_path, literal))

        assert request.params["src_mac"] == expected
