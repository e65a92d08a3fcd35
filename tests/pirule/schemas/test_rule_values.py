"""Tests for immutable rule value objects."""

import pytest
from pydantic import ValidationError

from pirule.errors import DuplicateFieldError, InvalidDeviceIdError
from pirule.schemas.rule import (
    ActionDescriptor,
    ActionParam,
    DeviceId,
    FlowRule,
    MatchCriterion,
    MatchField,
    Selector,
    Treatment,
)


def _rule(**overrides: object) -> FlowRule:
    fields = {
        "selector": Selector(
            criterion=MatchCriterion(matches=(MatchField(field_id="f", value=b"\x01"),))
        ),
        "treatment": Treatment(action=ActionDescriptor(action_id="drop")),
        "table_id": "acl",
        "priority": 10,
        "device_id": DeviceId.parse("device:leaf1"),
        "app_id": "org.foo.app",
    }
    fields.update(overrides)
    return FlowRule(**fields)


@pytest.mark.unit
class TestDeviceId:
    """Device identifier parsing."""

    @pytest.mark.parametrize("uri", ["device:leaf1", "of:0000000000000001", "grpc+p4:spine-2"])
    def test_parses_scheme_qualified_ids(self, uri: str) -> None:
        device = DeviceId.parse(uri)

        assert str(device) == uri
        assert device.scheme == uri.split(":", 1)[0]

    @pytest.mark.parametrize(
        "uri",
        ["not a uri", "leaf1", ":leaf1", "device:", "1device:leaf1", "", "device:leaf1\n"],
    )
    def test_rejects_malformed_ids(self, uri: str) -> None:
        with pytest.raises(InvalidDeviceIdError):
            DeviceId.parse(uri)

    def test_rejects_non_string(self) -> None:
        with pytest.raises(InvalidDeviceIdError):
            DeviceId.parse(42)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("scheme", "body"),
        [("not a", "uri"), ("1device", "leaf1"), ("device", ""), ("device", "leaf 1"), ("", "x")],
    )
    def test_direct_construction_rejects_malformed_parts(self, scheme: str, body: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            DeviceId(scheme=scheme, body=body)

        assert isinstance(exc_info.value.errors()[0]["ctx"]["error"], InvalidDeviceIdError)

    def test_parse_returns_existing_device_id(self) -> None:
        device = DeviceId.parse("device:leaf1")
        assert DeviceId.parse(device) is device


@pytest.mark.unit
class TestMatchCriterion:
    """Canonical ordering of match fields."""

    def test_fields_sorted_by_id(self) -> None:
        criterion = MatchCriterion(
            matches=(
                MatchField(field_id="z", value=b"\x01"),
                MatchField(field_id="a", value=b"\x02"),
            )
        )

        assert [match.field_id for match in criterion.matches] == ["a", "z"]
        assert criterion.get("z") == b"\x01"
        assert criterion.get("missing") is None

    def test_direct_construction_rejects_duplicates(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            MatchCriterion(
                matches=(
                    MatchField(field_id="a", value=b"\x01"),
                    MatchField(field_id="a", value=b"\x02"),
                )
            )

        assert isinstance(exc_info.value.errors()[0]["ctx"]["error"], DuplicateFieldError)


@pytest.mark.unit
class TestFlowRule:
    """Equality, hashing and identity of rules."""

    def test_rules_are_frozen(self) -> None:
        rule = _rule()
        with pytest.raises(ValidationError):
            rule.priority = 20  # type: ignore[misc]

    def test_equal_content_is_equal_and_hashes_equal(self) -> None:
        assert _rule() == _rule()
        assert hash(_rule()) == hash(_rule())
        assert len({_rule(), _rule()}) == 1

    def test_rule_id_is_deterministic(self) -> None:
        assert _rule().rule_id == _rule().rule_id
        assert len(_rule().rule_id) == 64
        assert _rule().rule_id != _rule(priority=11).rule_id

    def test_key_ignores_priority_and_treatment(self) -> None:
        other = _rule(
            priority=99,
            treatment=Treatment(
                action=ActionDescriptor(
                    action_id="set_vlan",
                    params=(ActionParam(param_id="vlan_id", value=b"\x00\x0a"),),
                )
            ),
        )

        assert other.key == _rule().key
        assert other != _rule()

    def test_canonical_uses_hex_values(self) -> None:
        canonical = _rule().canonical()

        assert canonical["device_id"] == "device:leaf1"
        assert canonical["match"] == {"f": "01"}
        assert canonical["action"] == {"id": "drop", "params": []}

    @pytest.mark.parametrize("priority", [-1, 65536, True, 1.5])
    def test_direct_construction_rejects_out_of_range_priority(self, priority: object) -> None:
        with pytest.raises(ValidationError):
            _rule(priority=priority)

    def test_priority_bounds_accepted(self) -> None:
        assert _rule(priority=0).priority == 0
        assert _rule(priority=65535).priority == 65535

    def test_direct_construction_rejects_negative_timeout(self) -> None:
        with pytest.raises(ValidationError):
            _rule(permanent=False, timeout=-5)

    def test_direct_construction_rejects_malformed_device(self) -> None:
        with pytest.raises(ValidationError):
            _rule(device_id={"scheme": "not a", "body": "uri"})
