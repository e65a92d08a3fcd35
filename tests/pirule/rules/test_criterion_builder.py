"""Tests for MatchCriterionBuilder."""

import itertools

import pytest

from pirule.errors import DuplicateFieldError, FieldWidthError, UnknownFieldError
from pirule.rules.criterion import MatchCriterionBuilder, build_criterion
from pirule.rules.selector import build_selector
from pirule.schemas.pipeline import PipelineSchema


@pytest.mark.unit
class TestMatchCriterionBuilder:
    """Exact-match criterion construction."""

    def test_builds_router_interface_criterion(self, sai_schema: PipelineSchema) -> None:
        table = sai_schema.table("ingress.routing.router_interface_table")

        criterion = (
            MatchCriterionBuilder(table).match_exact("router_interface_id", "Ethernet/32").build()
        )

        assert criterion.get("router_interface_id") == b"Ethernet/32"
        assert len(criterion.matches) == 1

    def test_empty_criterion_allowed(self, synthetic_schema: PipelineSchema) -> None:
        criterion = MatchCriterionBuilder(synthetic_schema.table("acl")).build()

        assert criterion.matches == ()

    def test_duplicate_field_rejected(self, sai_schema: PipelineSchema) -> None:
        table = sai_schema.table("ingress.routing.router_interface_table")
        builder = MatchCriterionBuilder(table).match_exact("router_interface_id", "Ethernet/32")

        with pytest.raises(DuplicateFieldError, match="router_interface_id"):
            builder.match_exact("router_interface_id", "Ethernet/33")

    def test_duplicate_field_rejected_in_pairs(self, sai_schema: PipelineSchema) -> None:
        table = sai_schema.table("ingress.routing.router_interface_table")

        with pytest.raises(DuplicateFieldError):
            build_criterion(
                table,
                [("router_interface_id", "Ethernet/32"), ("router_interface_id", "Ethernet/32")],
            )

    def test_unknown_field_rejected(self, sai_schema: PipelineSchema) -> None:
        table = sai_schema.table("ingress.routing.router_interface_table")

        with pytest.raises(UnknownFieldError, match="neighbor_id"):
            MatchCriterionBuilder(table).match_exact("neighbor_id", "fe80::1")

    def test_width_mismatch_rejected(self, synthetic_schema: PipelineSchema) -> None:
        builder = MatchCriterionBuilder(synthetic_schema.table("acl"))

        with pytest.raises(FieldWidthError, match="ether_type"):
            builder.match_exact("ether_type", b"\x08\x00\x00")

    def test_supply_order_does_not_matter(self, synthetic_schema: PipelineSchema) -> None:
        table = synthetic_schema.table("acl")
        pairs = [("ether_type", 0x0800), ("dst_mac", "90:fb:76:00:00:98"), ("in_port", 7)]

        selectors = {
            build_selector(build_criterion(table, ordering))
            for ordering in itertools.permutations(pairs)
        }

        assert len(selectors) == 1
        (selector,) = selectors
        assert [match.field_id for match in selector.criterion.matches] == [
            "dst_mac",
            "ether_type",
            "in_port",
        ]
