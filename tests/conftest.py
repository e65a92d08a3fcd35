"""Shared pytest fixtures for the pirule test suite.

Provides pipeline schemas, the reference router-interface rule request and
an in-memory gateway used across test modules.
"""

import os

import pytest

from pirule.common.config import get_config
from pirule.gateways.memory import InMemoryFlowRuleStore
from pirule.schemas.pipeline import PipelineSchema, default_pipeline_schema, parse_pipeline_schema
from pirule.schemas.request import RuleRequest

ROUTER_INTERFACE_TABLE = "ingress.routing.router_interface_table"
SET_PORT_AND_SRC_MAC = "ingress.routing.set_port_and_src_mac"

SYNTHETIC_SCHEMA = """
name: synthetic
tables:
  - id: acl
    match_fields:
      - {id: ether_type, bitwidth: 16}
      - {id: dst_mac, bitwidth: 48}
      - {id: in_port, bitwidth: 9}
    actions: [drop, set_vlan, mirror]
  - id: l2
    match_fields:
      - {id: dst_mac, bitwidth: 48}
    actions: [set_vlan]
actions:
  - id: drop
  - id: set_vlan
    params:
      - {id: vlan_id, bitwidth: 12}
  - id: mirror
    params:
      - {id: session_id, bitwidth: 8}
      - {id: port, bitwidth: null}
      - {id: dst_mac, bitwidth: 48}
"""

# ========== Test Environment Setup ==========


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Pin configuration to defaults so a developer's .env cannot leak in."""
    for name in ("PIPELINE_SCHEMA_PATH", "APP_ID", "SUBMIT_MAX_ATTEMPTS"):
        os.environ.pop(name, None)
    os.environ["LOG_LEVEL"] = "DEBUG"
    get_config.cache_clear()

    yield

    get_config.cache_clear()


# ========== Schema Fixtures ==========


@pytest.fixture
def sai_schema() -> PipelineSchema:
    """Bundled SAI schema subset."""
    return default_pipeline_schema()


@pytest.fixture
def synthetic_schema() -> PipelineSchema:
    """Small schema with fixed-width fields for width and signature tests."""
    return parse_pipeline_schema(SYNTHETIC_SCHEMA, source="synthetic")


# ========== Rule Fixtures ==========


@pytest.fixture
def router_interface_request() -> RuleRequest:
    """The router-interface rule installed on leaf1 at activation."""
    return RuleRequest(
        table=ROUTER_INTERFACE_TABLE,
        match={"router_interface_id": "Ethernet/32"},
        action=SET_PORT_AND_SRC_MAC,
        params={"src_mac": 0x90FB760098, "port": "Ethernet32"},
        priority=777,
        device_id="device:leaf1",
        app_id="org.foo.app",
        permanent=True,
    )


@pytest.fixture
def memory_gateway() -> InMemoryFlowRuleStore:
    """Gateway that masters every device."""
    return InMemoryFlowRuleStore()
