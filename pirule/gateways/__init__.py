"""Rule submission gateway adapters."""

from pirule.gateways.codec import flow_rule_to_json, flows_payload
from pirule.gateways.memory import InMemoryFlowRuleStore
from pirule.gateways.onos_rest import OnosRestGateway

__all__ = ["InMemoryFlowRuleStore", "OnosRestGateway", "flow_rule_to_json", "flows_payload"]
