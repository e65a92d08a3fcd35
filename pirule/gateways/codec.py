"""JSON encoding of flow rules in the ONOS REST flow format.

    {
      "priority": 777,
      "timeout": 0,
      "isPermanent": true,
      "deviceId": "device:leaf1",
      "tableId": "ingress.routing.router_interface_table",
      "selector": {"criteria": [{"type": "PROTOCOL_INDEPENDENT",
                                 "matches": [{"field": "router_interface_id",
                                              "match": "exact",
                                              "value": "457468..."}]}]},
      "treatment": {"instructions": [{"type": "PROTOCOL_INDEPENDENT",
                                      "subtype": "ACTION",
                                      "actionId": "ingress.routing.set_port_and_src_mac",
                                      "actionParams": {"port": "...", "src_mac": "..."}}]}
    }

Byte values are lowercase hex strings.
"""

from collections.abc import Sequence
from typing import Any

from pirule.schemas.rule import FlowRule, Selector, Treatment


def selector_to_json(selector: Selector) -> dict[str, Any]:
    matches = [
        {"field": match.field_id, "match": "exact", "value": match.value.hex()}
        for match in selector.criterion.matches
    ]
    return {"criteria": [{"type": "PROTOCOL_INDEPENDENT", "matches": matches}]}


def treatment_to_json(treatment: Treatment) -> dict[str, Any]:
    action = treatment.action
    return {
        "instructions": [
            {
                "type": "PROTOCOL_INDEPENDENT",
                "subtype": "ACTION",
                "actionId": action.action_id,
                "actionParams": {param.param_id: param.value.hex() for param in action.params},
            }
        ]
    }


def flow_rule_to_json(rule: FlowRule) -> dict[str, Any]:
    """Encode one rule as an ONOS flow object."""
    return {
        "priority": rule.priority,
        "timeout": rule.timeout,
        "isPermanent": rule.permanent,
        "deviceId": str(rule.device_id),
        "tableId": rule.table_id,
        "selector": selector_to_json(rule.selector),
        "treatment": treatment_to_json(rule.treatment),
    }


def flows_payload(rules: Sequence[FlowRule]) -> dict[str, Any]:
    """Encode rules as the body of ``POST /flows``."""
    return {"flows": [flow_rule_to_json(rule) for rule in rules]}


__all__ = ["flow_rule_to_json", "flows_payload", "selector_to_json", "treatment_to_json"]
