"""Rule construction: criterion, action, selector/treatment and rule builders."""

from pirule.rules.action import ActionBuilder, build_action
from pirule.rules.assembler import MAX_PRIORITY, MIN_PRIORITY, FlowRuleBuilder, assemble_rule
from pirule.rules.criterion import MatchCriterionBuilder, build_criterion
from pirule.rules.selector import build_selector, build_treatment

__all__ = [
    "MAX_PRIORITY",
    "MIN_PRIORITY",
    "ActionBuilder",
    "FlowRuleBuilder",
    "MatchCriterionBuilder",
    "assemble_rule",
    "build_action",
    "build_criterion",
    "build_selector",
    "build_treatment",
]
