"""Ports for core use-cases."""

from __future__ import annotations

from pirule.core.ports.rule_submission import RuleSubmissionGateway, SubmissionOutcome

__all__ = ["RuleSubmissionGateway", "SubmissionOutcome"]
