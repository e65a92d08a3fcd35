"""RuleSubmissionGateway - Port interface for the rule management service.

Defines the contract for handing assembled rules to whatever applies them to
devices. Core use cases depend on this interface; adapters (pirule.gateways)
implement it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from pirule.schemas.rule import FlowRule


class SubmissionOutcome(BaseModel):
    """Synchronous answer of a gateway to one submission.

    Acceptance only means the gateway took the rules; programming the device
    completes asynchronously and is not observable through this port.
    """

    model_config = ConfigDict(frozen=True)

    accepted: bool
    reason: str | None = None

    @classmethod
    def accept(cls) -> SubmissionOutcome:
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: str) -> SubmissionOutcome:
        return cls(accepted=False, reason=reason)


class RuleSubmissionGateway(Protocol):
    """Port interface for rule submission.

    Implementations are responsible for serializing concurrent submissions
    against one device, for rejecting submissions from a controller that is
    not master of the device, and for superseding an installed rule that has
    the same (device, table, selector) key.
    """

    def submit(self, rules: Sequence[FlowRule]) -> SubmissionOutcome:
        """Submit rules for installation.

        Args:
            rules: Assembled rules, possibly for several devices.

        Returns:
            SubmissionOutcome: accepted, or rejected with the gateway's reason.

        Raises:
            GatewayUnavailableError: If the gateway cannot be reached.
        """
        ...


# Export public API
__all__ = ["RuleSubmissionGateway", "SubmissionOutcome"]
