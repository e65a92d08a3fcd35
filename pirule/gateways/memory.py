"""In-memory rule submission gateway.

Keeps one entry per (device, table, selector) key, so resubmitting an
identical rule overwrites it instead of adding a duplicate. Optionally limits
which devices exist and which ones this controller instance masters.
"""

import logging
from collections.abc import Iterable, Sequence
from threading import Lock

from pirule.core.ports.rule_submission import SubmissionOutcome
from pirule.schemas.rule import DeviceId, FlowRule, Selector

logger = logging.getLogger(__name__)

RuleKey = tuple[DeviceId, str, Selector]


def _device_set(devices: Iterable[str | DeviceId] | None) -> frozenset[DeviceId] | None:
    if devices is None:
        return None
    return frozenset(DeviceId.parse(device) for device in devices)


class InMemoryFlowRuleStore:
    """Thread-safe flow rule table for tests and dry runs.

    A submission is checked as a whole before anything is stored: if any rule
    targets an unknown device or one this instance is not master of, the
    whole submission is rejected.

    Example:
        >>> store = InMemoryFlowRuleStore(mastered_devices=["device:leaf1"])
        >>> store.submit([rule]).accepted
        True
        >>> len(store.rules())
        1
    """

    def __init__(
        self,
        available_devices: Iterable[str | DeviceId] | None = None,
        mastered_devices: Iterable[str | DeviceId] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            available_devices: Devices that exist; None accepts any device.
            mastered_devices: Devices this instance masters; None masters all.
        """
        self._available = _device_set(available_devices)
        self._mastered = _device_set(mastered_devices)
        self._entries: dict[RuleKey, FlowRule] = {}
        self._lock = Lock()
        self.submissions = 0

    def _rejection(self, rule: FlowRule) -> str | None:
        if self._available is not None and rule.device_id not in self._available:
            return f"device {rule.device_id} is not available"
        if self._mastered is not None and rule.device_id not in self._mastered:
            return f"not master for device {rule.device_id}"
        return None

    def submit(self, rules: Sequence[FlowRule]) -> SubmissionOutcome:
        with self._lock:
            self.submissions += 1
            for rule in rules:
                reason = self._rejection(rule)
                if reason is not None:
                    logger.warning("Rejected submission: %s", reason)
                    return SubmissionOutcome.reject(reason)

            for rule in rules:
                previous = self._entries.get(rule.key)
                self._entries[rule.key] = rule
                if previous is None:
                    logger.debug("Installed flow rule %s", rule.rule_id[:12])
                elif previous != rule:
                    logger.debug("Replaced flow rule %s", previous.rule_id[:12])

            return SubmissionOutcome.accept()

    def withdraw(self, rules: Sequence[FlowRule]) -> int:
        """Remove installed rules by key. Returns the number removed."""
        with self._lock:
            removed = 0
            for rule in rules:
                if self._entries.pop(rule.key, None) is not None:
                    removed += 1
            return removed

    def rules(self, device_id: str | DeviceId | None = None) -> list[FlowRule]:
        """Return installed rules, optionally for one device."""
        with self._lock:
            entries = list(self._entries.values())
        if device_id is None:
            return entries
        device = DeviceId.parse(device_id)
        return [rule for rule in entries if rule.device_id == device]


__all__ = ["InMemoryFlowRuleStore"]
