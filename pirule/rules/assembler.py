"""Flow rule assembler.

Composes selector, treatment, table, priority, device, owning application
and permanence into one immutable FlowRule. Rule-level attributes are
validated here; device reachability and mastership are left to the
submission gateway.
"""

import logging

from pirule.errors import (
    ActionNotAllowedError,
    IncompleteRuleError,
    InvalidPriorityError,
    InvalidTimeoutError,
    UnknownFieldError,
)
from pirule.schemas.pipeline import PipelineSchema
from pirule.schemas.rule import (
    MAX_PRIORITY,
    MIN_PRIORITY,
    DeviceId,
    FlowRule,
    Selector,
    Treatment,
)

logger = logging.getLogger(__name__)


def validate_priority(priority: int) -> int:
    """Return *priority* if it is an integer in [MIN_PRIORITY, MAX_PRIORITY].

    Raises:
        InvalidPriorityError: Otherwise.
    """
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise InvalidPriorityError(f"Priority must be an integer, got {type(priority).__name__}")
    if priority < MIN_PRIORITY:
        raise InvalidPriorityError(f"Priority must be non-negative, got {priority}")
    if priority > MAX_PRIORITY:
        raise InvalidPriorityError(f"Priority must be at most {MAX_PRIORITY}, got {priority}")
    return priority


class FlowRuleBuilder:
    """Fluent builder for a FlowRule.

    Priority and device id are checked as soon as they are supplied, so a
    malformed literal fails before anything else is assembled.

    Example:
        >>> rule = (
        ...     FlowRuleBuilder(schema)
        ...     .with_selector(selector)
        ...     .with_treatment(treatment)
        ...     .for_table("ingress.routing.router_interface_table")
        ...     .make_permanent()
        ...     .with_priority(777)
        ...     .for_device("device:leaf1")
        ...     .from_app("org.foo.app")
        ...     .build()
        ... )
    """

    def __init__(self, schema: PipelineSchema | None = None) -> None:
        self.schema = schema
        self._selector: Selector | None = None
        self._treatment: Treatment | None = None
        self._table_id: str | None = None
        self._priority: int | None = None
        self._device_id: DeviceId | None = None
        self._app_id: str | None = None
        self._permanent = True
        self._timeout = 0

    def with_selector(self, selector: Selector) -> "FlowRuleBuilder":
        self._selector = selector
        return self

    def with_treatment(self, treatment: Treatment) -> "FlowRuleBuilder":
        self._treatment = treatment
        return self

    def for_table(self, table_id: str) -> "FlowRuleBuilder":
        self._table_id = table_id
        return self

    def with_priority(self, priority: int) -> "FlowRuleBuilder":
        self._priority = validate_priority(priority)
        return self

    def for_device(self, device_id: str | DeviceId) -> "FlowRuleBuilder":
        self._device_id = DeviceId.parse(device_id)
        return self

    def from_app(self, app_id: str) -> "FlowRuleBuilder":
        self._app_id = app_id
        return self

    def make_permanent(self) -> "FlowRuleBuilder":
        self._permanent = True
        self._timeout = 0
        return self

    def make_temporary(self, timeout: int) -> "FlowRuleBuilder":
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise InvalidTimeoutError(
                f"Timeout must be a positive number of seconds, got {timeout!r}"
            )
        self._permanent = False
        self._timeout = timeout
        return self

    def _check_against_schema(
        self, selector: Selector, treatment: Treatment, table_id: str
    ) -> None:
        if self.schema is None:
            return
        table = self.schema.table(table_id)
        action_id = treatment.action.action_id
        if not table.allows(action_id):
            raise ActionNotAllowedError(action_id, table_id)
        for match in selector.criterion.matches:
            if table.match_field(match.field_id) is None:
                raise UnknownFieldError(match.field_id, table_id)

    def build(self) -> FlowRule:
        """Assemble the rule.

        Raises:
            IncompleteRuleError: If a required part was never supplied.
            UnknownTableError: If a schema is set and lacks the target table.
            ActionNotAllowedError: If the table does not permit the action.
            UnknownFieldError: If the selector matches a field the table lacks.
        """
        parts = {
            "selector": self._selector,
            "treatment": self._treatment,
            "table": self._table_id,
            "priority": self._priority,
            "device": self._device_id,
            "app": self._app_id,
        }
        missing = [name for name, value in parts.items() if value in (None, "")]
        if missing:
            raise IncompleteRuleError(f"Flow rule is missing: {', '.join(missing)}")

        self._check_against_schema(self._selector, self._treatment, self._table_id)

        rule = FlowRule(
            selector=self._selector,
            treatment=self._treatment,
            table_id=self._table_id,
            priority=self._priority,
            device_id=self._device_id,
            app_id=self._app_id,
            permanent=self._permanent,
            timeout=self._timeout,
        )
        logger.debug(
            "Assembled flow rule %s (device=%s, table=%s, priority=%s)",
            rule.rule_id[:12],
            rule.device_id,
            rule.table_id,
            rule.priority,
        )
        return rule


def assemble_rule(
    selector: Selector,
    treatment: Treatment,
    table_id: str,
    priority: int,
    device_id: str | DeviceId,
    app_id: str,
    permanent: bool = True,
    timeout: int | None = None,
    schema: PipelineSchema | None = None,
) -> FlowRule:
    """Assemble a flow rule in one call.

    Args:
        selector: Match side of the rule.
        treatment: Action side of the rule.
        table_id: Target table.
        priority: Non-negative priority, higher is evaluated first.
        device_id: Scheme-qualified device id (e.g. ``device:leaf1``).
        app_id: Owning application id.
        permanent: False for a rule that expires after *timeout* seconds.
        timeout: Required (and positive) when *permanent* is False.
        schema: Optional pipeline schema to check table/action consistency.

    Returns:
        FlowRule: The assembled rule.
    """
    builder = (
        FlowRuleBuilder(schema)
        .with_priority(priority)
        .for_device(device_id)
        .with_selector(selector)
        .with_treatment(treatment)
        .for_table(table_id)
        .from_app(app_id)
    )
    if permanent:
        builder.make_permanent()
    else:
        builder.make_temporary(timeout)
    return builder.build()


__all__ = ["MAX_PRIORITY", "MIN_PRIORITY", "FlowRuleBuilder", "assemble_rule", "validate_priority"]
