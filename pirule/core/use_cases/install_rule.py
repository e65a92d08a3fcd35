"""InstallRuleUseCase - build one flow rule and submit it once.

Pipeline: RuleRequest → criterion + action → selector + treatment → FlowRule
→ RuleSubmissionGateway.submit().

Submission is best-effort: a single call, no verification that the device
was programmed, no retry of a rejection.
"""

import logging

from pirule.core.ports.rule_submission import RuleSubmissionGateway
from pirule.errors import SubmissionRejected
from pirule.rules.action import build_action
from pirule.rules.assembler import assemble_rule
from pirule.rules.criterion import build_criterion
from pirule.rules.selector import build_selector, build_treatment
from pirule.schemas.pipeline import PipelineSchema
from pirule.schemas.request import RuleRequest
from pirule.schemas.rule import FlowRule

logger = logging.getLogger(__name__)


def build_rule(
    schema: PipelineSchema, request: RuleRequest, app_id: str | None = None
) -> FlowRule:
    """Build the rule described by *request* without submitting it.

    Args:
        schema: PipelineSchema supplying widths and signatures.
        request: Rule inputs.
        app_id: Owning application used when the request names none.

    Raises:
        PipelineError: Any construction error from the builders.
    """
    table = schema.table(request.table)
    criterion = build_criterion(table, request.match.items())
    action = build_action(schema, request.action, request.params.items())

    return assemble_rule(
        selector=build_selector(criterion),
        treatment=build_treatment(action),
        table_id=request.table,
        priority=request.priority,
        device_id=request.device_id,
        app_id=request.app_id or app_id,
        permanent=request.permanent,
        timeout=request.timeout,
        schema=schema,
    )


class InstallRuleUseCase:
    """Use case for installing the rule described by a RuleRequest.

    Construction errors propagate unchanged and happen before the gateway is
    called. A rejected submission raises SubmissionRejected with the
    gateway's reason.

    Attributes:
        gateway: RuleSubmissionGateway the rule is handed to.
        schema: PipelineSchema supplying widths and signatures.
        app_id: Owning application used when the request names none.
    """

    def __init__(
        self,
        gateway: RuleSubmissionGateway,
        schema: PipelineSchema,
        app_id: str | None = None,
    ) -> None:
        self.gateway = gateway
        self.schema = schema
        self.app_id = app_id

        logger.debug("Initialized InstallRuleUseCase (pipeline=%s)", schema.name)

    def build(self, request: RuleRequest) -> FlowRule:
        """Build the rule without submitting it.

        Raises:
            PipelineError: Any construction error from the builders.
        """
        return build_rule(self.schema, request, app_id=self.app_id)

    def submit(self, rule: FlowRule) -> FlowRule:
        """Hand an already built rule to the gateway once.

        Raises:
            SubmissionRejected: If the gateway rejects the submission.
        """
        outcome = self.gateway.submit([rule])
        if not outcome.accepted:
            reason = outcome.reason or "no reason given"
            logger.error(
                "Flow rule %s rejected for %s: %s", rule.rule_id[:12], rule.device_id, reason
            )
            raise SubmissionRejected(reason)

        logger.info(
            "Submitted flow rule %s (device=%s, table=%s, priority=%s)",
            rule.rule_id[:12],
            rule.device_id,
            rule.table_id,
            rule.priority,
        )
        return rule

    def execute(self, request: RuleRequest) -> FlowRule:
        """Build the requested rule and submit it once.

        Returns:
            FlowRule: The submitted rule.
        """
        return self.submit(self.build(request))


# Export public API
__all__ = ["InstallRuleUseCase", "build_rule"]
