"""Lifecycle entry points binding rule installation to a hosting runtime.

A hosting runtime calls ``start`` once on activation, ``reconfigure`` when
its configuration changes, and ``stop`` on deactivation. Each call runs
under its own correlation id.
"""

import logging
from dataclasses import dataclass

from pirule.common.config import get_config
from pirule.common.tracing import TracingContext
from pirule.core.ports.rule_submission import RuleSubmissionGateway
from pirule.core.use_cases.install_rule import InstallRuleUseCase
from pirule.schemas.pipeline import PipelineSchema, default_pipeline_schema, load_pipeline_schema
from pirule.schemas.request import RuleRequest
from pirule.schemas.rule import FlowRule

logger = logging.getLogger(__name__)


@dataclass
class ActivationHandle:
    """State of one activation: the request and the rule last submitted."""

    use_case: InstallRuleUseCase
    request: RuleRequest
    rule: FlowRule
    correlation_id: str
    active: bool = True


def _resolve_schema(schema: PipelineSchema | None) -> PipelineSchema:
    if schema is not None:
        return schema
    config = get_config()
    if config.pipeline_schema_path is not None:
        return load_pipeline_schema(config.pipeline_schema_path)
    return default_pipeline_schema()


def start(
    config: RuleRequest,
    gateway: RuleSubmissionGateway,
    schema: PipelineSchema | None = None,
) -> ActivationHandle:
    """Activate: build the configured rule and submit it once.

    Raises:
        PipelineError: If the rule cannot be built; nothing is submitted.
        SubmissionRejected: If the gateway rejects the rule.
    """
    with TracingContext() as correlation_id:
        logger.info("pirule Started")
        use_case = InstallRuleUseCase(
            gateway=gateway,
            schema=_resolve_schema(schema),
            app_id=get_config().app_id,
        )
        rule = use_case.execute(config)
        return ActivationHandle(
            use_case=use_case,
            request=config,
            rule=rule,
            correlation_id=correlation_id,
        )


def stop(handle: ActivationHandle) -> None:
    """Deactivate. Installed rules are left on the device."""
    with TracingContext(handle.correlation_id):
        if not handle.active:
            logger.warning("Activation already stopped")
            return
        handle.active = False
        logger.info("pirule Stopped")


def reconfigure(handle: ActivationHandle, config: RuleRequest) -> bool:
    """Apply a new rule configuration to an active handle.

    The rule is rebuilt from *config* and resubmitted only when it differs
    from the rule already submitted.

    Returns:
        bool: True if a new rule was submitted.

    Raises:
        RuntimeError: If the handle was stopped.
        PipelineError: If the new rule cannot be built; the handle is unchanged.
        SubmissionRejected: If the gateway rejects the new rule.
    """
    with TracingContext(handle.correlation_id):
        if not handle.active:
            raise RuntimeError("Cannot reconfigure a stopped activation")

        rule = handle.use_case.build(config)
        if rule == handle.rule:
            handle.request = config
            logger.info("Reconfigured (rule unchanged)")
            return False

        handle.use_case.submit(rule)
        handle.request = config
        handle.rule = rule
        logger.info("Reconfigured")
        return True


__all__ = ["ActivationHandle", "reconfigure", "start", "stop"]
