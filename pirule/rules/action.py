"""Action builder.

Binds parameter values to an action declared in the pipeline schema. The
supplied parameter set must equal the declared signature; the resulting
parameters always follow the declared order, so logically identical actions
serialize identically whatever order the caller used.
"""

import logging
from collections import Counter
from collections.abc import Iterable

from pirule.errors import ParameterMismatchError
from pirule.schemas.pipeline import ActionSpec, PipelineSchema
from pirule.schemas.rule import ActionDescriptor, ActionParam
from pirule.schemas.values import Value, encode_value

logger = logging.getLogger(__name__)


class ActionBuilder:
    """Builder for one action invocation.

    Example:
        >>> action = (
        ...     ActionBuilder(default_pipeline_schema())
        ...     .with_id("ingress.routing.set_port_and_src_mac")
        ...     .with_parameter("src_mac", 0x90FB760098)
        ...     .with_parameter("port", "Ethernet32")
        ...     .build()
        ... )
        >>> [param.param_id for param in action.params]
        ['port', 'src_mac']
    """

    def __init__(self, schema: PipelineSchema) -> None:
        self.schema = schema
        self._spec: ActionSpec | None = None
        self._params: list[tuple[str, Value]] = []

    def with_id(self, action_id: str) -> "ActionBuilder":
        """Select the action.

        Raises:
            UnknownActionError: If the schema's action catalog lacks *action_id*.
        """
        self._spec = self.schema.action(action_id)
        return self

    def with_parameter(self, param_id: str, value: Value) -> "ActionBuilder":
        self._params.append((param_id, value))
        return self

    def with_parameters(self, params: Iterable[tuple[str, Value]]) -> "ActionBuilder":
        for param_id, value in params:
            self.with_parameter(param_id, value)
        return self

    def _check_signature(self, spec: ActionSpec) -> None:
        counts = Counter(param_id for param_id, _ in self._params)
        declared = set(spec.param_ids)

        missing = tuple(param_id for param_id in spec.param_ids if param_id not in counts)
        extra = tuple(sorted(param_id for param_id in counts if param_id not in declared))
        duplicate = tuple(sorted(param_id for param_id, count in counts.items() if count > 1))

        if missing or extra or duplicate:
            raise ParameterMismatchError(spec.id, missing=missing, extra=extra, duplicate=duplicate)

    def build(self) -> ActionDescriptor:
        """Build the action descriptor.

        Raises:
            ValueError: If no action was selected.
            ParameterMismatchError: If the parameters differ from the signature.
            FieldWidthError: If a value does not fit its declared width.
        """
        spec = self._spec
        if spec is None:
            raise ValueError("Action id must be set before build()")

        self._check_signature(spec)

        supplied = dict(self._params)
        params = tuple(
            ActionParam(
                param_id=param.id,
                value=encode_value(param.id, supplied[param.id], param.bitwidth),
            )
            for param in spec.params
        )
        logger.debug("Built action %s with %s parameters", spec.id, len(params))
        return ActionDescriptor(action_id=spec.id, params=params)


def build_action(
    schema: PipelineSchema,
    action_id: str,
    params: Iterable[tuple[str, Value]] = (),
) -> ActionDescriptor:
    """Build an action descriptor in one call."""
    return ActionBuilder(schema).with_id(action_id).with_parameters(params).build()


__all__ = ["ActionBuilder", "build_action"]
