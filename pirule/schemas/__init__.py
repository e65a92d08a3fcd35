"""Pipeline schema, value codec and immutable rule value objects."""

from pirule.schemas.pipeline import (
    ActionParamSpec,
    ActionSpec,
    MatchFieldSpec,
    PipelineSchema,
    TableSpec,
    default_pipeline_schema,
    load_pipeline_schema,
)
from pirule.schemas.request import RuleRequest, RuleRequestError
from pirule.schemas.rule import (
    ActionDescriptor,
    ActionParam,
    DeviceId,
    FlowRule,
    MatchCriterion,
    MatchField,
    Selector,
    Treatment,
)

__all__ = [
    "ActionDescriptor",
    "ActionParam",
    "ActionParamSpec",
    "ActionSpec",
    "DeviceId",
    "FlowRule",
    "MatchCriterion",
    "MatchField",
    "MatchFieldSpec",
    "PipelineSchema",
    "RuleRequest",
    "RuleRequestError",
    "Selector",
    "TableSpec",
    "Treatment",
    "default_pipeline_schema",
    "load_pipeline_schema",
]
