"""Pipeline schema: the catalog of tables, match fields and actions.

Builders consult a loaded schema for declared widths and signatures instead
of compiled-in constants, so the same code serves any pipeline.

Schema files are YAML (JSON is accepted as a YAML subset):

    name: sai
    tables:
      - id: ingress.routing.router_interface_table
        match_fields:
          - {id: router_interface_id, match_type: exact, bitwidth: null}
        actions: [ingress.routing.set_port_and_src_mac]
    actions:
      - id: ingress.routing.set_port_and_src_mac
        params:
          - {id: port, bitwidth: null}
          - {id: src_mac, bitwidth: 48}
"""

import logging
from collections import Counter
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from pirule.errors import SchemaLoadError, UnknownActionError, UnknownTableError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_RESOURCE = "sai.yaml"


def _duplicates(ids: list[str]) -> list[str]:
    return sorted(name for name, count in Counter(ids).items() if count > 1)


class MatchFieldSpec(BaseModel):
    """Declared match field of a table.

    A null bitwidth marks a string-translated field whose values are
    variable-length byte strings.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    match_type: Literal["exact"] = "exact"
    bitwidth: int | None = Field(None, gt=0)


class ActionParamSpec(BaseModel):
    """Declared parameter of an action."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    bitwidth: int | None = Field(None, gt=0)


class ActionSpec(BaseModel):
    """Declared action with its ordered parameter signature."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    params: tuple[ActionParamSpec, ...] = ()

    @field_validator("params")
    @classmethod
    def _unique_params(cls, value: tuple[ActionParamSpec, ...]) -> tuple[ActionParamSpec, ...]:
        dupes = _duplicates([param.id for param in value])
        if dupes:
            raise ValueError(f"duplicate parameter ids: {dupes}")
        return value

    @property
    def param_ids(self) -> tuple[str, ...]:
        return tuple(param.id for param in self.params)

    def param(self, param_id: str) -> ActionParamSpec | None:
        return next((param for param in self.params if param.id == param_id), None)


class TableSpec(BaseModel):
    """Declared table: its exact-match key and the actions it permits."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    match_fields: tuple[MatchFieldSpec, ...] = ()
    actions: tuple[str, ...] = ()

    @field_validator("match_fields")
    @classmethod
    def _unique_fields(cls, value: tuple[MatchFieldSpec, ...]) -> tuple[MatchFieldSpec, ...]:
        dupes = _duplicates([field.id for field in value])
        if dupes:
            raise ValueError(f"duplicate match field ids: {dupes}")
        return value

    def match_field(self, field_id: str) -> MatchFieldSpec | None:
        return next((field for field in self.match_fields if field.id == field_id), None)

    def allows(self, action_id: str) -> bool:
        return action_id in self.actions


class PipelineSchema(BaseModel):
    """Catalog of one forwarding pipeline.

    Examples:
        >>> schema = default_pipeline_schema()
        >>> schema.table("ingress.routing.router_interface_table").match_fields[0].id
        'router_interface_id'
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    tables: tuple[TableSpec, ...] = ()
    actions: tuple[ActionSpec, ...] = ()

    @model_validator(mode="after")
    def _check_catalog(self) -> "PipelineSchema":
        table_dupes = _duplicates([table.id for table in self.tables])
        if table_dupes:
            raise ValueError(f"duplicate table ids: {table_dupes}")
        action_dupes = _duplicates([action.id for action in self.actions])
        if action_dupes:
            raise ValueError(f"duplicate action ids: {action_dupes}")

        declared = {action.id for action in self.actions}
        for table in self.tables:
            undeclared = sorted(set(table.actions) - declared)
            if undeclared:
                raise ValueError(f"table '{table.id}' references undeclared actions: {undeclared}")
        return self

    def table(self, table_id: str) -> TableSpec:
        """Return the table declaration, raising UnknownTableError if absent."""
        for table in self.tables:
            if table.id == table_id:
                return table
        raise UnknownTableError(table_id)

    def action(self, action_id: str) -> ActionSpec:
        """Return the action declaration, raising UnknownActionError if absent."""
        for action in self.actions:
            if action.id == action_id:
                return action
        raise UnknownActionError(action_id)


def parse_pipeline_schema(text: str, source: str = "<string>") -> PipelineSchema:
    """Parse and validate a schema document.

    Raises:
        SchemaLoadError: If the text is not valid YAML or fails validation.
    """
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in {source}: {e}") from e

    if not isinstance(payload, dict):
        raise SchemaLoadError(f"Invalid pipeline schema structure: {source}")

    try:
        return PipelineSchema.model_validate(payload)
    except ValidationError as e:
        raise SchemaLoadError(f"Invalid pipeline schema {source}: {e}") from e


def load_pipeline_schema(path: str | Path) -> PipelineSchema:
    """Load a pipeline schema from *path*.

    Raises:
        SchemaLoadError: If the file is missing, malformed, or invalid.
    """
    source = Path(path)
    if not source.is_file():
        raise SchemaLoadError(f"Pipeline schema file not found: {source}")

    logger.info("Loading pipeline schema from %s", source)
    schema = parse_pipeline_schema(source.read_text(encoding="utf-8"), source=str(source))
    logger.debug(
        "Loaded pipeline schema %s (tables=%s, actions=%s)",
        schema.name,
        len(schema.tables),
        len(schema.actions),
    )
    return schema


@lru_cache(maxsize=1)
def default_pipeline_schema() -> PipelineSchema:
    """Return the bundled SAI schema subset."""
    resource = files("pirule.schemas") / "data" / DEFAULT_SCHEMA_RESOURCE
    return parse_pipeline_schema(resource.read_text(encoding="utf-8"), source=str(resource))


__all__ = [
    "ActionParamSpec",
    "ActionSpec",
    "MatchFieldSpec",
    "PipelineSchema",
    "TableSpec",
    "default_pipeline_schema",
    "load_pipeline_schema",
    "parse_pipeline_schema",
]
