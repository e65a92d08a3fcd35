"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

from pirule.common.config import get_config
from pirule.schemas.pipeline import PipelineSchema, default_pipeline_schema, load_pipeline_schema


def resolve_schema(schema_path: Path | None) -> PipelineSchema:
    """Load the schema from the option, then PIPELINE_SCHEMA_PATH, then the bundled default."""
    path = schema_path or get_config().pipeline_schema_path
    if path is None:
        return default_pipeline_schema()
    return load_pipeline_schema(path)


__all__ = ["resolve_schema"]
