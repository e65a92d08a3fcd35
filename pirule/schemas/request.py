"""RuleRequest - declarative description of the rule installed at activation.

Replaces a hardcoded rule with configuration: the same fields the rule
builders take, loaded from YAML or passed in directly.

Example file:

    table: ingress.routing.router_interface_table
    match:
      router_interface_id: Ethernet/32
    action: ingress.routing.set_port_and_src_mac
    params:
      src_mac: 0x90fb760098
      port: Ethernet32
    priority: 777
    device_id: device:leaf1
    permanent: true
"""

import re
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pirule.errors import PipelineError

RequestValue = bytes | int | str

# YAML 1.1 int resolver without the base-60 form, so that all-digit
# colon-separated octets (``12:34:56:00:00:00``) stay strings.
_INT_PATTERN = re.compile(
    r"""^(?:[-+]?0b[0-1_]+
    |[-+]?0[0-7_]+
    |[-+]?(?:0|[1-9][0-9_]*)
    |[-+]?0x[0-9a-fA-F_]+)$""",
    re.X,
)


class _RuleFileLoader(yaml.SafeLoader):
    """SafeLoader that never reads colon-separated digits as sexagesimal numbers."""


_RuleFileLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:int"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_RuleFileLoader.add_implicit_resolver("tag:yaml.org,2002:int", _INT_PATTERN, list("-+0123456789"))


class RuleRequestError(PipelineError):
    """Raised when a rule request file cannot be read or validated."""

    pass


class RuleRequest(BaseModel):
    """Inputs for building one flow rule.

    Range checks on priority, device id and timeout are left to the rule
    assembler so that they surface as the assembler's own errors.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    table: str = Field(..., min_length=1, description="Target table id")
    match: dict[str, RequestValue] = Field(
        default_factory=dict,
        description="Exact-match field values keyed by field id",
    )
    action: str = Field(..., min_length=1, description="Action id")
    params: dict[str, RequestValue] = Field(
        default_factory=dict,
        description="Action parameter values keyed by parameter id",
    )
    priority: int = Field(..., description="Higher values are evaluated first")
    device_id: str = Field(..., description="Scheme-qualified device id", examples=["device:leaf1"])
    app_id: str | None = Field(None, description="Owning application; defaults to config app_id")
    permanent: bool = True
    timeout: int | None = Field(None, description="Idle timeout in seconds for temporary rules")

    @classmethod
    def from_file(cls, path: str | Path) -> "RuleRequest":
        """Load a rule request from a YAML file.

        Raises:
            RuleRequestError: If the file is missing, malformed, or invalid.
        """
        source = Path(path)
        if not source.is_file():
            raise RuleRequestError(f"Rule file not found: {source}")
        try:
            text = source.read_text(encoding="utf-8")
            payload = yaml.load(text, Loader=_RuleFileLoader)
        except yaml.YAMLError as e:
            raise RuleRequestError(f"Invalid YAML in {source}: {e}") from e
        if not isinstance(payload, dict):
            raise RuleRequestError(f"Invalid rule file structure: {source}")
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise RuleRequestError(f"Invalid rule file {source}: {e}") from e


__all__ = ["RuleRequest", "RuleRequestError"]
