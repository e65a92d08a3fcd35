"""Immutable value objects composing a programmable-pipeline flow rule.

Every object here is a frozen pydantic model: built once by a builder and
never mutated. Equal content compares and hashes equal.
"""

import hashlib
import json
import re
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pirule.errors import DuplicateFieldError, InvalidDeviceIdError

# RFC 3986 scheme followed by a non-empty, whitespace-free scheme-specific part
_SCHEME_PATTERN = r"[A-Za-z][A-Za-z0-9+.\-]*"
_BODY_PATTERN = r"\S+"
_DEVICE_ID_PATTERN = re.compile(rf"(?P<scheme>{_SCHEME_PATTERN}):(?P<body>{_BODY_PATTERN})")

MIN_PRIORITY: Final[int] = 0
MAX_PRIORITY: Final[int] = 65535


class DeviceId(BaseModel):
    """Scheme-qualified identifier of a forwarding device, e.g. ``device:leaf1``."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    body: str

    @model_validator(mode="after")
    def _check_parts(self) -> "DeviceId":
        if re.fullmatch(_SCHEME_PATTERN, self.scheme) is None or (
            re.fullmatch(_BODY_PATTERN, self.body) is None
        ):
            raise InvalidDeviceIdError(
                f"Malformed device id '{self.scheme}:{self.body}': expected 'scheme:body'"
            )
        return self

    @classmethod
    def parse(cls, uri: "str | DeviceId") -> "DeviceId":
        """Parse a device URI.

        Raises:
            InvalidDeviceIdError: If *uri* is not ``scheme:body``.

        Examples:
            >>> str(DeviceId.parse("device:leaf1"))
            'device:leaf1'
        """
        if isinstance(uri, DeviceId):
            return uri
        if not isinstance(uri, str):
            raise InvalidDeviceIdError(f"Device id must be a string, got {type(uri).__name__}")
        match = _DEVICE_ID_PATTERN.fullmatch(uri)
        if match is None:
            raise InvalidDeviceIdError(f"Malformed device id '{uri}': expected 'scheme:body'")
        return cls(scheme=match.group("scheme"), body=match.group("body"))

    def __str__(self) -> str:
        return f"{self.scheme}:{self.body}"


class MatchField(BaseModel):
    """One exact-match condition."""

    model_config = ConfigDict(frozen=True)

    field_id: str = Field(..., min_length=1)
    value: bytes


class MatchCriterion(BaseModel):
    """Conjunction of exact-match fields, kept sorted by field id."""

    model_config = ConfigDict(frozen=True)

    matches: tuple[MatchField, ...] = ()

    @field_validator("matches")
    @classmethod
    def _canonical_order(cls, value: tuple[MatchField, ...]) -> tuple[MatchField, ...]:
        ordered = tuple(sorted(value, key=lambda field: field.field_id))
        for previous, current in zip(ordered, ordered[1:]):
            if previous.field_id == current.field_id:
                raise DuplicateFieldError(current.field_id)
        return ordered

    def get(self, field_id: str) -> bytes | None:
        return next((field.value for field in self.matches if field.field_id == field_id), None)


class ActionParam(BaseModel):
    """One named action argument."""

    model_config = ConfigDict(frozen=True)

    param_id: str = Field(..., min_length=1)
    value: bytes


class ActionDescriptor(BaseModel):
    """Action invocation with parameters in the action's declared order."""

    model_config = ConfigDict(frozen=True)

    action_id: str = Field(..., min_length=1)
    params: tuple[ActionParam, ...] = ()

    def get(self, param_id: str) -> bytes | None:
        return next((param.value for param in self.params if param.param_id == param_id), None)


class Selector(BaseModel):
    """Match side of a rule."""

    model_config = ConfigDict(frozen=True)

    criterion: MatchCriterion


class Treatment(BaseModel):
    """Action side of a rule."""

    model_config = ConfigDict(frozen=True)

    action: ActionDescriptor


class FlowRule(BaseModel):
    """One forwarding entry for one device.

    A rule supersedes any installed rule with the same :attr:`key`; changing
    anything requires building and submitting a new rule.
    """

    model_config = ConfigDict(frozen=True)

    selector: Selector
    treatment: Treatment
    table_id: str = Field(..., min_length=1)
    priority: int = Field(..., ge=MIN_PRIORITY, le=MAX_PRIORITY, strict=True)
    device_id: DeviceId
    app_id: str = Field(..., min_length=1)
    permanent: bool = True
    timeout: int = Field(default=0, ge=0)  # seconds; 0 for permanent rules

    @property
    def key(self) -> tuple[DeviceId, str, Selector]:
        """Identity of the table entry this rule occupies."""
        return (self.device_id, self.table_id, self.selector)

    def canonical(self) -> dict[str, Any]:
        """Return an order-stable, JSON-ready description of the rule."""
        return {
            "device_id": str(self.device_id),
            "table_id": self.table_id,
            "priority": self.priority,
            "app_id": self.app_id,
            "permanent": self.permanent,
            "timeout": self.timeout,
            "match": {
                field.field_id: field.value.hex() for field in self.selector.criterion.matches
            },
            "action": {
                "id": self.treatment.action.action_id,
                "params": [
                    [param.param_id, param.value.hex()] for param in self.treatment.action.params
                ],
            },
        }

    @property
    def rule_id(self) -> str:
        """Deterministic SHA-256 digest of the canonical rule content."""
        encoded = json.dumps(self.canonical(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


__all__ = [
    "MAX_PRIORITY",
    "MIN_PRIORITY",
    "ActionDescriptor",
    "ActionParam",
    "DeviceId",
    "FlowRule",
    "MatchCriterion",
    "MatchField",
    "Selector",
    "Treatment",
]
