"""Match criterion builder.

Collects exact-match ``(field, value)`` pairs for one table and produces an
immutable MatchCriterion. Fields are stored sorted by field id, so the order
in which they are supplied never changes the result.
"""

from collections.abc import Iterable

from pirule.errors import DuplicateFieldError, UnknownFieldError
from pirule.schemas.pipeline import TableSpec
from pirule.schemas.rule import MatchCriterion, MatchField
from pirule.schemas.values import Value, encode_value


class MatchCriterionBuilder:
    """Builder for the match criterion of one table entry.

    Example:
        >>> table = default_pipeline_schema().table("ingress.routing.router_interface_table")
        >>> criterion = (
        ...     MatchCriterionBuilder(table)
        ...     .match_exact("router_interface_id", "Ethernet/32")
        ...     .build()
        ... )
        >>> criterion.get("router_interface_id")
        b'Ethernet/32'
    """

    def __init__(self, table: TableSpec) -> None:
        self.table = table
        self._matches: dict[str, bytes] = {}

    def match_exact(self, field_id: str, value: Value) -> "MatchCriterionBuilder":
        """Add one exact-match condition.

        Raises:
            UnknownFieldError: If the table does not declare *field_id*.
            DuplicateFieldError: If *field_id* was already supplied.
            FieldWidthError: If *value* does not fit the declared width.
        """
        spec = self.table.match_field(field_id)
        if spec is None:
            raise UnknownFieldError(field_id, self.table.id)
        if field_id in self._matches:
            raise DuplicateFieldError(field_id)

        self._matches[field_id] = encode_value(field_id, value, spec.bitwidth)
        return self

    def build(self) -> MatchCriterion:
        return MatchCriterion(
            matches=tuple(
                MatchField(field_id=field_id, value=value)
                for field_id, value in self._matches.items()
            )
        )


def build_criterion(table: TableSpec, matches: Iterable[tuple[str, Value]]) -> MatchCriterion:
    """Build a criterion from ``(field id, value)`` pairs in one call."""
    builder = MatchCriterionBuilder(table)
    for field_id, value in matches:
        builder.match_exact(field_id, value)
    return builder.build()


__all__ = ["MatchCriterionBuilder", "build_criterion"]
