"""Exception hierarchy for rule construction and submission.

Construction errors are raised before any gateway call and indicate a
mistake in the caller's literal inputs; none of them is retryable.
"""


class PipelineError(ValueError):
    """Base exception for rule construction failures."""

    pass


class SchemaLoadError(PipelineError):
    """Raised when a pipeline schema file cannot be read or validated."""

    pass


class DuplicateFieldError(PipelineError):
    """Raised when one match criterion names the same field twice."""

    def __init__(self, field_id: str) -> None:
        super().__init__(f"Duplicate match field '{field_id}'")
        self.field_id = field_id


class FieldWidthError(PipelineError):
    """Raised when a value does not fit the declared width of its field or parameter."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"'{name}': {message}")
        self.name = name


class UnknownFieldError(PipelineError):
    """Raised when a match field is not declared by the target table."""

    def __init__(self, field_id: str, table_id: str) -> None:
        super().__init__(f"Match field '{field_id}' is not declared by table '{table_id}'")
        self.field_id = field_id
        self.table_id = table_id


class UnknownActionError(PipelineError):
    """Raised when an action is missing from the pipeline's action catalog."""

    def __init__(self, action_id: str) -> None:
        super().__init__(f"Unknown action '{action_id}'")
        self.action_id = action_id


class ParameterMismatchError(PipelineError):
    """Raised when supplied parameters differ from the action's declared signature."""

    def __init__(
        self,
        action_id: str,
        missing: tuple[str, ...] = (),
        extra: tuple[str, ...] = (),
        duplicate: tuple[str, ...] = (),
    ) -> None:
        details = []
        if missing:
            details.append(f"missing={list(missing)}")
        if extra:
            details.append(f"unexpected={list(extra)}")
        if duplicate:
            details.append(f"duplicate={list(duplicate)}")
        super().__init__(f"Parameters do not match action '{action_id}': {', '.join(details)}")
        self.action_id = action_id
        self.missing = missing
        self.extra = extra
        self.duplicate = duplicate


class UnknownTableError(PipelineError):
    """Raised when a rule targets a table the pipeline does not declare."""

    def __init__(self, table_id: str) -> None:
        super().__init__(f"Unknown table '{table_id}'")
        self.table_id = table_id


class ActionNotAllowedError(PipelineError):
    """Raised when an action is not permitted in the target table."""

    def __init__(self, action_id: str, table_id: str) -> None:
        super().__init__(f"Action '{action_id}' is not allowed in table '{table_id}'")
        self.action_id = action_id
        self.table_id = table_id


class RuleAssemblyError(PipelineError):
    """Base exception for invalid rule-level attributes."""

    pass


class InvalidPriorityError(RuleAssemblyError):
    """Raised when a rule priority is negative, too large, or not an integer."""

    pass


class InvalidDeviceIdError(RuleAssemblyError):
    """Raised when a device identifier is not a scheme-qualified URI."""

    pass


class InvalidTimeoutError(RuleAssemblyError):
    """Raised when a temporary rule is given a non-positive timeout."""

    pass


class IncompleteRuleError(RuleAssemblyError):
    """Raised when a rule is built without one of its required parts."""

    pass


class SubmissionRejected(Exception):
    """Raised when the rule submission gateway rejects a submission.

    The reason is reported verbatim from the gateway. Rejections are never
    retried.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Submission rejected: {reason}")
        self.reason = reason


class GatewayUnavailableError(Exception):
    """Raised when a gateway cannot be reached or fails server-side."""

    pass


__all__ = [
    "ActionNotAllowedError",
    "DuplicateFieldError",
    "FieldWidthError",
    "GatewayUnavailableError",
    "IncompleteRuleError",
    "InvalidDeviceIdError",
    "InvalidPriorityError",
    "InvalidTimeoutError",
    "ParameterMismatchError",
    "PipelineError",
    "RuleAssemblyError",
    "SchemaLoadError",
    "SubmissionRejected",
    "UnknownActionError",
    "UnknownFieldError",
    "UnknownTableError",
]
