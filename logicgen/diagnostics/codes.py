"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


DECODE_INVALID_SHAPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODE_INVALID_SHAPE",
    message="Document value has the wrong shape.",
    hint="Check that objects, lists and scalars are used where the rule format expects them.",
    severity="error",
    category="decode",
)

DECODE_UNKNOWN_KIND: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODE_UNKNOWN_KIND",
    message="Unknown node type.",
    hint="Use one of the documented `type` values for this node.",
    severity="error",
    category="decode",
)

DECODE_MISSING_FIELD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODE_MISSING_FIELD",
    message="Missing required field.",
    severity="error",
    category="decode",
)

DECODE_AMBIGUOUS_SHORTHAND: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODE_AMBIGUOUS_SHORTHAND",
    message="Shorthand condition cannot be resolved.",
    hint='Write the condition as `{field: value}`, `{field: {op: value}}` or the explicit `{"field", "op", "value"}` form.',
    severity="error",
    category="decode",
)

DECODE_INVALID_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODE_INVALID_VALUE",
    message="Invalid field value.",
    severity="error",
    category="decode",
)

DECODE_INVALID_DOCUMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODE_INVALID_DOCUMENT",
    message="Invalid rule format.",
    hint="Expected a rule set with `rules`, a single rule, or a list of rules.",
    severity="error",
    category="decode",
)

DECODE_SYNTAX_ERROR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODE_SYNTAX_ERROR",
    message="Document could not be parsed.",
    severity="error",
    category="decode",
)

ANALYSIS_UNDECODABLE_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ANALYSIS_UNDECODABLE_VALUE",
    message="Embedded transform could not be decoded; its dependencies are not tracked.",
    hint="Fix the nested `type` or remove it if the value is meant as a plain object.",
    severity="warning",
    category="analysis",
)

LINT_DEPRECATED_CURRENT_PATH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_DEPRECATED_CURRENT_PATH",
    message="Bare `$` current-entity paths are deprecated.",
    hint="Use a `self.` path to address the current entity.",
    severity="warning",
    category="lint",
)

LINT_UNKNOWN_VIEW_REFERENCE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_UNKNOWN_VIEW_REFERENCE",
    message="Referenced view is not defined on the rule.",
    hint="Declare the view under the rule's `views` mapping.",
    severity="warning",
    category="lint",
)

LINT_EFFECT_MISSING_FIELD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_EFFECT_MISSING_FIELD",
    message="Effect is missing a field required by its type.",
    severity="error",
    category="lint",
)

LINT_VIEW_OPERATION_MISSING_FIELD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_VIEW_OPERATION_MISSING_FIELD",
    message="View operation is missing a field required by its type.",
    severity="error",
    category="lint",
)

LINT_TRANSFORM_MISSING_FIELD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_TRANSFORM_MISSING_FIELD",
    message="Transform is missing a field required by its type.",
    severity="error",
    category="lint",
)

LINT_TRANSFORM_INVALID_ARGUMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_TRANSFORM_INVALID_ARGUMENT",
    message="Transform argument is out of range.",
    severity="error",
    category="lint",
)

LINT_SELECTOR_MISSING_FIELD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_SELECTOR_MISSING_FIELD",
    message="Selector is missing a field required by its type.",
    severity="error",
    category="lint",
)

LINT_VIEW_MISSING_PARAMETER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_VIEW_MISSING_PARAMETER",
    message="View is called without a required parameter.",
    hint="Pass the parameter in `viewParams` or give it a default in the view definition.",
    severity="error",
    category="lint",
)

LINT_INVALID_SCHEDULE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_INVALID_SCHEDULE",
    message="Invalid schedule or cron expression.",
    severity="error",
    category="lint",
)

LOAD_NO_RULE_FILES: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LOAD_NO_RULE_FILES",
    message="No rule files matched.",
    hint="Check the directory and glob pattern.",
    severity="warning",
    category="load",
)
