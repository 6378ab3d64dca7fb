"""Diagnostics."""

from logicgen.diagnostics.codes import (
    ANALYSIS_UNDECODABLE_VALUE,
    DECODE_AMBIGUOUS_SHORTHAND,
    DECODE_INVALID_DOCUMENT,
    DECODE_INVALID_SHAPE,
    DECODE_INVALID_VALUE,
    DECODE_MISSING_FIELD,
    DECODE_SYNTAX_ERROR,
    DECODE_UNKNOWN_KIND,
    LINT_DEPRECATED_CURRENT_PATH,
    LINT_EFFECT_MISSING_FIELD,
    LINT_INVALID_SCHEDULE,
    LINT_SELECTOR_MISSING_FIELD,
    LINT_TRANSFORM_INVALID_ARGUMENT,
    LINT_TRANSFORM_MISSING_FIELD,
    LINT_UNKNOWN_VIEW_REFERENCE,
    LINT_VIEW_MISSING_PARAMETER,
    LINT_VIEW_OPERATION_MISSING_FIELD,
    LOAD_NO_RULE_FILES,
    DiagnosticSpec,
)
from logicgen.diagnostics.diagnostic import Diagnostic, Severity
from logicgen.diagnostics.report import (
    collect_diagnostics,
    diagnostic_from_spec,
    has_errors,
    sort_diagnostics,
)

__all__ = [
    "ANALYSIS_UNDECODABLE_VALUE",
    "DECODE_AMBIGUOUS_SHORTHAND",
    "DECODE_INVALID_DOCUMENT",
    "DECODE_INVALID_SHAPE",
    "DECODE_INVALID_VALUE",
    "DECODE_MISSING_FIELD",
    "DECODE_SYNTAX_ERROR",
    "DECODE_UNKNOWN_KIND",
    "LINT_DEPRECATED_CURRENT_PATH",
    "LINT_EFFECT_MISSING_FIELD",
    "LINT_INVALID_SCHEDULE",
    "LINT_SELECTOR_MISSING_FIELD",
    "LINT_TRANSFORM_INVALID_ARGUMENT",
    "LINT_TRANSFORM_MISSING_FIELD",
    "LINT_UNKNOWN_VIEW_REFERENCE",
    "LINT_VIEW_MISSING_PARAMETER",
    "LINT_VIEW_OPERATION_MISSING_FIELD",
    "LOAD_NO_RULE_FILES",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "diagnostic_from_spec",
    "has_errors",
    "sort_diagnostics",
]
