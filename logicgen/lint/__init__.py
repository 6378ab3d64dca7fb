"""Optional semantic lint rules over decoded rule sets."""

from logicgen.lint.rules import (
    DeprecatedCurrentPathRule,
    EffectRequiredFieldsRule,
    LintConfidence,
    LintDomain,
    LintRule,
    ScheduleFormatRule,
    SelectorRequiredFieldsRule,
    TransformRequiredFieldsRule,
    UnknownViewReferenceRule,
    ViewOperationRequiredFieldsRule,
    ViewParameterRule,
    default_lint_rules,
    iter_nodes,
    strict_lint_rules,
    validate_lint_rules,
)
from logicgen.lint.runner import LintRunResult, run_lint

__all__ = [
    "DeprecatedCurrentPathRule",
    "EffectRequiredFieldsRule",
    "LintConfidence",
    "LintDomain",
    "LintRule",
    "LintRunResult",
    "ScheduleFormatRule",
    "SelectorRequiredFieldsRule",
    "TransformRequiredFieldsRule",
    "UnknownViewReferenceRule",
    "ViewOperationRequiredFieldsRule",
    "ViewParameterRule",
    "default_lint_rules",
    "iter_nodes",
    "run_lint",
    "strict_lint_rules",
    "validate_lint_rules",
]
