"""Lint runner over a decoded rule set."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from logicgen.ast import RuleSet
from logicgen.diagnostics import Diagnostic, sort_diagnostics
from logicgen.lint.rules import (
    LintRule,
    default_lint_rules,
    strict_lint_rules,
    validate_lint_rules,
)
from logicgen.options import LoadOptions, ValidationMode


@dataclass(frozen=True, slots=True)
class LintRunResult:
    """Result of running lint rules over one rule set."""

    ruleset: RuleSet
    diagnostics: list[Diagnostic]


def run_lint(
    ruleset: RuleSet,
    *,
    options: LoadOptions | None = None,
    mode: ValidationMode | None = None,
    rules: Sequence[LintRule] | None = None,
) -> LintRunResult:
    """Run lint rules; explicit `rules` win over the set implied by options or mode."""
    if options is not None and mode is not None:
        raise ValueError("Pass either options or mode, not both")
    resolved_options = options if options is not None else LoadOptions.for_mode(mode or ValidationMode.DEFAULT)
    if rules is not None:
        resolved_rules = tuple(rules)
    elif resolved_options.include_strict_rules:
        resolved_rules = strict_lint_rules()
    else:
        resolved_rules = default_lint_rules()
    validate_lint_rules(resolved_rules)

    diagnostics: list[Diagnostic] = []
    for rule in resolved_rules:
        diagnostics.extend(rule.run(ruleset))

    return LintRunResult(ruleset=ruleset, diagnostics=sort_diagnostics(diagnostics))
