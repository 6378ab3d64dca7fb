"""Syntax trees, decoding and dependency analysis for declarative game-logic rules."""

from logicgen.analysis import (
    DependencyFacts,
    RuleDependencies,
    RuleSetAnalysis,
    analyze_rule,
    analyze_ruleset,
    collect_depends_on,
    collect_modifies,
)
from logicgen.ast import Path, Rule, RuleSet
from logicgen.decode import DecodeError, decode_document, decode_rule, decode_ruleset
from logicgen.diagnostics import Diagnostic
from logicgen.encode import to_document
from logicgen.lint import LintRunResult, run_lint
from logicgen.load import (
    LoadedRuleFile,
    LoadRulesResult,
    load_rules_directory,
    load_rules_file,
    load_rules_paths,
    load_rules_text,
)
from logicgen.options import LoadOptions, ValidationMode

__all__ = [
    "DecodeError",
    "DependencyFacts",
    "Diagnostic",
    "LintRunResult",
    "LoadOptions",
    "LoadRulesResult",
    "LoadedRuleFile",
    "Path",
    "Rule",
    "RuleDependencies",
    "RuleSet",
    "RuleSetAnalysis",
    "ValidationMode",
    "analyze_rule",
    "analyze_ruleset",
    "collect_depends_on",
    "collect_modifies",
    "decode_document",
    "decode_rule",
    "decode_ruleset",
    "load_rules_directory",
    "load_rules_file",
    "load_rules_paths",
    "load_rules_text",
    "run_lint",
    "to_document",
]
