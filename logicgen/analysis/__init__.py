"""Static dependency analysis over decoded rule trees."""

from logicgen.analysis.dependencies import (
    AnalyzableNode,
    DependencyFacts,
    collect_depends_on,
    collect_modifies,
)
from logicgen.analysis.index import (
    RuleDependencies,
    RuleSetAnalysis,
    analyze_rule,
    analyze_ruleset,
    paths_overlap,
)

__all__ = [
    "AnalyzableNode",
    "DependencyFacts",
    "RuleDependencies",
    "RuleSetAnalysis",
    "analyze_rule",
    "analyze_ruleset",
    "collect_depends_on",
    "collect_modifies",
    "paths_overlap",
]
