"""Per-rule dependency summaries and the change-dependency index."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from logicgen.analysis.dependencies import collect_depends_on, collect_modifies
from logicgen.ast.paths import Path, normalize_state_path
from logicgen.ast.rule import Rule, RuleSet
from logicgen.decode.reader import child, item
from logicgen.diagnostics import Diagnostic

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuleDependencies:
    """Read/write sets of one rule.

    `depends_on` covers the trigger, the selector and the named views;
    `effect_reads` lists what effect values read when the rule fires.
    """

    rule_name: str
    depends_on: frozenset[Path]
    modifies: frozenset[Path]
    effect_reads: frozenset[Path]
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True, slots=True)
class RuleSetAnalysis:
    """Dependency summaries plus the map from state path to dependent rule names."""

    rules: tuple[RuleDependencies, ...]
    index: dict[Path, tuple[str, ...]]
    diagnostics: tuple[Diagnostic, ...] = ()

    def rules_affected_by(self, path: str) -> tuple[str, ...]:
        """Names of rules to re-check after a write to `path`, in rule order."""
        names: list[str] = []
        for summary in self.rules:
            if summary.rule_name in names:
                continue
            if any(paths_overlap(path, dependency) for dependency in summary.depends_on if dependency.is_state):
                names.append(summary.rule_name)
        return tuple(names)


def paths_overlap(left: str, right: str) -> bool:
    """True when one state path equals, contains or is contained by the other."""
    a = normalize_state_path(left)
    b = normalize_state_path(right)
    return a == b or _is_descendant(a, b) or _is_descendant(b, a)


def analyze_rule(rule: Rule, at: str = "") -> RuleDependencies:
    reads = collect_depends_on(rule, at)
    diagnostics = list(reads.diagnostics)
    effect_reads: set[Path] = set()
    effects_at = child(at, "effects")
    for index, effect in enumerate(rule.effects):
        facts = collect_depends_on(effect, item(effects_at, index))
        effect_reads.update(facts.paths)
        diagnostics.extend(facts.diagnostics)
    return RuleDependencies(
        rule_name=rule.name,
        depends_on=reads.paths,
        modifies=collect_modifies(rule).paths,
        effect_reads=frozenset(effect_reads),
        diagnostics=tuple(diagnostics),
    )


def analyze_ruleset(ruleset: RuleSet) -> RuleSetAnalysis:
    summaries: list[RuleDependencies] = []
    index: dict[Path, list[str]] = {}
    diagnostics: list[Diagnostic] = []
    for position, rule in enumerate(ruleset.rules):
        summary = analyze_rule(rule, item("rules", position))
        summaries.append(summary)
        diagnostics.extend(summary.diagnostics)
        for path in sorted(summary.depends_on):
            if not path.is_state:
                continue
            names = index.setdefault(path, [])
            if rule.name not in names:
                names.append(rule.name)

    logger.debug("Indexed %d state paths across %d rules", len(index), len(summaries))
    return RuleSetAnalysis(
        rules=tuple(summaries),
        index={path: tuple(names) for path, names in index.items()},
        diagnostics=tuple(diagnostics),
    )


def _is_descendant(path: str, ancestor: str) -> bool:
    if not path.startswith(ancestor):
        return False
    return path[len(ancestor) : len(ancestor) + 1] in (".", "[")
