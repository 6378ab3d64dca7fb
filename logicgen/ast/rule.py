"""Rules and rule sets."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

from logicgen.ast.effect import Effect
from logicgen.ast.paths import Path
from logicgen.ast.selector import Selector
from logicgen.ast.trigger import Trigger
from logicgen.ast.values import freeze_mappings, mapping_field
from logicgen.ast.view import View


@dataclass(frozen=True, slots=True)
class Rule:
    name: str
    trigger: Trigger
    effects: tuple[Effect, ...]
    description: str | None = None
    priority: int = 0
    enabled: bool | None = None
    selector: Selector | None = None
    views: Mapping[str, View] = mapping_field()

    def __post_init__(self) -> None:
        freeze_mappings(self, "views")

    def is_enabled(self) -> bool:
        return self.enabled is None or self.enabled

    def with_enabled(self, enabled: bool) -> Rule:
        return replace(self, enabled=enabled)

    def timer_key(self) -> str | None:
        return self.trigger.timer_key(self.name)

    def depends_on(self) -> frozenset[Path]:
        """State paths read by the trigger, the selector and every named view."""
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths

    def modifies(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_modifies

        return collect_modifies(self).paths


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Ordered rule collection; rule names are not required to be unique."""

    version: str = ""
    package: str = ""
    imports: tuple[str, ...] = ()
    rules: tuple[Rule, ...] = ()

    def get_rule(self, name: str) -> Rule | None:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def rules_by_priority(self) -> tuple[Rule, ...]:
        return tuple(sorted(self.rules, key=lambda rule: -rule.priority))
