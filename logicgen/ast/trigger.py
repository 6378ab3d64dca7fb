"""Rule activation conditions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Final

from logicgen.ast.expression import Expression
from logicgen.ast.paths import Path


class TriggerKind(StrEnum):
    ON_TICK = "OnTick"
    ON_EVENT = "OnEvent"
    ON_CHANGE = "OnChange"
    DISTANCE = "Distance"
    TIMER = "Timer"
    CONDITION = "Condition"
    CRON = "Cron"
    WAIT = "Wait"
    SCHEDULE = "Schedule"


DISTANCE_OPERATORS: Final = frozenset({"<=", "<", ">=", ">", "=="})

TRIGGER_FIELDS: Final[dict[TriggerKind, tuple[str, ...]]] = {
    TriggerKind.ON_TICK: ("interval",),
    TriggerKind.ON_EVENT: ("event", "params"),
    TriggerKind.ON_CHANGE: ("watch",),
    TriggerKind.DISTANCE: ("from_", "to", "operator", "value", "unit"),
    TriggerKind.TIMER: ("duration", "repeat", "start_delay"),
    TriggerKind.CONDITION: ("condition",),
    TriggerKind.CRON: ("cron",),
    TriggerKind.WAIT: ("duration",),
    TriggerKind.SCHEDULE: ("at", "every", "weekdays"),
}

_TIMER_KEY_PREFIXES: Final[dict[TriggerKind, str]] = {
    TriggerKind.TIMER: "timer",
    TriggerKind.WAIT: "wait",
    TriggerKind.CRON: "cron",
    TriggerKind.SCHEDULE: "schedule",
}


@dataclass(frozen=True, slots=True)
class Trigger:
    """When a rule becomes eligible; durations and intervals are milliseconds."""

    kind: TriggerKind
    enabled: bool | None = None
    interval: int | None = None
    event: str | None = None
    params: tuple[str, ...] = ()
    watch: tuple[Path, ...] = ()
    from_: Path | None = None
    to: Path | None = None
    operator: str | None = None
    value: float | None = None
    unit: str | None = None
    duration: int | None = None
    repeat: bool | None = None
    start_delay: int | None = None
    cron: str | None = None
    at: str | None = None
    every: str | None = None
    weekdays: tuple[int, ...] = ()
    condition: Expression | None = None

    def is_enabled(self) -> bool:
        return self.enabled is None or self.enabled

    def with_enabled(self, enabled: bool) -> Trigger:
        return replace(self, enabled=enabled)

    def timer_key(self, rule_name: str) -> str | None:
        """Stable bookkeeping key for time-based triggers owned by `rule_name`."""
        prefix = _TIMER_KEY_PREFIXES.get(self.kind)
        if prefix is None:
            return None
        if not rule_name:
            raise ValueError("Timer keys need the owning rule name")
        return f"{prefix}:{rule_name}"

    def depends_on(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths
