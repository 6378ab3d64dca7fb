"""Batch mutation, lifecycle, event and meta-control effects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from logicgen.ast.paths import Path
from logicgen.ast.transform import Transform
from logicgen.ast.values import JsonValue, LiteralValue, Operand, document_field, freeze_mappings

if TYPE_CHECKING:
    from logicgen.ast.view import View


class EffectKind(StrEnum):
    SET = "Set"
    INCREMENT = "Increment"
    DECREMENT = "Decrement"
    TRANSFORM = "Transform"
    SET_FROM_VIEW = "SetFromView"
    SPAWN = "Spawn"
    DESTROY = "Destroy"
    EMIT = "Emit"
    IF = "If"
    SEQUENCE = "Sequence"
    ENABLE_RULE = "EnableRule"
    DISABLE_RULE = "DisableRule"
    ENABLE_TRIGGER = "EnableTrigger"
    DISABLE_TRIGGER = "DisableTrigger"
    RESET_TIMER = "ResetTimer"
    ADD_FILTER = "AddFilter"
    REMOVE_FILTER = "RemoveFilter"
    ENABLE_FILTER = "EnableFilter"
    DISABLE_FILTER = "DisableFilter"


MUTATION_KINDS: Final = frozenset(
    {
        EffectKind.SET,
        EffectKind.INCREMENT,
        EffectKind.DECREMENT,
        EffectKind.TRANSFORM,
        EffectKind.SET_FROM_VIEW,
    }
)
BATCH_KINDS: Final = MUTATION_KINDS | {EffectKind.DESTROY, EffectKind.EMIT}

_RULE_CONTROL: Final = ("rule",)
_FILTER_TOGGLE: Final = ("filter",)

EFFECT_FIELDS: Final[dict[EffectKind, tuple[str, ...]]] = {
    EffectKind.SET: ("targets", "path", "value"),
    EffectKind.INCREMENT: ("targets", "path", "value"),
    EffectKind.DECREMENT: ("targets", "path", "value"),
    EffectKind.TRANSFORM: ("targets", "path", "transform"),
    EffectKind.SET_FROM_VIEW: ("targets", "path", "value_expression"),
    EffectKind.SPAWN: ("entity", "fields"),
    EffectKind.DESTROY: ("targets",),
    EffectKind.EMIT: ("targets", "event", "to", "payload"),
    EffectKind.IF: ("condition", "then", "else_"),
    EffectKind.SEQUENCE: ("effects",),
    EffectKind.ENABLE_RULE: _RULE_CONTROL,
    EffectKind.DISABLE_RULE: _RULE_CONTROL,
    EffectKind.ENABLE_TRIGGER: _RULE_CONTROL,
    EffectKind.DISABLE_TRIGGER: _RULE_CONTROL,
    EffectKind.RESET_TIMER: _RULE_CONTROL,
    EffectKind.ADD_FILTER: ("viewer_id", "filter_id", "filter_name", "filter_params"),
    EffectKind.REMOVE_FILTER: ("viewer_id", "filter_id"),
    EffectKind.ENABLE_FILTER: _FILTER_TOGGLE,
    EffectKind.DISABLE_FILTER: _FILTER_TOGGLE,
}


class ValueExpressionKind(StrEnum):
    VIEW_RESULT = "viewResult"
    DISTANCE = "distance"
    FIELD = "field"
    LITERAL = "literal"
    TRANSFORM = "transform"


VALUE_EXPRESSION_FIELDS: Final[dict[ValueExpressionKind, tuple[str, ...]]] = {
    ValueExpressionKind.VIEW_RESULT: ("view", "view_params"),
    ValueExpressionKind.DISTANCE: ("from_", "to"),
    ValueExpressionKind.FIELD: ("field",),
    ValueExpressionKind.LITERAL: ("literal",),
    ValueExpressionKind.TRANSFORM: ("transform",),
}


@dataclass(frozen=True, slots=True)
class ValueExpression:
    """Per-target computed value used by `SetFromView`.

    `view_params` stays a raw document so `self.*` bindings are resolved by the engine.
    """

    kind: ValueExpressionKind
    view: str | None = None
    view_params: Mapping[str, JsonValue] | None = document_field()
    field: Path | None = None
    from_: Operand | None = None
    to: Operand | None = None
    literal: LiteralValue | None = None
    transform: Transform | None = None

    def __post_init__(self) -> None:
        freeze_mappings(self, "view_params")


@dataclass(frozen=True, slots=True)
class Effect:
    """Effect node; mutation kinds apply once per entity resolved from `targets`.

    `targets` is a view name declared on the rule or an inline view. `path` is
    relative to each target entity.
    """

    kind: EffectKind
    targets: str | View | None = None
    path: Path | None = None
    value: Operand | None = None
    value_expression: ValueExpression | None = None
    transform: Transform | None = None
    event: str | None = None
    to: str | None = None
    payload: Mapping[str, JsonValue] | None = document_field()
    entity: str | None = None
    fields: Mapping[str, JsonValue] | None = document_field()
    condition: Operand | None = None
    then: Effect | None = None
    else_: Effect | None = None
    effects: tuple[Effect, ...] = ()
    rule: str | None = None
    filter: str | None = None
    viewer_id: Operand | None = None
    filter_id: Operand | None = None
    filter_name: str | None = None
    filter_params: Mapping[str, JsonValue] | None = document_field()

    def __post_init__(self) -> None:
        freeze_mappings(self, "payload", "fields", "filter_params")

    @property
    def active_fields(self) -> tuple[str, ...]:
        return EFFECT_FIELDS[self.kind]

    @property
    def is_mutation(self) -> bool:
        return self.kind in MUTATION_KINDS

    @property
    def is_batch(self) -> bool:
        return self.kind in BATCH_KINDS and self.targets is not None

    @property
    def targets_view_name(self) -> str | None:
        return self.targets if isinstance(self.targets, str) else None

    def children(self) -> tuple[Effect, ...]:
        nested = [effect for effect in (self.then, self.else_) if effect is not None]
        nested.extend(self.effects)
        return tuple(nested)

    def depends_on(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths

    def modifies(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_modifies

        return collect_modifies(self).paths
