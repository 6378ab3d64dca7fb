"""Lint rules and rule contracts."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields, is_dataclass
import re
from typing import Final, Literal, Protocol

from logicgen.ast import (
    Effect,
    EffectKind,
    Path,
    PathRef,
    Rule,
    RuleSet,
    Selector,
    SelectorKind,
    Transform,
    TransformKind,
    Trigger,
    TriggerKind,
    ValueExpressionKind,
    View,
    ViewOperation,
    ViewOperationKind,
)
from logicgen.ast.paths import CURRENT_MARKER
from logicgen.decode.reader import child, document_key, item
from logicgen.diagnostics import (
    LINT_DEPRECATED_CURRENT_PATH,
    LINT_EFFECT_MISSING_FIELD,
    LINT_INVALID_SCHEDULE,
    LINT_SELECTOR_MISSING_FIELD,
    LINT_TRANSFORM_INVALID_ARGUMENT,
    LINT_TRANSFORM_MISSING_FIELD,
    LINT_UNKNOWN_VIEW_REFERENCE,
    LINT_VIEW_MISSING_PARAMETER,
    LINT_VIEW_OPERATION_MISSING_FIELD,
    Diagnostic,
    DiagnosticSpec,
    diagnostic_from_spec,
)

type LintDomain = Literal["semantic", "style"]
type LintConfidence = Literal["policy", "heuristic"]


class LintRule(Protocol):
    """Lint rule contract; rules never raise and report through diagnostics."""

    @property
    def code(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def category(self) -> str: ...

    @property
    def domain(self) -> LintDomain: ...

    @property
    def confidence(self) -> LintConfidence: ...

    def run(self, ruleset: RuleSet) -> list[Diagnostic]: ...


_EFFECT_REQUIRED: Final[dict[EffectKind, tuple[str, ...]]] = {
    EffectKind.SET: ("path", "value"),
    EffectKind.INCREMENT: ("path",),
    EffectKind.DECREMENT: ("path",),
    EffectKind.TRANSFORM: ("path", "transform"),
    EffectKind.SET_FROM_VIEW: ("path", "value_expression"),
    EffectKind.SPAWN: ("entity",),
    EffectKind.EMIT: ("event",),
    EffectKind.IF: ("condition", "then"),
    EffectKind.ENABLE_RULE: ("rule",),
    EffectKind.DISABLE_RULE: ("rule",),
    EffectKind.ENABLE_TRIGGER: ("rule",),
    EffectKind.DISABLE_TRIGGER: ("rule",),
    EffectKind.RESET_TIMER: ("rule",),
    EffectKind.ADD_FILTER: ("viewer_id", "filter_name"),
    EffectKind.REMOVE_FILTER: ("viewer_id", "filter_id"),
    EffectKind.ENABLE_FILTER: ("filter",),
    EffectKind.DISABLE_FILTER: ("filter",),
}

_RANKED_REQUIRED: Final = ("origin", "position")

_VIEW_OPERATION_REQUIRED: Final[dict[ViewOperationKind, tuple[str, ...]]] = {
    ViewOperationKind.FILTER: ("where",),
    ViewOperationKind.MAP: ("fields",),
    ViewOperationKind.FLAT_MAP: ("field",),
    ViewOperationKind.ORDER_BY: ("by",),
    ViewOperationKind.GROUP_BY: ("group_field",),
    ViewOperationKind.LIMIT: ("count",),
    ViewOperationKind.MIN: ("field",),
    ViewOperationKind.MAX: ("field",),
    ViewOperationKind.SUM: ("field",),
    ViewOperationKind.AVG: ("field",),
    ViewOperationKind.NEAREST: _RANKED_REQUIRED,
    ViewOperationKind.FARTHEST: _RANKED_REQUIRED,
}

_BINARY_REQUIRED: Final = ("left", "right")

_TRANSFORM_REQUIRED: Final[dict[TransformKind, tuple[str, ...]]] = {
    TransformKind.ADD: _BINARY_REQUIRED,
    TransformKind.SUBTRACT: _BINARY_REQUIRED,
    TransformKind.MULTIPLY: _BINARY_REQUIRED,
    TransformKind.DIVIDE: _BINARY_REQUIRED,
    TransformKind.MODULO: _BINARY_REQUIRED,
    TransformKind.MIN: _BINARY_REQUIRED,
    TransformKind.MAX: _BINARY_REQUIRED,
    TransformKind.CLAMP: ("value", "min", "max"),
    TransformKind.MOVE_TOWARDS: ("current", "target", "speed"),
    TransformKind.GPS_DISTANCE: ("from_", "to"),
    TransformKind.GPS_BEARING: ("from_", "to"),
    TransformKind.POINT_IN_RADIUS: ("value", "center", "radius"),
    TransformKind.POINT_IN_POLYGON: ("value", "polygon"),
    TransformKind.IF: ("condition",),
}

_SELECTOR_REQUIRED: Final[dict[SelectorKind, tuple[str, ...]]] = {
    SelectorKind.FILTER: ("where",),
    SelectorKind.RELATED: ("relation", "from_"),
    SelectorKind.NEAREST: ("position", "origin"),
    SelectorKind.FARTHEST: ("position", "origin"),
}

_CRON_FIELD_RE = re.compile(r"^(\*|\*/\d+|\d+(-\d+)?(,\d+(-\d+)?)*)$")
_AT_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_EVERY_RE = re.compile(r"^(\d+(\.\d+)?(ns|us|µs|ms|s|m|h))+$")


@dataclass(frozen=True, slots=True)
class DeprecatedCurrentPathRule:
    """Flags the bare `$` current-entity marker anywhere in a rule."""

    code: str = LINT_DEPRECATED_CURRENT_PATH.code
    name: str = "styleDeprecatedCurrentPath"
    category: str = "style"
    domain: LintDomain = "style"
    confidence: LintConfidence = "policy"

    def run(self, ruleset: RuleSet) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for node, location in iter_nodes(ruleset):
            for name, value in _attributes(node):
                if isinstance(node, PathRef) and name == "path":
                    at = location
                else:
                    at = child(location, document_key(name))
                if isinstance(value, Path) and value == CURRENT_MARKER:
                    diagnostics.append(diagnostic_from_spec(LINT_DEPRECATED_CURRENT_PATH, at))
                elif isinstance(value, tuple):
                    for index, entry in enumerate(value):
                        if isinstance(entry, Path) and entry == CURRENT_MARKER:
                            diagnostics.append(diagnostic_from_spec(LINT_DEPRECATED_CURRENT_PATH, item(at, index)))
        return diagnostics


@dataclass(frozen=True, slots=True)
class UnknownViewReferenceRule:
    """Effects may only name views declared on their own rule."""

    code: str = LINT_UNKNOWN_VIEW_REFERENCE.code
    name: str = "semanticUnknownViewReference"
    category: str = "semantic"
    domain: LintDomain = "semantic"
    confidence: LintConfidence = "policy"

    def run(self, ruleset: RuleSet) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for rule, location in _iter_rules(ruleset):
            for effect, at in _iter_effects(rule, location):
                target = effect.targets_view_name
                if target is not None and target not in rule.views:
                    diagnostics.append(
                        diagnostic_from_spec(LINT_UNKNOWN_VIEW_REFERENCE, child(at, "targets"), f"View `{target}`.")
                    )
                expression = effect.value_expression
                if (
                    expression is not None
                    and expression.kind == ValueExpressionKind.VIEW_RESULT
                    and expression.view
                    and expression.view not in rule.views
                ):
                    diagnostics.append(
                        diagnostic_from_spec(
                            LINT_UNKNOWN_VIEW_REFERENCE,
                            child(child(at, "valueExpression"), "view"),
                            f"View `{expression.view}`.",
                        )
                    )
        return diagnostics


@dataclass(frozen=True, slots=True)
class EffectRequiredFieldsRule:
    code: str = LINT_EFFECT_MISSING_FIELD.code
    name: str = "semanticEffectRequiredFields"
    category: str = "semantic"
    domain: LintDomain = "semantic"
    confidence: LintConfidence = "policy"

    def run(self, ruleset: RuleSet) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for rule, location in _iter_rules(ruleset):
            for effect, at in _iter_effects(rule, location):
                diagnostics.extend(
                    _missing_fields(LINT_EFFECT_MISSING_FIELD, effect, _EFFECT_REQUIRED.get(effect.kind, ()), at)
                )
        return diagnostics


@dataclass(frozen=True, slots=True)
class ViewOperationRequiredFieldsRule:
    code: str = LINT_VIEW_OPERATION_MISSING_FIELD.code
    name: str = "semanticViewOperationRequiredFields"
    category: str = "semantic"
    domain: LintDomain = "semantic"
    confidence: LintConfidence = "policy"

    def run(self, ruleset: RuleSet) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for node, at in iter_nodes(ruleset):
            if isinstance(node, ViewOperation):
                required = _VIEW_OPERATION_REQUIRED.get(node.kind, ())
                diagnostics.extend(_missing_fields(LINT_VIEW_OPERATION_MISSING_FIELD, node, required, at))
        return diagnostics


@dataclass(frozen=True, slots=True)
class TransformRequiredFieldsRule:
    """Checks per-kind transform inputs, including a positive MoveTowards speed."""

    code: str = LINT_TRANSFORM_MISSING_FIELD.code
    name: str = "semanticTransformRequiredFields"
    category: str = "semantic"
    domain: LintDomain = "semantic"
    confidence: LintConfidence = "policy"

    def run(self, ruleset: RuleSet) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for node, at in iter_nodes(ruleset):
            if not isinstance(node, Transform):
                continue
            required = _TRANSFORM_REQUIRED.get(node.kind, ())
            diagnostics.extend(_missing_fields(LINT_TRANSFORM_MISSING_FIELD, node, required, at))
            if node.kind == TransformKind.MOVE_TOWARDS and node.speed is not None and node.speed <= 0:
                diagnostics.append(
                    diagnostic_from_spec(
                        LINT_TRANSFORM_INVALID_ARGUMENT,
                        child(at, "speed"),
                        "MoveTowards speed must be positive.",
                    )
                )
        return diagnostics


@dataclass(frozen=True, slots=True)
class SelectorRequiredFieldsRule:
    code: str = LINT_SELECTOR_MISSING_FIELD.code
    name: str = "semanticSelectorRequiredFields"
    category: str = "semantic"
    domain: LintDomain = "semantic"
    confidence: LintConfidence = "policy"

    def run(self, ruleset: RuleSet) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for node, at in iter_nodes(ruleset):
            if not isinstance(node, Selector):
                continue
            required = _SELECTOR_REQUIRED.get(node.kind, ())
            diagnostics.extend(_missing_fields(LINT_SELECTOR_MISSING_FIELD, node, required, at))
            if node.kind == SelectorKind.SINGLE and node.id is None and node.key is None:
                diagnostics.append(
                    diagnostic_from_spec(LINT_SELECTOR_MISSING_FIELD, at, "Single selector requires `id` or `key`.")
                )
        return diagnostics


@dataclass(frozen=True, slots=True)
class ViewParameterRule:
    """SetFromView must bind every view parameter that has no default."""

    code: str = LINT_VIEW_MISSING_PARAMETER.code
    name: str = "semanticViewMissingParameter"
    category: str = "semantic"
    domain: LintDomain = "semantic"
    confidence: LintConfidence = "policy"

    def run(self, ruleset: RuleSet) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for rule, location in _iter_rules(ruleset):
            for effect, at in _iter_effects(rule, location):
                expression = effect.value_expression
                if expression is None or expression.kind != ValueExpressionKind.VIEW_RESULT or not expression.view:
                    continue
                view = rule.views.get(expression.view)
                if view is None:
                    continue
                bound = expression.view_params or {}
                for param in view.required_params():
                    if param in bound:
                        continue
                    diagnostics.append(
                        diagnostic_from_spec(
                            LINT_VIEW_MISSING_PARAMETER,
                            child(child(at, "valueExpression"), "viewParams"),
                            f"View `{expression.view}` requires `{param}`.",
                        )
                    )
        return diagnostics


@dataclass(frozen=True, slots=True)
class ScheduleFormatRule:
    """Validates cron fields, `at` clock times, `every` durations and weekdays."""

    code: str = LINT_INVALID_SCHEDULE.code
    name: str = "semanticScheduleFormat"
    category: str = "semantic"
    domain: LintDomain = "semantic"
    confidence: LintConfidence = "policy"

    def run(self, ruleset: RuleSet) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for rule, location in _iter_rules(ruleset):
            at = child(location, "trigger")
            for problem, problem_at in _schedule_problems(rule.trigger, at):
                diagnostics.append(diagnostic_from_spec(LINT_INVALID_SCHEDULE, problem_at, problem))
        return diagnostics


def default_lint_rules() -> tuple[LintRule, ...]:
    rules: list[LintRule] = [
        DeprecatedCurrentPathRule(),
        UnknownViewReferenceRule(),
    ]
    return tuple(sorted(rules, key=lambda rule: (rule.category, rule.code, rule.name)))


def strict_lint_rules() -> tuple[LintRule, ...]:
    rules: list[LintRule] = [
        *default_lint_rules(),
        EffectRequiredFieldsRule(),
        ViewOperationRequiredFieldsRule(),
        TransformRequiredFieldsRule(),
        SelectorRequiredFieldsRule(),
        ViewParameterRule(),
        ScheduleFormatRule(),
    ]
    return tuple(sorted(rules, key=lambda rule: (rule.category, rule.code, rule.name)))


def validate_lint_rules(rules: tuple[LintRule, ...]) -> None:
    allowed_domains = {"semantic", "style"}
    allowed_confidence = {"policy", "heuristic"}
    seen_codes: set[str] = set()
    for rule in rules:
        if rule.domain not in allowed_domains:
            raise ValueError(f"Lint rule `{rule.name}` has invalid domain `{rule.domain}`; expected semantic/style.")
        if rule.confidence not in allowed_confidence:
            raise ValueError(
                f"Lint rule `{rule.name}` has invalid confidence `{rule.confidence}`; expected policy/heuristic."
            )
        if not rule.code.startswith("LINT_"):
            raise ValueError(f"Lint rule `{rule.name}` has invalid code `{rule.code}`; expected `LINT_` prefix.")
        if rule.code in seen_codes:
            raise ValueError(f"Lint rule `{rule.name}` reuses code `{rule.code}`.")
        seen_codes.add(rule.code)


def iter_nodes(ruleset: RuleSet) -> Iterator[tuple[object, str]]:
    """Yield every syntax node of `ruleset` with its document location, parents first."""
    for rule, location in _iter_rules(ruleset):
        yield from _iter_node(rule, location)


def _iter_node(node: object, at: str) -> Iterator[tuple[object, str]]:
    yield node, at
    for name, value in _attributes(node):
        key = document_key(name)
        if isinstance(value, tuple):
            for index, entry in enumerate(value):
                if _is_node(entry):
                    yield from _iter_node(entry, item(child(at, key), index))
        elif isinstance(value, Mapping) and name == "views":
            views_at = child(at, key)
            for view_name, view in value.items():
                if isinstance(view, View):
                    yield from _iter_node(view, child(views_at, view_name))
        elif _is_node(value):
            yield from _iter_node(value, child(at, key))


def _is_node(value: object) -> bool:
    return is_dataclass(value) and not isinstance(value, type)


def _attributes(node: object) -> Iterator[tuple[str, object]]:
    if not _is_node(node):
        return
    for field in fields(node):
        value = getattr(node, field.name)
        if value is not None:
            yield field.name, value


def _iter_rules(ruleset: RuleSet) -> Iterator[tuple[Rule, str]]:
    for index, rule in enumerate(ruleset.rules):
        yield rule, item("rules", index)


def _iter_effects(rule: Rule, location: str) -> Iterator[tuple[Effect, str]]:
    effects_at = child(location, "effects")
    for index, effect in enumerate(rule.effects):
        yield from _iter_effect_tree(effect, item(effects_at, index))


def _iter_effect_tree(effect: Effect, at: str) -> Iterator[tuple[Effect, str]]:
    yield effect, at
    if effect.then is not None:
        yield from _iter_effect_tree(effect.then, child(at, "then"))
    if effect.else_ is not None:
        yield from _iter_effect_tree(effect.else_, child(at, "else"))
    nested_at = child(at, "effects")
    for index, nested in enumerate(effect.effects):
        yield from _iter_effect_tree(nested, item(nested_at, index))


def _missing_fields(
    diagnostic: DiagnosticSpec,
    node: Effect | ViewOperation | Transform | Selector,
    required: tuple[str, ...],
    at: str,
) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for name in required:
        value = getattr(node, name)
        if value is None or value == "" or value == ():
            diagnostics.append(
                diagnostic_from_spec(diagnostic, at, f"{node.kind} requires `{document_key(name)}`.")
            )
    return diagnostics


def _schedule_problems(trigger: Trigger, at: str) -> list[tuple[str, str]]:
    problems: list[tuple[str, str]] = []
    if trigger.kind == TriggerKind.CRON and trigger.cron:
        parts = trigger.cron.split()
        if len(parts) < 5:
            problems.append((f"Cron expression `{trigger.cron}` needs five fields.", child(at, "cron")))
        elif not all(_CRON_FIELD_RE.fullmatch(part) for part in parts[:5]):
            problems.append((f"Cron expression `{trigger.cron}` has an unsupported field.", child(at, "cron")))
    if trigger.kind != TriggerKind.SCHEDULE:
        return problems
    if trigger.at:
        match = _AT_RE.fullmatch(trigger.at)
        if match is None or int(match.group(1)) > 23 or int(match.group(2)) > 59:
            problems.append((f"Time `{trigger.at}` is not HH:MM.", child(at, "at")))
    if trigger.every and _EVERY_RE.fullmatch(trigger.every) is None:
        problems.append((f"Interval `{trigger.every}` is not a duration such as `5m` or `1h`.", child(at, "every")))
    for index, weekday in enumerate(trigger.weekdays):
        if not 0 <= weekday <= 6:
            problems.append((f"Weekday {weekday} is outside 0-6.", item(child(at, "weekdays"), index)))
    return problems
