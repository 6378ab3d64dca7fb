"""Read/write state-path extraction over syntax trees.

Generic value slots contribute only state paths (`$.` or `state:`). Typed
path fields contribute whenever they are set, except `param:`, `view:` and
`const:` references. Untyped documents embedded in a node are scanned for state
path strings and re-decoded when they carry a transform `type`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging

from logicgen.ast.effect import EFFECT_FIELDS, VALUE_EXPRESSION_FIELDS, Effect, ValueExpression
from logicgen.ast.expression import Expression, WhereClause
from logicgen.ast.filter import Filter, FilterOperation
from logicgen.ast.paths import Path, entity_collection_path, is_state_path
from logicgen.ast.rule import Rule, RuleSet
from logicgen.ast.selector import SELECTOR_FIELDS, Selector
from logicgen.ast.transform import Transform
from logicgen.ast.trigger import TRIGGER_FIELDS, Trigger
from logicgen.ast.values import LiteralValue, PathRef
from logicgen.ast.view import View, ViewOperation
from logicgen.decode.errors import DecodeError
from logicgen.decode.reader import child, item
from logicgen.decode.transform import decode_transform
from logicgen.decode.values import is_transform_document
from logicgen.diagnostics import ANALYSIS_UNDECODABLE_VALUE, Diagnostic, diagnostic_from_spec

logger = logging.getLogger(__name__)

type AnalyzableNode = (
    RuleSet
    | Rule
    | Trigger
    | Selector
    | View
    | ViewOperation
    | Effect
    | ValueExpression
    | Transform
    | Expression
    | WhereClause
    | Filter
    | FilterOperation
    | LiteralValue
    | PathRef
)

_SELECTOR_PATH_FIELDS = ("id", "key", "from_", "position", "origin")
_VIEW_OPERATION_PATH_FIELDS = ("by", "field", "position")
_VIEW_OPERATION_VALUE_FIELDS = ("from_", "to", "origin")
_EFFECT_VALUE_FIELDS = ("value", "condition", "viewer_id", "filter_id")
_EFFECT_RAW_FIELDS = ("payload", "fields", "filter_params")


@dataclass(frozen=True, slots=True)
class DependencyFacts:
    """Paths found by one analysis walk plus diagnostics for dropped sub-trees."""

    paths: frozenset[Path]
    diagnostics: tuple[Diagnostic, ...] = ()


def collect_depends_on(node: AnalyzableNode, at: str = "") -> DependencyFacts:
    """Collect the paths `node` reads; `at` prefixes diagnostic locations."""
    walker = _ReadWalker()
    walker.visit(node, at)
    return DependencyFacts(paths=frozenset(walker.paths), diagnostics=tuple(walker.diagnostics))


def collect_modifies(node: Effect | Rule | RuleSet) -> DependencyFacts:
    """Collect the `path` of every mutation effect reachable through nesting."""
    paths: set[Path] = set()
    if isinstance(node, RuleSet):
        for rule in node.rules:
            for effect in rule.effects:
                _collect_writes(effect, paths)
    elif isinstance(node, Rule):
        for effect in node.effects:
            _collect_writes(effect, paths)
    else:
        _collect_writes(node, paths)
    return DependencyFacts(paths=frozenset(paths))


def _collect_writes(effect: Effect, paths: set[Path]) -> None:
    if effect.is_mutation and effect.path:
        paths.add(effect.path)
    for nested in effect.children():
        _collect_writes(nested, paths)


class _ReadWalker:
    def __init__(self) -> None:
        self.paths: set[Path] = set()
        self.diagnostics: list[Diagnostic] = []

    def visit(self, node: object, at: str) -> None:
        if node is None:
            return
        if isinstance(node, PathRef):
            if node.is_state:
                self.paths.add(node.path)
        elif isinstance(node, LiteralValue):
            self._visit_raw(node.value, at)
        elif isinstance(node, Expression):
            self.visit(node.left, child(at, "left"))
            self.visit(node.right, child(at, "right"))
            self._visit_logical(node, at)
        elif isinstance(node, WhereClause):
            self.visit(node.value, child(at, "value"))
            self._visit_logical(node, at)
        elif isinstance(node, Transform):
            for name in node.active_fields:
                self._visit_field(getattr(node, name), child(at, name.rstrip("_")))
        elif isinstance(node, Selector):
            self._visit_selector(node, at)
        elif isinstance(node, View):
            self._visit_view(node, at)
        elif isinstance(node, ViewOperation):
            self._visit_view_operation(node, at)
        elif isinstance(node, Trigger):
            self._visit_trigger(node, at)
        elif isinstance(node, Effect):
            self._visit_effect(node, at)
        elif isinstance(node, ValueExpression):
            self._visit_value_expression(node, at)
        elif isinstance(node, Filter):
            operations_at = child(at, "operations")
            for index, operation in enumerate(node.operations):
                self.visit(operation, item(operations_at, index))
        elif isinstance(node, FilterOperation):
            if node.target.is_state:
                self.paths.add(node.target)
            self.visit(node.where, child(at, "where"))
            self._visit_raw(node.value, child(at, "value"))
        elif isinstance(node, Rule):
            self._visit_rule(node, at)
        elif isinstance(node, RuleSet):
            rules_at = child(at, "rules")
            for index, rule in enumerate(node.rules):
                self._visit_rule(rule, item(rules_at, index))

    def _visit_rule(self, rule: Rule, at: str) -> None:
        self.visit(rule.trigger, child(at, "trigger"))
        self.visit(rule.selector, child(at, "selector"))
        views_at = child(at, "views")
        for name, view in rule.views.items():
            self.visit(view, child(views_at, name))

    def _visit_logical(self, node: Expression | WhereClause, at: str) -> None:
        for key, entries in (("and", node.and_), ("or", node.or_)):
            list_at = child(at, key)
            for index, entry in enumerate(entries):
                self.visit(entry, item(list_at, index))
        self.visit(node.not_, child(at, "not"))

    def _visit_field(self, value: object, at: str) -> None:
        if isinstance(value, tuple):
            for index, entry in enumerate(value):
                self.visit(entry, item(at, index))
        else:
            self.visit(value, at)

    def _visit_selector(self, selector: Selector, at: str) -> None:
        self.paths.add(entity_collection_path(selector.entity))
        active = SELECTOR_FIELDS[selector.kind]
        for name in _SELECTOR_PATH_FIELDS:
            if name in active:
                self._add_typed(getattr(selector, name))
        if "where" in active:
            self.visit(selector.where, child(at, "where"))

    def _visit_view(self, view: View, at: str) -> None:
        self.paths.add(entity_collection_path(view.source))
        pipeline_at = child(at, "pipeline")
        for index, operation in enumerate(view.pipeline):
            self._visit_view_operation(operation, item(pipeline_at, index))

    def _visit_view_operation(self, operation: ViewOperation, at: str) -> None:
        active = operation.active_fields
        for name in _VIEW_OPERATION_PATH_FIELDS:
            if name in active:
                self._add_typed(getattr(operation, name))
        for name in _VIEW_OPERATION_VALUE_FIELDS:
            if name in active:
                self.visit(getattr(operation, name), child(at, name.rstrip("_")))
        if "where" in active:
            self.visit(operation.where, child(at, "where"))
        if "fields" in active and operation.fields is not None:
            self._visit_raw(operation.fields, child(at, "fields"))

    def _visit_trigger(self, trigger: Trigger, at: str) -> None:
        active = TRIGGER_FIELDS[trigger.kind]
        if "watch" in active:
            for path in trigger.watch:
                self._add_typed(path)
        if "from_" in active:
            self._add_typed(trigger.from_)
            self._add_typed(trigger.to)
        if "condition" in active:
            self.visit(trigger.condition, child(at, "condition"))

    def _visit_effect(self, effect: Effect, at: str) -> None:
        active = EFFECT_FIELDS[effect.kind]
        if isinstance(effect.targets, View) and "targets" in active:
            self._visit_view(effect.targets, child(at, "targets"))
        for name in _EFFECT_VALUE_FIELDS:
            if name in active:
                self.visit(getattr(effect, name), child(at, name.rstrip("_")))
        for name in _EFFECT_RAW_FIELDS:
            value = getattr(effect, name)
            if name in active and value is not None:
                self._visit_raw(value, child(at, name))
        if "to" in active and effect.to is not None and is_state_path(effect.to):
            self.paths.add(Path(effect.to))
        if "transform" in active:
            self.visit(effect.transform, child(at, "transform"))
        if "value_expression" in active:
            self.visit(effect.value_expression, child(at, "valueExpression"))
        if "then" in active:
            for key, nested in (("then", effect.then), ("else", effect.else_)):
                if nested is not None:
                    self._visit_effect(nested, child(at, key))
        if "effects" in active:
            effects_at = child(at, "effects")
            for index, nested in enumerate(effect.effects):
                self._visit_effect(nested, item(effects_at, index))

    def _visit_value_expression(self, expression: ValueExpression, at: str) -> None:
        active = VALUE_EXPRESSION_FIELDS[expression.kind]
        if "field" in active:
            self._add_typed(expression.field)
        for name in ("from_", "to", "literal", "transform"):
            if name in active:
                self.visit(getattr(expression, name), child(at, name.rstrip("_")))
        if "view_params" in active and expression.view_params is not None:
            self._visit_raw(expression.view_params, child(at, "viewParams"))

    def _visit_raw(self, value: object, at: str) -> None:
        if isinstance(value, str):
            if is_state_path(value):
                self.paths.add(Path(value))
        elif isinstance(value, Mapping):
            if is_transform_document(value):
                self._visit_embedded_transform(value, at)
                return
            for key, entry in value.items():
                self._visit_raw(entry, child(at, str(key)))
        elif isinstance(value, list):
            for index, entry in enumerate(value):
                self._visit_raw(entry, item(at, index))

    def _visit_embedded_transform(self, value: Mapping[object, object], at: str) -> None:
        try:
            transform = decode_transform(value, at)
        except DecodeError as error:
            logger.debug("Dropping dependencies of undecodable transform at %s: %s", at or "<node>", error.detail)
            self.diagnostics.append(
                diagnostic_from_spec(ANALYSIS_UNDECODABLE_VALUE, at or "<node>", error.detail)
            )
            return
        self.visit(transform, at)

    def _add_typed(self, path: Path | None) -> None:
        if path and not path.is_reference:
            self.paths.add(path)
