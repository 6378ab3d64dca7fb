"""Re-encoding of syntax trees into plain documents.

`decode_document(to_document(ruleset)) == ruleset` holds for every tree the
decoders produce. Only the active fields of each kind are written, always in
the explicit (non-shorthand) form.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from logicgen.ast.effect import VALUE_EXPRESSION_FIELDS, Effect, ValueExpression
from logicgen.ast.expression import Expression, WhereClause
from logicgen.ast.filter import Filter, FilterOperation, FilterParam
from logicgen.ast.rule import Rule, RuleSet
from logicgen.ast.selector import SELECTOR_FIELDS, Selector
from logicgen.ast.transform import Transform
from logicgen.ast.trigger import TRIGGER_FIELDS, Trigger
from logicgen.ast.values import GeoPoint, JsonValue, LiteralValue, PathRef
from logicgen.ast.view import ParamDef, View, ViewOperation
from logicgen.decode.reader import document_key, plain_value

type Node = (
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
)


def to_document(node: Node) -> dict[str, JsonValue]:
    """Encode a node as a JSON-compatible document with camelCase keys."""
    if isinstance(node, RuleSet):
        return _encode_ruleset(node)
    if isinstance(node, Rule):
        return _encode_rule(node)
    if isinstance(node, View):
        return _encode_view(node)
    if isinstance(node, Filter):
        return _encode_filter(node)
    if isinstance(node, Expression):
        return _encode_logical(node, ("left", "op", "right"))
    if isinstance(node, WhereClause):
        return _encode_logical(node, ("field", "op", "value"))
    if isinstance(node, FilterOperation):
        encoded = _encode_fields(node, ("id", "target", "where", "fields", "field"))
        if node.value is not None:
            encoded["value"] = plain_value(node.value)
        return {"type": node.kind.value, **encoded}
    if isinstance(node, Selector):
        return {"type": node.kind.value, "entity": node.entity, **_encode_fields(node, SELECTOR_FIELDS[node.kind])}
    if isinstance(node, Trigger):
        document: dict[str, JsonValue] = {"type": node.kind.value, **_encode_fields(node, TRIGGER_FIELDS[node.kind])}
        if node.enabled is not None:
            document["enabled"] = node.enabled
        return document
    if isinstance(node, ValueExpression):
        return {"type": node.kind.value, **_encode_fields(node, VALUE_EXPRESSION_FIELDS[node.kind])}
    return {"type": node.kind.value, **_encode_fields(node, node.active_fields)}


def _encode_ruleset(ruleset: RuleSet) -> dict[str, JsonValue]:
    document: dict[str, JsonValue] = {}
    if ruleset.version:
        document["version"] = ruleset.version
    if ruleset.package:
        document["package"] = ruleset.package
    if ruleset.imports:
        document["imports"] = list(ruleset.imports)
    document["rules"] = [_encode_rule(rule) for rule in ruleset.rules]
    return document


def _encode_rule(rule: Rule) -> dict[str, JsonValue]:
    document: dict[str, JsonValue] = {"name": rule.name}
    if rule.description is not None:
        document["description"] = rule.description
    if rule.priority:
        document["priority"] = rule.priority
    if rule.enabled is not None:
        document["enabled"] = rule.enabled
    document["trigger"] = to_document(rule.trigger)
    if rule.selector is not None:
        document["selector"] = to_document(rule.selector)
    if rule.views:
        document["views"] = {name: _encode_view(view) for name, view in rule.views.items()}
    document["effects"] = [to_document(effect) for effect in rule.effects]
    return document


def _encode_view(view: View) -> dict[str, JsonValue]:
    document: dict[str, JsonValue] = {"source": view.source}
    if view.name is not None:
        document["name"] = view.name
    if view.pipeline:
        document["pipeline"] = [to_document(operation) for operation in view.pipeline]
    if view.params:
        document["params"] = {name: _encode_param(param) for name, param in view.params.items()}
    return document


def _encode_param(param: ParamDef | FilterParam) -> dict[str, JsonValue]:
    document: dict[str, JsonValue] = {}
    if isinstance(param, FilterParam):
        document["name"] = param.name
        if param.type:
            document["type"] = param.type
    elif param.type is not None:
        document["type"] = param.type
    if param.default is not None:
        document["default"] = plain_value(param.default)
    return document


def _encode_filter(filter_: Filter) -> dict[str, JsonValue]:
    document: dict[str, JsonValue] = {"name": filter_.name}
    if filter_.description is not None:
        document["description"] = filter_.description
    if filter_.enabled is not None:
        document["enabled"] = filter_.enabled
    if filter_.params:
        document["params"] = [_encode_param(param) for param in filter_.params]
    document["operations"] = [to_document(operation) for operation in filter_.operations]
    return document


def _encode_logical(node: Expression | WhereClause, leaf_fields: tuple[str, ...]) -> dict[str, JsonValue]:
    document = _encode_fields(node, leaf_fields)
    if node.and_:
        document["and"] = [to_document(entry) for entry in node.and_]
    if node.or_:
        document["or"] = [to_document(entry) for entry in node.or_]
    if node.not_ is not None:
        document["not"] = to_document(node.not_)
    return document


def _encode_fields(node: object, names: tuple[str, ...]) -> dict[str, JsonValue]:
    document: dict[str, JsonValue] = {}
    for name in names:
        value = getattr(node, name)
        if value is None or value == ():
            continue
        document[document_key(name)] = _encode_value(value)
    return document


def _encode_value(value: object) -> JsonValue:
    if isinstance(value, LiteralValue):
        return plain_value(value.value)
    if isinstance(value, PathRef):
        return str(value.path)
    if isinstance(value, GeoPoint):
        return {"lat": value.lat, "lon": value.lon}
    if isinstance(value, View):
        return _encode_view(value)
    if isinstance(value, tuple):
        return [_encode_value(entry) for entry in value]
    if isinstance(value, Mapping):
        return plain_value(value)
    if isinstance(value, str):
        # Path and StrEnum values encode as their plain text.
        return str(value)
    if isinstance(value, (bool, int, float)):
        return value
    return to_document(cast(Node, value))
