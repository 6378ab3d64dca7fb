"""Rule, RuleSet and whole-document decoding."""

from __future__ import annotations

from collections.abc import Mapping

from logicgen.ast.rule import Rule, RuleSet
from logicgen.ast.view import View
from logicgen.decode.effect import decode_effect
from logicgen.decode.errors import DocumentShapeError, MissingFieldError
from logicgen.decode.reader import (
    Document,
    child,
    expect_list,
    expect_mapping,
    item,
    optional_bool,
    optional_int,
    optional_str,
    optional_str_list,
)
from logicgen.decode.selector import decode_selector
from logicgen.decode.trigger import decode_trigger
from logicgen.decode.view import decode_view

WRAPPED_RULESET_VERSION = "2.0"


def decode_rule(document: object, at: str = "") -> Rule:
    mapping = expect_mapping(document, at, "rule")
    name = optional_str(mapping, "name", at)
    if not name:
        raise MissingFieldError("rule name is required", at, field="name")
    if mapping.get("trigger") is None:
        raise MissingFieldError("rule trigger is required", at, field="trigger")
    if mapping.get("effects") is None:
        raise MissingFieldError("rule effects are required", at, field="effects")

    trigger = decode_trigger(mapping["trigger"], child(at, "trigger"))
    selector_value = mapping.get("selector")
    selector = decode_selector(selector_value, child(at, "selector")) if selector_value is not None else None
    views = _decode_views(mapping, at)

    effects_at = child(at, "effects")
    effects = tuple(
        decode_effect(entry, item(effects_at, index))
        for index, entry in enumerate(expect_list(mapping["effects"], effects_at, "`effects`"))
    )
    return Rule(
        name=name,
        trigger=trigger,
        effects=effects,
        description=optional_str(mapping, "description", at),
        priority=optional_int(mapping, "priority", at) or 0,
        enabled=optional_bool(mapping, "enabled", at),
        selector=selector,
        views=views,
    )


def decode_ruleset(document: object, at: str = "") -> RuleSet:
    mapping = expect_mapping(document, at, "rule set")
    if mapping.get("rules") is None:
        raise MissingFieldError("rule set rules are required", at, field="rules")
    rules_at = child(at, "rules")
    rules = tuple(
        decode_rule(entry, item(rules_at, index))
        for index, entry in enumerate(expect_list(mapping["rules"], rules_at, "`rules`"))
    )
    return RuleSet(
        version=optional_str(mapping, "version", at) or "",
        package=optional_str(mapping, "package", at) or "",
        imports=optional_str_list(mapping, "imports", at),
        rules=rules,
    )


def decode_document(document: object) -> RuleSet:
    """Decode any accepted document shape into a RuleSet.

    Accepts a rule set (an object with `rules`), a single rule object, or a
    list of rule objects. Bare rules are wrapped in a version "2.0" rule set.
    """
    if isinstance(document, Mapping):
        if "rules" in document:
            return decode_ruleset(document)
        if _looks_like_rule(document):
            return RuleSet(version=WRAPPED_RULESET_VERSION, rules=(decode_rule(document),))
        raise DocumentShapeError("invalid rule format: expected `rules` or a rule with `name` and `trigger`")
    if isinstance(document, list):
        if not document:
            raise DocumentShapeError("invalid rule format: empty rule list")
        rules = tuple(decode_rule(entry, item("", index)) for index, entry in enumerate(document))
        return RuleSet(version=WRAPPED_RULESET_VERSION, rules=rules)
    raise DocumentShapeError("invalid rule format: expected an object or a list")


def _looks_like_rule(mapping: Mapping[object, object]) -> bool:
    return "name" in mapping and ("trigger" in mapping or "effects" in mapping)


def _decode_views(mapping: Document, at: str) -> dict[str, View]:
    value = mapping.get("views")
    if value is None:
        return {}
    views_at = child(at, "views")
    return {
        name: decode_view(definition, child(views_at, name), name=name)
        for name, definition in expect_mapping(value, views_at, "`views`").items()
    }
