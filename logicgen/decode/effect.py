"""Effect and ValueExpression decoding."""

from __future__ import annotations

from collections.abc import Mapping

from logicgen.ast.effect import (
    EFFECT_FIELDS,
    VALUE_EXPRESSION_FIELDS,
    Effect,
    EffectKind,
    ValueExpression,
    ValueExpressionKind,
)
from logicgen.ast.paths import Path, validate_path
from logicgen.ast.values import LiteralValue
from logicgen.decode.errors import DecodeError, InvalidValueError, MissingFieldError
from logicgen.decode.reader import (
    Document,
    child,
    describe,
    document_key,
    expect_list,
    expect_mapping,
    item,
    optional_raw_mapping,
    optional_str,
    plain_value,
    read_kind,
)
from logicgen.decode.transform import decode_transform
from logicgen.decode.values import decode_optional_condition, decode_optional_value
from logicgen.decode.view import decode_view

_RAW_MAPPING_FIELDS = frozenset({"payload", "fields", "filter_params", "view_params"})
_EFFECT_OPERAND_FIELDS = frozenset({"value", "viewer_id", "filter_id"})
_VALUE_EXPRESSION_OPERAND_FIELDS = frozenset({"from_", "to"})


def infer_effect_kind(mapping: Document) -> EffectKind | None:
    """Kind implied by the fields of an effect written without `type`."""
    if not mapping.get("path"):
        return None
    if mapping.get("value") is not None:
        return EffectKind.SET
    if mapping.get("valueExpression") is not None:
        return EffectKind.SET_FROM_VIEW
    if mapping.get("transform") is not None:
        return EffectKind.TRANSFORM
    return None


def decode_effect(document: object, at: str = "") -> Effect:
    mapping = expect_mapping(document, at, "effect")
    raw = mapping.get("type")
    if raw is None or raw == "":
        kind = infer_effect_kind(mapping)
        if kind is None:
            raise MissingFieldError("effect type is required", at, field="type")
    else:
        kind = EffectKind(read_kind(mapping, EffectKind, "effect", at))

    fields = {name: _decode_effect_field(mapping, name, at) for name in EFFECT_FIELDS[kind]}
    return Effect(kind=kind, **fields)


def decode_value_expression(document: object, at: str = "") -> ValueExpression:
    mapping = expect_mapping(document, at, "value expression")
    kind = ValueExpressionKind(read_kind(mapping, ValueExpressionKind, "value expression", at))
    fields = {name: _decode_value_expression_field(mapping, name, at) for name in VALUE_EXPRESSION_FIELDS[kind]}
    return ValueExpression(kind=kind, **fields)


def _decode_effect_field(mapping: Document, name: str, at: str) -> object:
    key = document_key(name)
    if name == "targets":
        return _decode_targets(mapping, at)
    if name == "path":
        return _decode_path(mapping, at)
    if name in _EFFECT_OPERAND_FIELDS:
        return decode_optional_value(mapping, key, at)
    if name in _RAW_MAPPING_FIELDS:
        return optional_raw_mapping(mapping, key, at)
    if name == "value_expression":
        value = mapping.get(key)
        return decode_value_expression(value, child(at, key)) if value is not None else None
    if name == "transform":
        value = mapping.get(key)
        return decode_transform(value, child(at, key)) if value is not None else None
    if name == "condition":
        return decode_optional_condition(mapping, key, at)
    if name in ("then", "else_"):
        value = mapping.get(key)
        return decode_effect(value, child(at, key)) if value is not None else None
    if name == "effects":
        return _decode_effect_list(mapping, at)
    return optional_str(mapping, key, at)


def _decode_value_expression_field(mapping: Document, name: str, at: str) -> object:
    key = document_key(name)
    if name in _VALUE_EXPRESSION_OPERAND_FIELDS:
        return decode_optional_value(mapping, key, at)
    if name in _RAW_MAPPING_FIELDS:
        return optional_raw_mapping(mapping, key, at)
    if name == "field":
        text = optional_str(mapping, key, at)
        return Path(text) if text else None
    if name == "literal":
        return LiteralValue(plain_value(mapping["literal"])) if "literal" in mapping else None
    if name == "transform":
        value = mapping.get(key)
        return decode_transform(value, child(at, key)) if value is not None else None
    return optional_str(mapping, key, at)


def _decode_targets(mapping: Document, at: str) -> object:
    targets = mapping.get("targets")
    if targets is None:
        return None
    targets_at = child(at, "targets")
    if isinstance(targets, str):
        if not targets:
            raise MissingFieldError("effect targets must name a view", targets_at, field="targets")
        return targets
    if isinstance(targets, Mapping):
        return decode_view(targets, targets_at)
    raise DecodeError(f"effect targets must be a view name or a view, got {describe(targets)}", targets_at)


def _decode_path(mapping: Document, at: str) -> Path | None:
    text = optional_str(mapping, "path", at)
    if not text:
        return None
    problem = validate_path(text)
    if problem is not None:
        raise InvalidValueError(problem, child(at, "path"))
    return Path(text)


def _decode_effect_list(mapping: Document, at: str) -> tuple[Effect, ...]:
    value = mapping.get("effects")
    if value is None:
        return ()
    effects_at = child(at, "effects")
    entries = expect_list(value, effects_at, "`effects`")
    return tuple(decode_effect(entry, item(effects_at, index)) for index, entry in enumerate(entries))
