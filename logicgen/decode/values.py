"""Decoding of value-or-reference slots."""

from __future__ import annotations

from collections.abc import Mapping

from logicgen.ast.paths import Path, looks_like_path
from logicgen.ast.transform import TransformKind
from logicgen.ast.values import GeoPoint, LiteralValue, Operand, PathRef
from logicgen.decode.errors import InvalidValueError
from logicgen.decode.reader import child, describe, expect_list, expect_mapping, item, plain_value

_TRANSFORM_KINDS = frozenset(kind.value for kind in TransformKind)


def _type_tag(value: object) -> str | None:
    if not isinstance(value, Mapping):
        return None
    kind = value.get("type")
    return kind if isinstance(kind, str) and kind != "" else None


def is_transform_document(value: object) -> bool:
    """True for objects tagged with a string `type`, known transform kind or not."""
    return _type_tag(value) is not None


def is_known_transform_document(value: object) -> bool:
    return _type_tag(value) in _TRANSFORM_KINDS


def decode_value(value: object, at: str = "") -> Operand:
    """Decode a generic value slot.

    Prefixed path strings become `PathRef`, objects whose `type` names a
    transform kind become nested transforms and everything else, including
    objects with any other `type`, stays literal.
    """
    if isinstance(value, str) and looks_like_path(value):
        return PathRef(Path(value))
    if is_known_transform_document(value):
        from logicgen.decode.transform import decode_transform

        return decode_transform(value, at)
    return LiteralValue(plain_value(value))


def decode_optional_value(document: Mapping[str, object], key: str, at: str) -> Operand | None:
    value = document.get(key)
    if value is None:
        return None
    return decode_value(value, child(at, key))


def decode_value_list(document: Mapping[str, object], key: str, at: str) -> tuple[Operand, ...]:
    value = document.get(key)
    if value is None:
        return ()
    list_at = child(at, key)
    entries = expect_list(value, list_at, f"`{key}`")
    return tuple(decode_value(entry, item(list_at, index)) for index, entry in enumerate(entries))


def decode_condition(value: object, at: str = "") -> Operand:
    """Decode a condition slot: path, transform, expression object or literal.

    Unlike generic value slots, a typed object here must be a known transform.
    """
    if isinstance(value, list):
        raise InvalidValueError(f"condition must not be a list, got {describe(value)}", at)
    if is_transform_document(value):
        from logicgen.decode.transform import decode_transform

        return decode_transform(value, at)
    if isinstance(value, Mapping):
        from logicgen.decode.expression import decode_expression

        return decode_expression(value, at)
    return decode_value(value, at)


def decode_optional_condition(document: Mapping[str, object], key: str, at: str) -> Operand | None:
    value = document.get(key)
    if value is None:
        return None
    return decode_condition(value, child(at, key))


def decode_geo_point(value: object, at: str) -> GeoPoint:
    point = expect_mapping(value, at, "point")
    return GeoPoint(lat=_coordinate(point, "lat", at), lon=_coordinate(point, "lon", at))


def _coordinate(point: Mapping[str, object], name: str, at: str) -> float:
    coordinate = point.get(name)
    if isinstance(coordinate, bool) or not isinstance(coordinate, (int, float)):
        raise InvalidValueError(f"point `{name}` must be a number, got {describe(coordinate)}", child(at, name))
    return float(coordinate)
