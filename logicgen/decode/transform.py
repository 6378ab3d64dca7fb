"""Transform decoding."""

from __future__ import annotations

from logicgen.ast.transform import TRANSFORM_FIELDS, Transform, TransformKind
from logicgen.ast.values import GeoPoint
from logicgen.decode.reader import (
    Document,
    child,
    document_key,
    expect_list,
    expect_mapping,
    item,
    optional_float,
    optional_int,
    optional_str,
    read_kind,
)
from logicgen.decode.values import (
    decode_geo_point,
    decode_optional_condition,
    decode_optional_value,
    decode_value_list,
)

_FLOAT_FIELDS = frozenset({"speed", "radius"})
_INT_FIELDS = frozenset({"start", "length", "duration"})
_STR_FIELDS = frozenset({"unit", "format"})
_LIST_FIELDS = frozenset({"strings", "args", "values"})


def decode_transform(document: object, at: str = "") -> Transform:
    mapping = expect_mapping(document, at, "transform")
    kind = TransformKind(read_kind(mapping, TransformKind, "transform", at))
    fields = {name: _decode_field(mapping, name, at) for name in TRANSFORM_FIELDS[kind]}
    return Transform(kind=kind, **fields)


def _decode_field(mapping: Document, name: str, at: str) -> object:
    key = document_key(name)
    if name in _FLOAT_FIELDS:
        return optional_float(mapping, key, at)
    if name in _INT_FIELDS:
        return optional_int(mapping, key, at)
    if name in _STR_FIELDS:
        return optional_str(mapping, key, at)
    if name in _LIST_FIELDS:
        return decode_value_list(mapping, key, at)
    if name == "polygon":
        return _decode_polygon(mapping, at)
    if name == "condition":
        return decode_optional_condition(mapping, key, at)
    return decode_optional_value(mapping, key, at)


def _decode_polygon(mapping: Document, at: str) -> tuple[GeoPoint, ...]:
    value = mapping.get("polygon")
    if value is None:
        return ()
    polygon_at = child(at, "polygon")
    points = expect_list(value, polygon_at, "`polygon`")
    return tuple(decode_geo_point(point, item(polygon_at, index)) for index, point in enumerate(points))
