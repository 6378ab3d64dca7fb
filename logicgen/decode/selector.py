"""Selector decoding."""

from __future__ import annotations

from logicgen.ast.paths import Path
from logicgen.ast.selector import SELECTOR_FIELDS, Selector, SelectorKind
from logicgen.decode.expression import decode_where
from logicgen.decode.reader import (
    Document,
    child,
    document_key,
    expect_mapping,
    optional_float,
    optional_int,
    optional_str,
    read_kind,
    required_str,
)

_PATH_FIELDS = frozenset({"id", "key", "from_", "position", "origin"})


def decode_selector(document: object, at: str = "") -> Selector:
    mapping = expect_mapping(document, at, "selector")
    kind = SelectorKind(read_kind(mapping, SelectorKind, "selector", at))
    entity = required_str(mapping, "entity", at, "selector")
    fields = {name: _decode_field(mapping, name, at) for name in SELECTOR_FIELDS[kind]}
    return Selector(kind=kind, entity=entity, **fields)


def _decode_field(mapping: Document, name: str, at: str) -> object:
    key = document_key(name)
    if name in _PATH_FIELDS:
        text = optional_str(mapping, key, at)
        return Path(text) if text else None
    if name == "where":
        where = mapping.get("where")
        return decode_where(where, child(at, "where")) if where is not None else None
    if name == "limit":
        return optional_int(mapping, key, at)
    if name in ("max_distance", "min_distance"):
        return optional_float(mapping, key, at)
    return optional_str(mapping, key, at)
