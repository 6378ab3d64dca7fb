"""Typed field readers over generic documents."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import cast

from logicgen.ast.values import JsonValue
from logicgen.decode.errors import (
    DecodeError,
    InvalidValueError,
    MissingFieldError,
    UnknownKindError,
)

type Document = Mapping[str, object]


def child(at: str, key: str) -> str:
    return f"{at}.{key}" if at else key


def item(at: str, index: int) -> str:
    return f"{at}[{index}]"


def describe(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, list):
        return "list"
    return type(value).__name__


def expect_mapping(value: object, at: str, what: str) -> Document:
    if not isinstance(value, Mapping):
        raise DecodeError(f"invalid {what}: expected an object, got {describe(value)}", at)
    for key in value:
        if not isinstance(key, str):
            raise DecodeError(f"invalid {what}: keys must be strings, got {key!r}", at)
    return value


def expect_list(value: object, at: str, what: str) -> list[object]:
    if not isinstance(value, list):
        raise DecodeError(f"invalid {what}: expected a list, got {describe(value)}", at)
    return value


def read_kind(document: Document, kinds: type[StrEnum], family: str, at: str) -> str:
    """Read and check the `type` discriminator before any other field is touched."""
    raw = document.get("type")
    if raw is None or raw == "":
        raise MissingFieldError(f"{family} type is required", at, field="type")
    if not isinstance(raw, str):
        raise InvalidValueError(f"{family} type must be a string, got {describe(raw)}", at)
    if raw not in {kind.value for kind in kinds}:
        raise UnknownKindError(family, raw, at)
    return raw


def optional_str(document: Document, key: str, at: str) -> str | None:
    value = document.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidValueError(f"`{key}` must be a string, got {describe(value)}", child(at, key))
    return value


def required_str(document: Document, key: str, at: str, what: str) -> str:
    value = optional_str(document, key, at)
    if not value:
        raise MissingFieldError(f"{what} {key} is required", at, field=key)
    return value


def optional_int(document: Document, key: str, at: str) -> int | None:
    value = document.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidValueError(f"`{key}` must be an integer, got {describe(value)}", child(at, key))
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidValueError(f"`{key}` must be an integer, got {value!r}", child(at, key))
        return int(value)
    return value


def optional_float(document: Document, key: str, at: str) -> float | None:
    value = document.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidValueError(f"`{key}` must be a number, got {describe(value)}", child(at, key))
    return value


def optional_bool(document: Document, key: str, at: str) -> bool | None:
    value = document.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise InvalidValueError(f"`{key}` must be a boolean, got {describe(value)}", child(at, key))
    return value


def optional_str_list(document: Document, key: str, at: str) -> tuple[str, ...]:
    value = document.get(key)
    if value is None:
        return ()
    strings: list[str] = []
    for index, entry in enumerate(expect_list(value, child(at, key), f"`{key}`")):
        if not isinstance(entry, str):
            raise InvalidValueError(
                f"`{key}` entries must be strings, got {describe(entry)}",
                item(child(at, key), index),
            )
        strings.append(entry)
    return tuple(strings)


def optional_int_list(document: Document, key: str, at: str) -> tuple[int, ...]:
    value = document.get(key)
    if value is None:
        return ()
    numbers: list[int] = []
    for index, entry in enumerate(expect_list(value, child(at, key), f"`{key}`")):
        if isinstance(entry, bool) or not isinstance(entry, int):
            raise InvalidValueError(
                f"`{key}` entries must be integers, got {describe(entry)}",
                item(child(at, key), index),
            )
        numbers.append(entry)
    return tuple(numbers)


def optional_raw_mapping(document: Document, key: str, at: str) -> dict[str, JsonValue] | None:
    """Copy an untyped object field; nested values are kept as documents."""
    value = document.get(key)
    if value is None:
        return None
    mapping = expect_mapping(value, child(at, key), f"`{key}`")
    return {name: plain_value(entry) for name, entry in mapping.items()}


def plain_value(value: object) -> JsonValue:
    """Copy a document value into plain dicts and lists."""
    if isinstance(value, Mapping):
        return {str(key): plain_value(entry) for key, entry in value.items()}
    if isinstance(value, list):
        return [plain_value(entry) for entry in value]
    return cast(JsonValue, value)


_KEY_OVERRIDES = {"viewer_id": "viewerID", "filter_id": "filterID"}


def document_key(attribute: str) -> str:
    """Document key for a node attribute, e.g. `max_distance` -> `maxDistance`."""
    override = _KEY_OVERRIDES.get(attribute)
    if override is not None:
        return override
    head, *rest = attribute.rstrip("_").split("_")
    return head + "".join(part.capitalize() for part in rest)
