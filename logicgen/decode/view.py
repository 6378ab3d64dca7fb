"""View and pipeline operation decoding."""

from __future__ import annotations

from logicgen.ast.paths import Path, validate_path
from logicgen.ast.view import VIEW_OPERATION_FIELDS, ParamDef, View, ViewOperation, ViewOperationKind
from logicgen.decode.errors import InvalidValueError, MissingFieldError, UnknownKindError
from logicgen.decode.expression import decode_where
from logicgen.decode.reader import (
    Document,
    child,
    document_key,
    expect_list,
    expect_mapping,
    item,
    optional_float,
    optional_int,
    optional_raw_mapping,
    optional_str,
    plain_value,
)
from logicgen.decode.values import decode_optional_value

_OPERATION_KINDS = frozenset(kind.value for kind in ViewOperationKind)
_PATH_FIELDS = frozenset({"by", "field", "position"})
_CHECKED_PATH_FIELDS = frozenset({"by", "field"})
_OPERAND_FIELDS = frozenset({"from_", "to", "origin"})
_FLOAT_FIELDS = frozenset({"max_distance", "min_distance"})


def decode_view(document: object, at: str = "", *, name: str | None = None) -> View:
    """Decode a view; `name` is the mapping key for views declared on a rule."""
    mapping = expect_mapping(document, at, "view")
    source = optional_str(mapping, "source", at)
    if not source:
        raise MissingFieldError("view source is required", at, field="source")

    pipeline_value = mapping.get("pipeline")
    pipeline: list[ViewOperation] = []
    if pipeline_value is not None:
        pipeline_at = child(at, "pipeline")
        for index, entry in enumerate(expect_list(pipeline_value, pipeline_at, "`pipeline`")):
            pipeline.append(decode_view_operation(entry, item(pipeline_at, index), index=index))

    return View(
        source=source,
        name=optional_str(mapping, "name", at) or name,
        pipeline=tuple(pipeline),
        params=_decode_params(mapping, at),
    )


def decode_view_operation(document: object, at: str = "", *, index: int | None = None) -> ViewOperation:
    mapping = expect_mapping(document, at, "pipeline operation")
    label = "pipeline operation" if index is None else f"pipeline operation {index}"
    raw = mapping.get("type")
    if raw is None or raw == "":
        raise MissingFieldError(f"{label}: type is required", at, field="type")
    if not isinstance(raw, str) or raw not in _OPERATION_KINDS:
        raise UnknownKindError("pipeline operation", str(raw), at, detail=f"{label}: unknown type: {raw}")

    kind = ViewOperationKind(raw)
    fields = {name: _decode_field(mapping, name, at) for name in VIEW_OPERATION_FIELDS[kind]}
    return ViewOperation(kind=kind, **fields)


def _decode_field(mapping: Document, name: str, at: str) -> object:
    key = document_key(name)
    if name in _PATH_FIELDS:
        text = optional_str(mapping, key, at)
        if not text:
            return None
        if name in _CHECKED_PATH_FIELDS:
            problem = validate_path(text)
            if problem is not None:
                raise InvalidValueError(problem, child(at, key))
        return Path(text)
    if name in _OPERAND_FIELDS:
        return decode_optional_value(mapping, key, at)
    if name in _FLOAT_FIELDS:
        return optional_float(mapping, key, at)
    if name == "where":
        where = mapping.get("where")
        return decode_where(where, child(at, "where")) if where is not None else None
    if name == "fields":
        return optional_raw_mapping(mapping, key, at)
    if name == "count":
        return optional_int(mapping, key, at)
    return optional_str(mapping, key, at)


def _decode_params(mapping: Document, at: str) -> dict[str, ParamDef]:
    value = mapping.get("params")
    if value is None:
        return {}
    params_at = child(at, "params")
    params: dict[str, ParamDef] = {}
    for param_name, definition in expect_mapping(value, params_at, "`params`").items():
        param_at = child(params_at, param_name)
        param = expect_mapping(definition, param_at, "view parameter")
        params[param_name] = ParamDef(
            type=optional_str(param, "type", param_at),
            default=plain_value(param.get("default")),
        )
    return params
