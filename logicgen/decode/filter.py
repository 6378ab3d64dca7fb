"""Viewer filter decoding."""

from __future__ import annotations

from logicgen.ast.filter import Filter, FilterOperation, FilterOperationKind, FilterParam
from logicgen.ast.paths import Path
from logicgen.decode.errors import MissingFieldError
from logicgen.decode.expression import decode_where
from logicgen.decode.reader import (
    child,
    expect_list,
    expect_mapping,
    item,
    optional_bool,
    optional_str,
    optional_str_list,
    plain_value,
    read_kind,
    required_str,
)


def decode_filter(document: object, at: str = "") -> Filter:
    mapping = expect_mapping(document, at, "filter")
    name = optional_str(mapping, "name", at)
    if not name:
        raise MissingFieldError("filter name is required", at, field="name")

    params: list[FilterParam] = []
    params_at = child(at, "params")
    for index, entry in enumerate(expect_list(mapping.get("params") or [], params_at, "`params`")):
        param_at = item(params_at, index)
        param = expect_mapping(entry, param_at, "filter parameter")
        params.append(
            FilterParam(
                name=required_str(param, "name", param_at, "filter parameter"),
                type=optional_str(param, "type", param_at) or "",
                default=plain_value(param.get("default")),
            )
        )

    operations_at = child(at, "operations")
    operations = tuple(
        decode_filter_operation(entry, item(operations_at, index))
        for index, entry in enumerate(expect_list(mapping.get("operations") or [], operations_at, "`operations`"))
    )
    return Filter(
        name=name,
        description=optional_str(mapping, "description", at),
        enabled=optional_bool(mapping, "enabled", at),
        params=tuple(params),
        operations=operations,
    )


def decode_filter_operation(document: object, at: str = "") -> FilterOperation:
    mapping = expect_mapping(document, at, "filter operation")
    kind = FilterOperationKind(read_kind(mapping, FilterOperationKind, "filter operation", at))
    target = required_str(mapping, "target", at, "filter operation")
    where = mapping.get("where")
    operation = FilterOperation(
        kind=kind,
        target=Path(target),
        id=optional_str(mapping, "id", at),
        where=decode_where(where, child(at, "where")) if where is not None else None,
        fields=optional_str_list(mapping, "fields", at),
        field=optional_str(mapping, "field", at),
        value=plain_value(mapping.get("value")),
    )
    if kind == FilterOperationKind.HIDE_FIELDS_WHERE and not operation.fields:
        raise MissingFieldError("HideFieldsWhere requires fields", at, field="fields")
    if kind == FilterOperationKind.REPLACE_FIELD_WHERE and not operation.field:
        raise MissingFieldError("ReplaceFieldWhere requires field", at, field="field")
    return operation
