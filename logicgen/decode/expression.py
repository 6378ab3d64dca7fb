"""Expression and WhereClause decoding, including shorthand forms."""

from __future__ import annotations

from collections.abc import Mapping

from logicgen.ast.expression import OPERATORS, Expression, Operator, WhereClause
from logicgen.decode.errors import AmbiguousShorthandError, InvalidValueError, MissingFieldError
from logicgen.decode.reader import Document, child, describe, expect_list, expect_mapping, item
from logicgen.decode.values import decode_optional_value, decode_value

_EXPRESSION_KEYS = ("left", "op", "right", "and", "or", "not")
_LOGICAL_KEYS = ("and", "or", "not")

type Comparison = tuple[str, Operator, object, str]


def decode_expression(document: object, at: str = "") -> Expression:
    """Decode an expression.

    Accepts the explicit `left`/`op`/`right` and `and`/`or`/`not` form, a bare
    scalar (a naked `left` with no operator), or `{left: right}` /
    `{left: {op: right}}` shorthand.
    """
    if isinstance(document, (str, bool, int, float)):
        return Expression(left=decode_value(document, at))
    mapping = expect_mapping(document, at, "expression")
    if any(key in mapping for key in _EXPRESSION_KEYS):
        return _decode_explicit_expression(mapping, at)

    comparisons = _shorthand_comparisons(mapping, at, "expression")
    leaves = tuple(
        Expression(left=decode_value(left, at), op=op, right=decode_value(right, right_at))
        for left, op, right, right_at in comparisons
    )
    if len(leaves) == 1:
        return leaves[0]
    return Expression(and_=leaves)


def decode_where(document: object, at: str = "") -> WhereClause:
    """Decode a where clause; see `decode_expression` for the accepted shorthand."""
    mapping = expect_mapping(document, at, "where clause")
    field = mapping.get("field")
    if (isinstance(field, str) and field) or any(key in mapping for key in _LOGICAL_KEYS):
        return _decode_explicit_where(mapping, at)

    comparisons = _shorthand_comparisons(mapping, at, "where clause")
    leaves = tuple(
        WhereClause(field=name, op=op, value=decode_value(value, value_at))
        for name, op, value, value_at in comparisons
    )
    if len(leaves) == 1:
        return leaves[0]
    return WhereClause(and_=leaves)


def _decode_explicit_expression(mapping: Document, at: str) -> Expression:
    left = decode_optional_value(mapping, "left", at)
    op = _read_operator(mapping, at)
    right = decode_optional_value(mapping, "right", at)
    and_ = _expression_list(mapping, "and", at)
    or_ = _expression_list(mapping, "or", at)
    not_ = decode_expression(mapping["not"], child(at, "not")) if mapping.get("not") is not None else None

    combinator = bool(and_) or bool(or_) or not_ is not None
    if combinator and (left is not None or op is not None or right is not None):
        raise InvalidValueError("expression mixes a comparison with and/or/not", at)
    if op is not None and left is None:
        raise MissingFieldError("expression left is required", at, field="left")
    if right is not None and op is None:
        raise MissingFieldError("expression op is required", at, field="op")
    if not combinator and left is None:
        raise AmbiguousShorthandError("empty expression", at)
    return Expression(left=left, op=op, right=right, and_=and_, or_=or_, not_=not_)


def _decode_explicit_where(mapping: Document, at: str) -> WhereClause:
    field = mapping.get("field")
    if field is not None and not isinstance(field, str):
        raise InvalidValueError(f"`field` must be a string, got {describe(field)}", child(at, "field"))
    op = _read_operator(mapping, at)
    value = decode_value(mapping["value"], child(at, "value")) if "value" in mapping else None
    and_ = _where_list(mapping, "and", at)
    or_ = _where_list(mapping, "or", at)
    not_ = decode_where(mapping["not"], child(at, "not")) if mapping.get("not") is not None else None

    combinator = bool(and_) or bool(or_) or not_ is not None
    if field:
        if combinator:
            raise InvalidValueError("where clause mixes a comparison with and/or/not", at)
        if op is None:
            raise MissingFieldError("where clause op is required", at, field="op")
        return WhereClause(field=field, op=op, value=value)
    if not combinator:
        raise AmbiguousShorthandError("empty where clause", at)
    return WhereClause(and_=and_, or_=or_, not_=not_)


def _read_operator(mapping: Document, at: str) -> Operator | None:
    raw = mapping.get("op")
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str) or raw not in OPERATORS:
        raise InvalidValueError(f"unknown operator: {raw!r}", child(at, "op"))
    return Operator(raw)


def _expression_list(mapping: Document, key: str, at: str) -> tuple[Expression, ...]:
    list_at = child(at, key)
    entries = expect_list(mapping.get(key) or [], list_at, f"`{key}`")
    return tuple(decode_expression(entry, item(list_at, index)) for index, entry in enumerate(entries))


def _where_list(mapping: Document, key: str, at: str) -> tuple[WhereClause, ...]:
    list_at = child(at, key)
    entries = expect_list(mapping.get(key) or [], list_at, f"`{key}`")
    return tuple(decode_where(entry, item(list_at, index)) for index, entry in enumerate(entries))


def _shorthand_comparisons(mapping: Document, at: str, what: str) -> list[Comparison]:
    if not mapping:
        raise AmbiguousShorthandError(f"empty {what}", at)

    comparisons: list[Comparison] = []
    for key, inner in mapping.items():
        key_at = child(at, key)
        if not isinstance(inner, Mapping):
            comparisons.append((key, Operator.EQ, inner, key_at))
            continue
        operator_keys = [name for name in inner if name in OPERATORS]
        if not inner:
            raise AmbiguousShorthandError(f"empty operator form for `{key}`", key_at)
        if not operator_keys:
            comparisons.append((key, Operator.EQ, inner, key_at))
            continue
        if len(operator_keys) != len(inner):
            extra = sorted(str(name) for name in inner if name not in OPERATORS)
            raise AmbiguousShorthandError(
                f"operator form for `{key}` mixes operators with fields {extra}",
                key_at,
            )
        for name in operator_keys:
            comparisons.append((key, Operator(name), inner[name], child(key_at, name)))
    return comparisons
