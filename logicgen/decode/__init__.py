"""Structural decoding of rule documents into syntax trees."""

from logicgen.decode.effect import decode_effect, decode_value_expression, infer_effect_kind
from logicgen.decode.errors import (
    AmbiguousShorthandError,
    DecodeError,
    DocumentShapeError,
    DocumentSyntaxError,
    InvalidValueError,
    MissingFieldError,
    UnknownKindError,
)
from logicgen.decode.expression import decode_expression, decode_where
from logicgen.decode.filter import decode_filter, decode_filter_operation
from logicgen.decode.rule import WRAPPED_RULESET_VERSION, decode_document, decode_rule, decode_ruleset
from logicgen.decode.selector import decode_selector
from logicgen.decode.transform import decode_transform
from logicgen.decode.trigger import decode_trigger
from logicgen.decode.values import decode_condition, decode_value
from logicgen.decode.view import decode_view, decode_view_operation

__all__ = [
    "WRAPPED_RULESET_VERSION",
    "AmbiguousShorthandError",
    "DecodeError",
    "DocumentShapeError",
    "DocumentSyntaxError",
    "InvalidValueError",
    "MissingFieldError",
    "UnknownKindError",
    "decode_condition",
    "decode_document",
    "decode_effect",
    "decode_expression",
    "decode_filter",
    "decode_filter_operation",
    "decode_rule",
    "decode_ruleset",
    "decode_selector",
    "decode_transform",
    "decode_trigger",
    "decode_value",
    "decode_value_expression",
    "decode_view",
    "decode_view_operation",
    "decode_where",
]
