"""Typed rule syntax tree."""

from logicgen.ast.effect import (
    EFFECT_FIELDS,
    MUTATION_KINDS,
    VALUE_EXPRESSION_FIELDS,
    Effect,
    EffectKind,
    ValueExpression,
    ValueExpressionKind,
)
from logicgen.ast.expression import OPERATORS, Expression, Operator, WhereClause
from logicgen.ast.filter import Filter, FilterOperation, FilterOperationKind, FilterParam
from logicgen.ast.paths import (
    ParsedPath,
    Path,
    PathKind,
    PathSegment,
    classify_path,
    entity_collection_path,
    is_state_path,
    looks_like_path,
    normalize_state_path,
    parse_path,
    validate_path,
)
from logicgen.ast.rule import Rule, RuleSet
from logicgen.ast.selector import SELECTOR_FIELDS, Selector, SelectorKind
from logicgen.ast.transform import (
    TRANSFORM_FIELDS,
    Transform,
    TransformCategory,
    TransformKind,
)
from logicgen.ast.trigger import DISTANCE_OPERATORS, TRIGGER_FIELDS, Trigger, TriggerKind
from logicgen.ast.values import GeoPoint, JsonValue, LiteralValue, Operand, PathRef
from logicgen.ast.view import (
    AGGREGATION_KINDS,
    SPATIAL_KINDS,
    VIEW_OPERATION_FIELDS,
    ParamDef,
    View,
    ViewOperation,
    ViewOperationKind,
)

__all__ = [
    "AGGREGATION_KINDS",
    "DISTANCE_OPERATORS",
    "EFFECT_FIELDS",
    "MUTATION_KINDS",
    "OPERATORS",
    "SELECTOR_FIELDS",
    "SPATIAL_KINDS",
    "TRANSFORM_FIELDS",
    "TRIGGER_FIELDS",
    "VALUE_EXPRESSION_FIELDS",
    "VIEW_OPERATION_FIELDS",
    "Effect",
    "EffectKind",
    "Expression",
    "Filter",
    "FilterOperation",
    "FilterOperationKind",
    "FilterParam",
    "GeoPoint",
    "JsonValue",
    "LiteralValue",
    "Operand",
    "Operator",
    "ParamDef",
    "ParsedPath",
    "Path",
    "PathKind",
    "PathRef",
    "PathSegment",
    "Rule",
    "RuleSet",
    "Selector",
    "SelectorKind",
    "Transform",
    "TransformCategory",
    "TransformKind",
    "Trigger",
    "TriggerKind",
    "ValueExpression",
    "ValueExpressionKind",
    "View",
    "ViewOperation",
    "ViewOperationKind",
    "WhereClause",
    "classify_path",
    "entity_collection_path",
    "is_state_path",
    "looks_like_path",
    "normalize_state_path",
    "parse_path",
    "validate_path",
]
