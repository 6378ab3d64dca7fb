"""Declarative query pipelines over entity collections."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from logicgen.ast.expression import WhereClause
from logicgen.ast.paths import Path
from logicgen.ast.values import JsonValue, Operand, document_field, freeze_mappings, mapping_field


class ViewOperationKind(StrEnum):
    FILTER = "Filter"
    MAP = "Map"
    FLAT_MAP = "FlatMap"
    ORDER_BY = "OrderBy"
    GROUP_BY = "GroupBy"
    FIRST = "First"
    LAST = "Last"
    LIMIT = "Limit"
    DISTINCT = "Distinct"
    MIN = "Min"
    MAX = "Max"
    SUM = "Sum"
    COUNT = "Count"
    AVG = "Avg"
    DISTANCE = "Distance"
    NEAREST = "Nearest"
    FARTHEST = "Farthest"


AGGREGATION_KINDS: Final = frozenset(
    {
        ViewOperationKind.MIN,
        ViewOperationKind.MAX,
        ViewOperationKind.SUM,
        ViewOperationKind.COUNT,
        ViewOperationKind.AVG,
        ViewOperationKind.FIRST,
        ViewOperationKind.LAST,
    }
)
SPATIAL_KINDS: Final = frozenset(
    {ViewOperationKind.DISTANCE, ViewOperationKind.NEAREST, ViewOperationKind.FARTHEST}
)

_RANKED: Final = ("origin", "position", "count", "max_distance", "min_distance", "return_")

VIEW_OPERATION_FIELDS: Final[dict[ViewOperationKind, tuple[str, ...]]] = {
    ViewOperationKind.FILTER: ("where",),
    ViewOperationKind.MAP: ("fields",),
    ViewOperationKind.FLAT_MAP: ("field",),
    ViewOperationKind.ORDER_BY: ("by", "order"),
    ViewOperationKind.GROUP_BY: ("group_field", "aggregate"),
    ViewOperationKind.FIRST: (),
    ViewOperationKind.LAST: (),
    ViewOperationKind.LIMIT: ("count",),
    ViewOperationKind.DISTINCT: ("field",),
    ViewOperationKind.MIN: ("field", "return_"),
    ViewOperationKind.MAX: ("field", "return_"),
    ViewOperationKind.SUM: ("field",),
    ViewOperationKind.COUNT: (),
    ViewOperationKind.AVG: ("field",),
    ViewOperationKind.DISTANCE: ("from_", "to", "position", "unit"),
    ViewOperationKind.NEAREST: _RANKED,
    ViewOperationKind.FARTHEST: _RANKED,
}


@dataclass(frozen=True, slots=True)
class ViewOperation:
    """One pipeline stage; `fields` keeps the raw Map projection document."""

    kind: ViewOperationKind
    where: WhereClause | None = None
    fields: Mapping[str, JsonValue] | None = document_field()
    by: Path | None = None
    order: str | None = None
    group_field: str | None = None
    aggregate: str | None = None
    count: int | None = None
    field: Path | None = None
    return_: str | None = None
    from_: Operand | None = None
    to: Operand | None = None
    position: Path | None = None
    origin: Operand | None = None
    max_distance: float | None = None
    min_distance: float | None = None
    unit: str | None = None

    def __post_init__(self) -> None:
        freeze_mappings(self, "fields")

    @property
    def active_fields(self) -> tuple[str, ...]:
        return VIEW_OPERATION_FIELDS[self.kind]

    def depends_on(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths


@dataclass(frozen=True, slots=True)
class ParamDef:
    """Declared view parameter; a parameter without a default must be bound by callers."""

    type: str | None = None
    default: JsonValue = document_field()

    @property
    def is_required(self) -> bool:
        return self.default is None


@dataclass(frozen=True, slots=True)
class View:
    source: str
    name: str | None = None
    pipeline: tuple[ViewOperation, ...] = ()
    params: Mapping[str, ParamDef] = mapping_field()

    def __post_init__(self) -> None:
        freeze_mappings(self, "params")

    def is_aggregation(self) -> bool:
        return any(operation.kind in AGGREGATION_KINDS for operation in self.pipeline)

    def is_spatial(self) -> bool:
        return any(operation.kind in SPATIAL_KINDS for operation in self.pipeline)

    def required_params(self) -> tuple[str, ...]:
        return tuple(name for name, param in self.params.items() if param.is_required)

    def depends_on(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths
