"""Pure value transforms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from logicgen.ast.paths import Path
from logicgen.ast.values import GeoPoint, Operand


class TransformKind(StrEnum):
    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"
    MODULO = "Modulo"
    CLAMP = "Clamp"
    ROUND = "Round"
    FLOOR = "Floor"
    CEIL = "Ceil"
    ABS = "Abs"
    MIN = "Min"
    MAX = "Max"
    RANDOM = "Random"
    MOVE_TOWARDS = "MoveTowards"
    GPS_DISTANCE = "GpsDistance"
    GPS_BEARING = "GpsBearing"
    POINT_IN_RADIUS = "PointInRadius"
    POINT_IN_POLYGON = "PointInPolygon"
    CONCAT = "Concat"
    FORMAT = "Format"
    SUBSTRING = "Substring"
    TO_UPPER = "ToUpper"
    TO_LOWER = "ToLower"
    TRIM = "Trim"
    IF = "If"
    COALESCE = "Coalesce"
    NOT = "Not"
    NOW = "Now"
    TIME_SINCE = "TimeSince"
    TIME_ADD = "TimeAdd"
    UUID = "UUID"


class TransformCategory(StrEnum):
    MATH = "math"
    GPS = "gps"
    STRING = "string"
    LOGIC = "logic"
    TIME = "time"
    UUID = "uuid"


_BINARY: Final = ("left", "right")
_UNARY: Final = ("value",)

# Attribute names read and written for each kind; everything else is inactive.
TRANSFORM_FIELDS: Final[dict[TransformKind, tuple[str, ...]]] = {
    TransformKind.ADD: _BINARY,
    TransformKind.SUBTRACT: _BINARY,
    TransformKind.MULTIPLY: _BINARY,
    TransformKind.DIVIDE: _BINARY,
    TransformKind.MODULO: _BINARY,
    TransformKind.CLAMP: ("value", "min", "max"),
    TransformKind.ROUND: _UNARY,
    TransformKind.FLOOR: _UNARY,
    TransformKind.CEIL: _UNARY,
    TransformKind.ABS: _UNARY,
    TransformKind.MIN: _BINARY,
    TransformKind.MAX: _BINARY,
    TransformKind.RANDOM: ("min_value", "max_value"),
    TransformKind.MOVE_TOWARDS: ("current", "target", "speed", "unit"),
    TransformKind.GPS_DISTANCE: ("from_", "to", "unit"),
    TransformKind.GPS_BEARING: ("from_", "to"),
    TransformKind.POINT_IN_RADIUS: ("value", "center", "radius", "unit"),
    TransformKind.POINT_IN_POLYGON: ("value", "polygon"),
    TransformKind.CONCAT: ("strings",),
    TransformKind.FORMAT: ("format", "args"),
    TransformKind.SUBSTRING: ("value", "start", "length"),
    TransformKind.TO_UPPER: _UNARY,
    TransformKind.TO_LOWER: _UNARY,
    TransformKind.TRIM: _UNARY,
    TransformKind.IF: ("condition", "then", "else_"),
    TransformKind.COALESCE: ("values",),
    TransformKind.NOT: _UNARY,
    TransformKind.NOW: (),
    TransformKind.TIME_SINCE: ("since",),
    TransformKind.TIME_ADD: ("value", "duration"),
    TransformKind.UUID: (),
}

_CATEGORY_BY_KIND: Final[dict[TransformKind, TransformCategory]] = {
    **{
        kind: TransformCategory.MATH
        for kind in (
            TransformKind.ADD,
            TransformKind.SUBTRACT,
            TransformKind.MULTIPLY,
            TransformKind.DIVIDE,
            TransformKind.MODULO,
            TransformKind.CLAMP,
            TransformKind.ROUND,
            TransformKind.FLOOR,
            TransformKind.CEIL,
            TransformKind.ABS,
            TransformKind.MIN,
            TransformKind.MAX,
            TransformKind.RANDOM,
        )
    },
    **{
        kind: TransformCategory.GPS
        for kind in (
            TransformKind.MOVE_TOWARDS,
            TransformKind.GPS_DISTANCE,
            TransformKind.GPS_BEARING,
            TransformKind.POINT_IN_RADIUS,
            TransformKind.POINT_IN_POLYGON,
        )
    },
    **{
        kind: TransformCategory.STRING
        for kind in (
            TransformKind.CONCAT,
            TransformKind.FORMAT,
            TransformKind.SUBSTRING,
            TransformKind.TO_UPPER,
            TransformKind.TO_LOWER,
            TransformKind.TRIM,
        )
    },
    TransformKind.IF: TransformCategory.LOGIC,
    TransformKind.COALESCE: TransformCategory.LOGIC,
    TransformKind.NOT: TransformCategory.LOGIC,
    TransformKind.NOW: TransformCategory.TIME,
    TransformKind.TIME_SINCE: TransformCategory.TIME,
    TransformKind.TIME_ADD: TransformCategory.TIME,
    TransformKind.UUID: TransformCategory.UUID,
}


@dataclass(frozen=True, slots=True)
class Transform:
    """Side-effect-free value computation.

    Each kind reads the subset of attributes listed in `TRANSFORM_FIELDS`;
    operands may themselves be nested transforms.
    """

    kind: TransformKind
    left: Operand | None = None
    right: Operand | None = None
    value: Operand | None = None
    min: Operand | None = None
    max: Operand | None = None
    current: Operand | None = None
    target: Operand | None = None
    speed: float | None = None
    unit: str | None = None
    from_: Operand | None = None
    to: Operand | None = None
    center: Operand | None = None
    radius: float | None = None
    polygon: tuple[GeoPoint, ...] = ()
    strings: tuple[Operand, ...] = ()
    format: str | None = None
    args: tuple[Operand, ...] = ()
    start: int | None = None
    length: int | None = None
    condition: Operand | None = None
    then: Operand | None = None
    else_: Operand | None = None
    values: tuple[Operand, ...] = ()
    min_value: Operand | None = None
    max_value: Operand | None = None
    duration: int | None = None
    since: Operand | None = None

    @property
    def category(self) -> TransformCategory:
        return _CATEGORY_BY_KIND[self.kind]

    @property
    def active_fields(self) -> tuple[str, ...]:
        return TRANSFORM_FIELDS[self.kind]

    def operands(self) -> tuple[Operand, ...]:
        """Operand-valued inputs of the active fields, in declaration order."""
        collected: list[Operand] = []
        for name in self.active_fields:
            value = getattr(self, name)
            if name in _SCALAR_FIELDS or value is None:
                continue
            if isinstance(value, tuple):
                collected.extend(value)
            else:
                collected.append(value)
        return tuple(collected)

    def depends_on(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths


_SCALAR_FIELDS: Final = frozenset(
    {"speed", "unit", "radius", "polygon", "format", "start", "length", "duration"}
)
