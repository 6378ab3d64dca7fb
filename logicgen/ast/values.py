"""Value slots that hold a literal, a path reference or a nested node."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from logicgen.ast.paths import Path

if TYPE_CHECKING:
    from logicgen.ast.expression import Expression
    from logicgen.ast.transform import Transform

type JsonValue = None | bool | int | float | str | list[JsonValue] | dict[str, JsonValue]


def document_field(default: JsonValue = None) -> Any:
    """Field for loose document data: compared for equality, left out of `hash()`."""
    return field(default=default, hash=False)


def mapping_field() -> Any:
    """Name-keyed node field, empty by default and frozen by `freeze_mappings`."""
    return field(default_factory=dict, hash=False)


def freeze_mappings(node: object, *names: str) -> None:
    """Replace the named mapping attributes of a frozen node with read-only copies."""
    for name in names:
        value = getattr(node, name)
        if isinstance(value, Mapping) and not isinstance(value, MappingProxyType):
            object.__setattr__(node, name, MappingProxyType(dict(value)))


@dataclass(frozen=True, slots=True)
class LiteralValue:
    """Document scalar, list or object used verbatim."""

    value: JsonValue = field(hash=False)


@dataclass(frozen=True, slots=True)
class PathRef:
    path: Path

    @property
    def is_state(self) -> bool:
        return self.path.is_state


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float


type Operand = LiteralValue | PathRef | Transform | Expression
