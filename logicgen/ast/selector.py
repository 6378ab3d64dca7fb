"""Entity selection strategies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from logicgen.ast.expression import WhereClause
from logicgen.ast.paths import Path


class SelectorKind(StrEnum):
    ALL = "All"
    FILTER = "Filter"
    SINGLE = "Single"
    RELATED = "Related"
    NEAREST = "Nearest"
    FARTHEST = "Farthest"


_SPATIAL: Final = ("position", "origin", "limit", "max_distance", "min_distance")

SELECTOR_FIELDS: Final[dict[SelectorKind, tuple[str, ...]]] = {
    SelectorKind.ALL: (),
    SelectorKind.FILTER: ("where",),
    SelectorKind.SINGLE: ("id", "key"),
    SelectorKind.RELATED: ("relation", "from_"),
    SelectorKind.NEAREST: _SPATIAL,
    SelectorKind.FARTHEST: _SPATIAL,
}


@dataclass(frozen=True, slots=True)
class Selector:
    kind: SelectorKind
    entity: str
    where: WhereClause | None = None
    id: Path | None = None
    key: Path | None = None
    relation: str | None = None
    from_: Path | None = None
    position: Path | None = None
    origin: Path | None = None
    limit: int | None = None
    max_distance: float | None = None
    min_distance: float | None = None

    @property
    def is_spatial(self) -> bool:
        return self.kind in (SelectorKind.NEAREST, SelectorKind.FARTHEST)

    def depends_on(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths
