"""Boolean/value expressions and entity-field predicates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from logicgen.ast.paths import Path
from logicgen.ast.values import Operand


class Operator(StrEnum):
    EQ = "=="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    CONTAINS = "contains"
    IN = "in"


OPERATORS: frozenset[str] = frozenset(operator.value for operator in Operator)


@dataclass(frozen=True, slots=True)
class Expression:
    """Leaf comparison (`left op right`) or `and`/`or`/`not` combinator.

    A leaf without `op` is a naked reference, e.g. decoded from a bare path string.
    """

    left: Operand | None = None
    op: Operator | None = None
    right: Operand | None = None
    and_: tuple[Expression, ...] = ()
    or_: tuple[Expression, ...] = ()
    not_: Expression | None = None

    @property
    def is_combinator(self) -> bool:
        return bool(self.and_) or bool(self.or_) or self.not_ is not None

    def depends_on(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths


@dataclass(frozen=True, slots=True)
class WhereClause:
    """Entity-field predicate: `field op value` leaf or logical composition."""

    field: str | None = None
    op: Operator | None = None
    value: Operand | None = None
    and_: tuple[WhereClause, ...] = ()
    or_: tuple[WhereClause, ...] = ()
    not_: WhereClause | None = None

    @property
    def is_combinator(self) -> bool:
        return bool(self.and_) or bool(self.or_) or self.not_ is not None

    def depends_on(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths
