"""Per-viewer masking pipelines."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from logicgen.ast.expression import WhereClause
from logicgen.ast.paths import Path
from logicgen.ast.values import JsonValue, document_field


class FilterOperationKind(StrEnum):
    KEEP_WHERE = "KeepWhere"
    REMOVE_WHERE = "RemoveWhere"
    HIDE_FIELDS_WHERE = "HideFieldsWhere"
    REPLACE_FIELD_WHERE = "ReplaceFieldWhere"
    FILTER_ARRAY = "FilterArray"  # deprecated alias of KeepWhere


@dataclass(frozen=True, slots=True)
class FilterOperation:
    kind: FilterOperationKind
    target: Path
    id: str | None = None
    where: WhereClause | None = None
    fields: tuple[str, ...] = ()
    field: str | None = None
    value: JsonValue = document_field()

    @property
    def canonical_kind(self) -> FilterOperationKind:
        if self.kind == FilterOperationKind.FILTER_ARRAY:
            return FilterOperationKind.KEEP_WHERE
        return self.kind


@dataclass(frozen=True, slots=True)
class FilterParam:
    name: str
    type: str
    default: JsonValue = document_field()


@dataclass(frozen=True, slots=True)
class Filter:
    name: str
    description: str | None = None
    enabled: bool | None = None
    params: tuple[FilterParam, ...] = ()
    operations: tuple[FilterOperation, ...] = ()

    def is_enabled(self) -> bool:
        return self.enabled is None or self.enabled

    def with_enabled(self, enabled: bool) -> Filter:
        return replace(self, enabled=enabled)

    def get_param(self, name: str) -> FilterParam | None:
        for param in self.params:
            if param.name == name:
                return param
        return None

    def has_param(self, name: str) -> bool:
        return self.get_param(name) is not None

    def depends_on(self) -> frozenset[Path]:
        from logicgen.analysis.dependencies import collect_depends_on

        return collect_depends_on(self).paths
