"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from logicgen.diagnostics.codes import DiagnosticSpec
from logicgen.diagnostics.diagnostic import Diagnostic


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def diagnostic_from_spec(
    spec: DiagnosticSpec,
    location: str,
    detail: str | None = None,
    *,
    hint: str | None = None,
) -> Diagnostic:
    """Build a diagnostic from a `DiagnosticSpec`, appending `detail` to the base message."""
    message = spec.message if detail is None else f"{spec.message} {detail}"
    return Diagnostic(
        code=spec.code,
        message=message,
        location=location,
        severity=spec.severity,
        hint=hint if hint is not None else spec.hint,
        category=spec.category,
    )


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    return sorted(
        diagnostics,
        key=lambda diagnostic: (
            diagnostic.location,
            diagnostic.code,
            diagnostic.message,
        ),
    )
