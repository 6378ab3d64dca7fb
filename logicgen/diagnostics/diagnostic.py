"""Diagnostics core types."""

from dataclasses import dataclass
from typing import Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by decoders, analysis passes and linters.

    `location` is a dotted document position such as `rules[0].views.near.pipeline[2]`.
    """

    code: str
    message: str
    location: str
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None
