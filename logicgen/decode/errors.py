"""Decode error taxonomy."""

from __future__ import annotations

from logicgen.diagnostics import (
    DECODE_AMBIGUOUS_SHORTHAND,
    DECODE_INVALID_DOCUMENT,
    DECODE_INVALID_SHAPE,
    DECODE_INVALID_VALUE,
    DECODE_MISSING_FIELD,
    DECODE_SYNTAX_ERROR,
    DECODE_UNKNOWN_KIND,
    Diagnostic,
    DiagnosticSpec,
    diagnostic_from_spec,
)


class DecodeError(ValueError):
    """Raised when a document cannot be decoded into a valid node.

    `location` names the offending node, e.g. `rules[0].views.near.pipeline[2]`.
    """

    diagnostic: DiagnosticSpec = DECODE_INVALID_SHAPE

    def __init__(self, detail: str, location: str = "") -> None:
        self.detail = detail
        self.location = location
        super().__init__(f"{location}: {detail}" if location else detail)

    def to_diagnostic(self) -> Diagnostic:
        return diagnostic_from_spec(self.diagnostic, self.location or "<document>", self.detail)


class UnknownKindError(DecodeError):
    diagnostic = DECODE_UNKNOWN_KIND

    def __init__(self, family: str, kind: str, location: str = "", *, detail: str | None = None) -> None:
        self.family = family
        self.kind = kind
        super().__init__(detail or f"unknown {family} type: {kind}", location)


class MissingFieldError(DecodeError):
    diagnostic = DECODE_MISSING_FIELD

    def __init__(self, detail: str, location: str = "", *, field: str | None = None) -> None:
        self.field = field
        super().__init__(detail, location)


class AmbiguousShorthandError(DecodeError):
    diagnostic = DECODE_AMBIGUOUS_SHORTHAND


class InvalidValueError(DecodeError):
    diagnostic = DECODE_INVALID_VALUE


class DocumentShapeError(DecodeError):
    diagnostic = DECODE_INVALID_DOCUMENT


class DocumentSyntaxError(DecodeError):
    diagnostic = DECODE_SYNTAX_ERROR
