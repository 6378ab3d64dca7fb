"""Path strings and prefix classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import re

_SIMPLE_FIELD_RE = re.compile(r"^[A-Za-z0-9_]+$")

STATE_PREFIX = "$."
STATE_QUALIFIER = "state:"
PARAM_PREFIX = "param:"
VIEW_PREFIX = "view:"
CONST_PREFIX = "const:"
SELF_PREFIX = "self."
CURRENT_MARKER = "$"


class PathKind(StrEnum):
    STATE = "state"
    PARAM = "param"
    VIEW = "view"
    CONST = "const"
    SELF = "self"
    CURRENT = "current"
    FIELD = "field"


_REFERENCE_KINDS = frozenset({PathKind.PARAM, PathKind.VIEW, PathKind.CONST})


def classify_path(text: str) -> PathKind | None:
    """Return the path kind implied by the prefix of `text`, or `None`."""
    if text == CURRENT_MARKER:
        return PathKind.CURRENT
    if text.startswith(STATE_PREFIX) or text.startswith(STATE_QUALIFIER):
        return PathKind.STATE
    if text.startswith(PARAM_PREFIX):
        return PathKind.PARAM
    if text.startswith(VIEW_PREFIX):
        return PathKind.VIEW
    if text.startswith(CONST_PREFIX):
        return PathKind.CONST
    if text == "self" or text.startswith(SELF_PREFIX):
        return PathKind.SELF
    if _SIMPLE_FIELD_RE.fullmatch(text):
        return PathKind.FIELD
    return None


def is_state_path(text: object) -> bool:
    return isinstance(text, str) and classify_path(text) == PathKind.STATE


def looks_like_path(text: str) -> bool:
    """Prefix sniffing for generic value slots; bare identifiers stay literals."""
    kind = classify_path(text)
    return kind is not None and kind != PathKind.FIELD


class Path(str):
    """Path string tagged by the kind its prefix implies."""

    __slots__ = ()

    @property
    def kind(self) -> PathKind | None:
        return classify_path(self)

    @property
    def is_state(self) -> bool:
        return self.kind == PathKind.STATE

    @property
    def is_reference(self) -> bool:
        return self.kind in _REFERENCE_KINDS

    @property
    def reference_name(self) -> str | None:
        kind = self.kind
        if kind == PathKind.PARAM:
            return self[len(PARAM_PREFIX) :]
        if kind == PathKind.VIEW:
            return self[len(VIEW_PREFIX) :]
        if kind == PathKind.CONST:
            return self[len(CONST_PREFIX) :]
        return None


def normalize_state_path(text: str) -> str:
    """Rewrite `state:` qualified paths to the `$.` form, e.g. `state:Players.hp` -> `$.Players.hp`."""
    if not text.startswith(STATE_QUALIFIER):
        return text
    body = text[len(STATE_QUALIFIER) :]
    return body if body.startswith(STATE_PREFIX) else STATE_PREFIX + body


def entity_collection_path(entity: str) -> Path:
    """State path of an entity collection root, e.g. `Players` -> `$.Players`."""
    return Path(STATE_PREFIX + entity)


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One navigation step: a field, optionally indexed by int, key or `[*]`."""

    field: str
    index: int | str | None = None
    is_wildcard: bool = False


@dataclass(frozen=True, slots=True)
class ParsedPath:
    kind: PathKind
    raw: str
    segments: tuple[PathSegment, ...]


def validate_path(text: str) -> str | None:
    """Return a problem description for malformed paths, `None` when valid."""
    if not text:
        return None
    if classify_path(text) is None and not text.startswith("$"):
        return f"invalid path format: {text}"
    depth = 0
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth < 0:
                return f"unbalanced brackets in path: {text}"
    if depth != 0:
        return f"unbalanced brackets in path: {text}"
    return None


def parse_path(text: str) -> ParsedPath:
    """Split a path into navigation segments.

    Raises `ValueError` for strings that are not paths or have unbalanced brackets.
    """
    problem = validate_path(text)
    kind = classify_path(text)
    if problem is not None or kind is None:
        raise ValueError(problem or f"invalid path format: {text!r}")

    if kind in _REFERENCE_KINDS:
        name = Path(text).reference_name or ""
        return ParsedPath(kind=kind, raw=text, segments=(PathSegment(field=name),))
    if kind == PathKind.CURRENT:
        return ParsedPath(kind=kind, raw=text, segments=())

    if kind == PathKind.STATE:
        body = normalize_state_path(text)[len(STATE_PREFIX) :]
    elif kind == PathKind.SELF:
        body = text[len(SELF_PREFIX) :] if text.startswith(SELF_PREFIX) else ""
    else:
        body = text
    return ParsedPath(kind=kind, raw=text, segments=_split_segments(body))


def _split_segments(body: str) -> tuple[PathSegment, ...]:
    segments: list[PathSegment] = []
    current: list[str] = []
    bracket: list[str] = []
    in_bracket = False

    def flush() -> None:
        if current:
            segments.append(PathSegment(field="".join(current)))
            current.clear()

    for char in body:
        if in_bracket:
            if char == "]":
                in_bracket = False
                _attach_index(segments, "".join(bracket))
            else:
                bracket.append(char)
            continue
        if char == ".":
            flush()
        elif char == "[":
            flush()
            in_bracket = True
            bracket.clear()
        else:
            current.append(char)
    flush()
    return tuple(segments)


def _attach_index(segments: list[PathSegment], content: str) -> None:
    if not segments or segments[-1].index is not None or segments[-1].is_wildcard:
        segments.append(PathSegment(field=""))
    last = segments[-1]
    if content == "*":
        segments[-1] = PathSegment(field=last.field, is_wildcard=True)
    elif content.isdigit():
        segments[-1] = PathSegment(field=last.field, index=int(content))
    else:
        segments[-1] = PathSegment(field=last.field, index=content.strip("\"'"))
