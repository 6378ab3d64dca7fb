"""Trigger decoding."""

from __future__ import annotations

from logicgen.ast.paths import Path
from logicgen.ast.trigger import DISTANCE_OPERATORS, TRIGGER_FIELDS, Trigger, TriggerKind
from logicgen.decode.errors import InvalidValueError, MissingFieldError
from logicgen.decode.expression import decode_expression
from logicgen.decode.reader import (
    Document,
    child,
    document_key,
    expect_mapping,
    optional_bool,
    optional_float,
    optional_int,
    optional_int_list,
    optional_str,
    optional_str_list,
    read_kind,
)

_INT_FIELDS = frozenset({"interval", "duration", "start_delay"})


def decode_trigger(document: object, at: str = "") -> Trigger:
    mapping = expect_mapping(document, at, "trigger")
    kind = TriggerKind(read_kind(mapping, TriggerKind, "trigger", at))
    fields = {name: _decode_field(mapping, name, at) for name in TRIGGER_FIELDS[kind]}
    trigger = Trigger(kind=kind, enabled=optional_bool(mapping, "enabled", at), **fields)
    _check_required(trigger, at)
    return trigger


def _decode_field(mapping: Document, name: str, at: str) -> object:
    key = document_key(name)
    if name in _INT_FIELDS:
        return optional_int(mapping, key, at)
    if name == "params":
        return optional_str_list(mapping, key, at)
    if name == "watch":
        return tuple(Path(path) for path in optional_str_list(mapping, key, at))
    if name in ("from_", "to"):
        text = optional_str(mapping, key, at)
        return Path(text) if text else None
    if name == "value":
        return optional_float(mapping, key, at)
    if name == "repeat":
        return optional_bool(mapping, key, at)
    if name == "weekdays":
        return optional_int_list(mapping, key, at)
    if name == "condition":
        condition = mapping.get("condition")
        return decode_expression(condition, child(at, "condition")) if condition is not None else None
    return optional_str(mapping, key, at)


def _check_required(trigger: Trigger, at: str) -> None:
    match trigger.kind:
        case TriggerKind.ON_EVENT:
            if not trigger.event:
                raise MissingFieldError("OnEvent trigger requires event name", at, field="event")
        case TriggerKind.ON_CHANGE:
            if not trigger.watch:
                raise MissingFieldError("OnChange trigger requires watch paths", at, field="watch")
        case TriggerKind.DISTANCE:
            if trigger.from_ is None or trigger.to is None:
                field = "from" if trigger.from_ is None else "to"
                raise MissingFieldError("Distance trigger requires from and to paths", at, field=field)
            if trigger.value is not None and trigger.value < 0:
                raise InvalidValueError("Distance trigger value cannot be negative", child(at, "value"))
            if trigger.operator is not None and trigger.operator not in DISTANCE_OPERATORS:
                raise InvalidValueError(
                    f"Distance trigger operator must be one of {sorted(DISTANCE_OPERATORS)}",
                    child(at, "operator"),
                )
        case TriggerKind.TIMER | TriggerKind.WAIT:
            if trigger.duration is None or trigger.duration <= 0:
                raise MissingFieldError(
                    f"{trigger.kind} trigger requires positive duration", at, field="duration"
                )
        case TriggerKind.CRON:
            if not trigger.cron:
                raise MissingFieldError("Cron trigger requires cron expression", at, field="cron")
        case TriggerKind.SCHEDULE:
            if not trigger.at and not trigger.every:
                raise MissingFieldError("Schedule trigger requires at or every", at, field="at")
        case TriggerKind.CONDITION:
            if trigger.condition is None:
                raise MissingFieldError("Condition trigger requires condition", at, field="condition")
        case _:
            pass
