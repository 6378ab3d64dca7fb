import pytest

from logicgen.ast import (
    Effect,
    EffectKind,
    ParamDef,
    Rule,
    RuleSet,
    Trigger,
    TriggerKind,
    View,
    ViewOperation,
    ViewOperationKind,
)
from logicgen.decode import decode_document
from tests._shared_cases import ARENA_RULESET


def _rule(name: str, priority: int = 0, trigger: Trigger | None = None) -> Rule:
    return Rule(
        name=name,
        trigger=trigger or Trigger(kind=TriggerKind.ON_TICK),
        effects=(Effect(kind=EffectKind.EMIT, event="ping"),),
        priority=priority,
    )


@pytest.mark.parametrize(
    ("kind", "prefix"),
    [
        (TriggerKind.TIMER, "timer"),
        (TriggerKind.WAIT, "wait"),
        (TriggerKind.CRON, "cron"),
        (TriggerKind.SCHEDULE, "schedule"),
    ],
)
def test_time_based_triggers_have_timer_keys(kind: TriggerKind, prefix: str) -> None:
    rule = _rule("Heartbeat", trigger=Trigger(kind=kind))

    assert rule.timer_key() == f"{prefix}:Heartbeat"


def test_event_driven_triggers_have_no_timer_key() -> None:
    assert Trigger(kind=TriggerKind.ON_TICK).timer_key("Heartbeat") is None
    assert Trigger(kind=TriggerKind.ON_CHANGE).timer_key("Heartbeat") is None


def test_timer_key_requires_rule_name() -> None:
    with pytest.raises(ValueError, match="owning rule name"):
        Trigger(kind=TriggerKind.TIMER, duration=10).timer_key("")


def test_enabled_defaults_to_true_and_copies_on_toggle() -> None:
    rule = _rule("Toggle")
    disabled = rule.with_enabled(False)

    assert rule.enabled is None
    assert rule.is_enabled()
    assert disabled.is_enabled() is False
    assert rule.is_enabled()
    assert disabled.with_enabled(True).is_enabled()

    trigger = Trigger(kind=TriggerKind.ON_TICK)
    assert trigger.with_enabled(False).is_enabled() is False
    assert trigger.is_enabled()


def test_rules_by_priority_is_descending_and_stable() -> None:
    ruleset = RuleSet(
        rules=(
            _rule("low", priority=1),
            _rule("first", priority=5),
            _rule("zero"),
            _rule("second", priority=5),
        )
    )

    assert [rule.name for rule in ruleset.rules_by_priority()] == ["first", "second", "low", "zero"]
    assert [rule.name for rule in ruleset.rules] == ["low", "first", "zero", "second"]


def test_get_rule_returns_first_match() -> None:
    ruleset = RuleSet(rules=(_rule("dup", priority=1), _rule("dup", priority=2)))

    rule = ruleset.get_rule("dup")
    assert rule is not None
    assert rule.priority == 1
    assert ruleset.get_rule("missing") is None


def test_view_classification_helpers() -> None:
    plain = View(source="Players", pipeline=(ViewOperation(kind=ViewOperationKind.FILTER),))
    counted = View(source="Players", pipeline=(ViewOperation(kind=ViewOperationKind.COUNT),))
    ranged = View(
        source="Players",
        pipeline=(ViewOperation(kind=ViewOperationKind.DISTANCE),),
        params={"origin": ParamDef(type="point"), "radius": ParamDef(type="number", default=5)},
    )

    assert not plain.is_aggregation()
    assert not plain.is_spatial()
    assert counted.is_aggregation()
    assert ranged.is_spatial()
    assert ranged.required_params() == ("origin",)


def test_effect_properties() -> None:
    destroy = Effect(kind=EffectKind.DESTROY, targets="dead")
    global_set = Effect(kind=EffectKind.SET)
    toggle = Effect(kind=EffectKind.ENABLE_RULE, rule="x", effects=())
    branch = Effect(
        kind=EffectKind.IF,
        then=Effect(kind=EffectKind.EMIT, event="a"),
        else_=Effect(kind=EffectKind.EMIT, event="b"),
    )

    assert destroy.is_batch
    assert destroy.targets_view_name == "dead"
    assert not destroy.is_mutation
    assert global_set.is_mutation
    assert not global_set.is_batch
    assert not toggle.is_batch
    assert [child.event for child in branch.children()] == ["a", "b"]
    assert branch.active_fields == ("condition", "then", "else_")


def test_decoded_arena_rules_expose_timer_keys_and_priorities() -> None:
    ruleset = decode_document(ARENA_RULESET.document())

    assert [rule.name for rule in ruleset.rules_by_priority()][0] == "RankOnScore"
    reset = ruleset.get_rule("DailyReset")
    assert reset is not None
    assert reset.timer_key() == "schedule:DailyReset"
    rank = ruleset.get_rule("RankOnScore")
    assert rank is not None
    assert rank.timer_key() is None


def test_mapping_fields_are_read_only_copies() -> None:
    params = {"origin": ParamDef(type="point")}
    view = View(source="Players", params=params)
    rule = Rule(name="Chase", trigger=Trigger(kind=TriggerKind.ON_TICK), effects=(), views={"near": view})
    emit = Effect(kind=EffectKind.EMIT, event="alert", payload={"level": 2})

    params["radius"] = ParamDef(type="number")

    assert view.required_params() == ("origin",)
    with pytest.raises(TypeError):
        rule.views["far"] = view
    with pytest.raises(TypeError):
        emit.payload["level"] = 3
    assert emit.payload == {"level": 2}
    assert rule.with_enabled(False).views == {"near": view}


def test_decoded_nodes_are_hashable() -> None:
    ruleset = decode_document(ARENA_RULESET.document())
    chase = ruleset.get_rule("ChaseNearest")
    assert chase is not None

    assert hash(ruleset) == hash(decode_document(ARENA_RULESET.document()))
    assert chase in {rule for rule in ruleset.rules}
    with pytest.raises(TypeError):
        chase.views["extra"] = chase.views["total"]
