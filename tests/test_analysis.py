import logging

import pytest

from logicgen.analysis import analyze_rule, analyze_ruleset, collect_depends_on, collect_modifies, paths_overlap
from logicgen.decode import decode_document, decode_effect, decode_rule, decode_selector, decode_view
from tests._debug import debug_dump_dependencies, debug_dump_diagnostics
from tests._shared_cases import ARENA_RULESET, NEAREST_DRONES_SELECTOR, RANK_ON_SCORE_RULE


def test_on_change_rule_reads_watch_and_selector_and_writes_effect_paths() -> None:
    rule = decode_rule(RANK_ON_SCORE_RULE)

    depends_on = rule.depends_on()
    debug_dump_dependencies("test_on_change_rule", "depends_on", depends_on)

    assert depends_on == {"$.Players[0].Score", "$.Players"}
    assert rule.modifies() == {"$.Players[0].Rank"}


def test_nearest_selector_reads_entity_position_and_origin() -> None:
    selector = decode_selector(NEAREST_DRONES_SELECTOR)

    assert selector.depends_on() == {"$.Drones", "$.self.position", "$.Base.position"}


def test_typed_references_are_not_dependencies() -> None:
    selector = decode_selector(
        {"type": "Nearest", "entity": "Drones", "position": "param:pos", "origin": "view:home"}
    )

    assert selector.depends_on() == {"$.Drones"}


def test_generic_slots_contribute_only_state_paths() -> None:
    effect = decode_effect(
        {
            "type": "Set",
            "path": "$.Game.label",
            "value": {"type": "Concat", "strings": ["self.name", "param:suffix", "const:SEP", "$.Game.round"]},
        }
    )

    assert effect.depends_on() == {"$.Game.round"}


def test_qualified_state_paths_are_dependencies() -> None:
    effect = decode_effect({"type": "Set", "path": "$.a", "value": "state:$.Game.phase"})

    assert effect.depends_on() == {"state:$.Game.phase"}


def test_dependency_collection_is_idempotent() -> None:
    ruleset = decode_document(ARENA_RULESET.document())

    first = collect_depends_on(ruleset)
    second = collect_depends_on(ruleset)

    assert first == second
    assert first.paths == collect_depends_on(ruleset).paths


def test_view_reads_source_pipeline_and_embedded_map_transforms() -> None:
    view = decode_view(
        {
            "source": "Enemies",
            "pipeline": [
                {"type": "Filter", "where": {"team": {"!=": "param:team"}, "zone": "$.Game.zone"}},
                {"type": "OrderBy", "by": "Score"},
                {
                    "type": "Map",
                    "fields": {
                        "id": "id",
                        "dist": {"type": "GpsDistance", "from": "self.position", "to": "$.Base.position"},
                    },
                },
            ],
        }
    )

    assert view.depends_on() == {"$.Enemies", "$.Game.zone", "Score", "$.Base.position"}


def test_undecodable_embedded_transform_is_reported_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    effect = decode_effect(
        {"type": "Spawn", "entity": "Drones", "fields": {"hp": "$.Config.hp", "pos": {"type": "Teleport"}}}
    )

    with caplog.at_level(logging.DEBUG, logger="logicgen.analysis.dependencies"):
        facts = collect_depends_on(effect, "rules[0].effects[0]")
    debug_dump_diagnostics("test_undecodable_embedded_transform", facts.diagnostics)

    assert facts.paths == {"$.Config.hp"}
    assert [diagnostic.code for diagnostic in facts.diagnostics] == ["ANALYSIS_UNDECODABLE_VALUE"]
    assert facts.diagnostics[0].location == "rules[0].effects[0].fields.pos"
    assert facts.diagnostics[0].severity == "warning"
    assert "unknown transform type: Teleport" in facts.diagnostics[0].message
    assert "Teleport" in caplog.text


def test_typed_literal_value_is_reported_not_raised() -> None:
    effect = decode_effect({"type": "Set", "path": "self.weapon", "value": {"type": "Sword", "damage": 5}})

    facts = collect_depends_on(effect, "rules[0].effects[0]")

    assert facts.paths == frozenset()
    assert [(d.code, d.location) for d in facts.diagnostics] == [
        ("ANALYSIS_UNDECODABLE_VALUE", "rules[0].effects[0].value")
    ]
    assert effect.modifies() == {"self.weapon"}


def test_modifies_follows_nested_effects_and_ignores_non_mutations() -> None:
    effect = decode_effect(
        {
            "type": "If",
            "condition": "$.Game.over",
            "then": {"type": "Sequence", "effects": [{"type": "Increment", "path": "$.Game.rounds"}]},
            "else": {"type": "Emit", "event": "tick", "to": "$.Game.host"},
        }
    )

    assert collect_modifies(effect).paths == {"$.Game.rounds"}
    assert effect.depends_on() == {"$.Game.over", "$.Game.host"}


def test_analyze_rule_separates_trigger_reads_from_effect_reads() -> None:
    ruleset = decode_document(ARENA_RULESET.document())
    chase = ruleset.get_rule("ChaseNearest")
    assert chase is not None

    summary = analyze_rule(chase)

    assert summary.rule_name == "ChaseNearest"
    assert {"$.Drones", "$.self.position", "$.Base.position", "$.Enemies", "$.Players"} <= summary.depends_on
    assert "$.Game.phase" not in summary.depends_on
    assert summary.effect_reads == {"$.Base.position", "$.Game.phase", "$.Game.commander"}
    assert summary.modifies == {"position", "nearestScore", "$.Game.idleTicks"}
    assert summary.diagnostics == ()


def test_analyze_ruleset_builds_state_path_index() -> None:
    analysis = analyze_ruleset(decode_document(ARENA_RULESET.document()))

    assert [summary.rule_name for summary in analysis.rules] == [
        "RankOnScore",
        "ChaseNearest",
        "ProximityAlarm",
        "ScoreBoard",
        "DailyReset",
    ]
    assert analysis.index["$.Players"] == ("RankOnScore", "ChaseNearest")
    assert analysis.index["$.Beacon.position"] == ("ProximityAlarm",)
    assert all(path.is_state for path in analysis.index)
    assert "Score" not in analysis.index
    assert analysis.rules[-1].depends_on == frozenset()


def test_rules_affected_by_matches_ancestors_and_descendants() -> None:
    analysis = analyze_ruleset(decode_document(ARENA_RULESET.document()))

    assert analysis.rules_affected_by("$.Players[0].Score") == ("RankOnScore", "ChaseNearest")
    assert analysis.rules_affected_by("$.Game") == ("ScoreBoard",)
    assert analysis.rules_affected_by("state:$.Beacon.position") == ("ProximityAlarm",)
    assert analysis.rules_affected_by("$.Nothing") == ()


def test_paths_overlap() -> None:
    assert paths_overlap("$.Players", "$.Players")
    assert paths_overlap("$.Players", "$.Players[0].Score")
    assert paths_overlap("$.Game.score", "$.Game")
    assert paths_overlap("state:$.Game.phase", "$.Game.phase")
    assert paths_overlap("state:Players.hp", "$.Players")
    assert not paths_overlap("$.Players", "$.PlayersArchive")
    assert not paths_overlap("$.Game.score", "$.Game.scoreboard")
