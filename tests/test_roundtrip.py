import json

import pytest

from logicgen.decode import decode_document, decode_filter, decode_rule
from logicgen.encode import to_document
from tests._debug import debug_print_document
from tests._shared_cases import ARENA_RULESET, ROUND_TRIP_CASES, RuleCase, case_id


@pytest.mark.parametrize("case", ROUND_TRIP_CASES, ids=case_id)
def test_encoded_documents_decode_to_the_same_tree(case: RuleCase) -> None:
    ruleset = decode_document(case.document())
    encoded = to_document(ruleset)
    debug_print_document(case.name, encoded)

    assert decode_document(encoded) == ruleset


@pytest.mark.parametrize("case", ROUND_TRIP_CASES, ids=case_id)
def test_encoded_documents_are_json_serializable(case: RuleCase) -> None:
    encoded = to_document(decode_document(case.document()))

    assert json.loads(json.dumps(encoded)) == encoded


def test_encoding_uses_explicit_forms() -> None:
    rule = decode_rule(
        {
            "name": "Shorthand",
            "trigger": {"type": "Condition", "condition": {"$.Game.score": {">": 3}}},
            "selector": {"type": "Filter", "entity": "Players", "where": {"hp": {">": 0}, "team": "red"}},
            "effects": [{"path": "$.Game.flag", "value": True}],
        }
    )

    encoded = to_document(rule)

    assert encoded["trigger"] == {
        "type": "Condition",
        "condition": {"left": "$.Game.score", "op": ">", "right": 3},
    }
    assert encoded["selector"] == {
        "type": "Filter",
        "entity": "Players",
        "where": {
            "and": [
                {"field": "hp", "op": ">", "value": 0},
                {"field": "team", "op": "==", "value": "red"},
            ]
        },
    }
    assert encoded["effects"] == [{"type": "Set", "path": "$.Game.flag", "value": True}]


def test_encoding_writes_only_active_fields() -> None:
    ruleset = decode_document(ARENA_RULESET.document())
    chase = ruleset.get_rule("ChaseNearest")
    assert chase is not None

    encoded = to_document(chase)

    assert encoded["enabled"] is False
    assert "priority" not in encoded
    assert encoded["trigger"] == {"type": "OnTick", "interval": 100}
    assert encoded["views"]["total"] == {
        "source": "Players",
        "name": "total",
        "pipeline": [{"type": "Sum", "field": "Score"}],
    }


def test_filter_round_trip() -> None:
    filter_ = decode_filter(
        {
            "name": "fog",
            "description": "Hide distant enemies",
            "enabled": False,
            "params": [{"name": "radius", "type": "number", "default": 10}],
            "operations": [
                {"type": "RemoveWhere", "target": "$.Enemies", "where": {"distance": {">": "param:radius"}}},
                {"type": "ReplaceFieldWhere", "target": "$.Enemies", "field": "name", "value": "???"},
            ],
        }
    )

    assert decode_filter(to_document(filter_)) == filter_
