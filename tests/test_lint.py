from dataclasses import dataclass

import pytest

from logicgen.ast import RuleSet
from logicgen.decode import decode_document
from logicgen.diagnostics import Diagnostic
from logicgen.lint import (
    DeprecatedCurrentPathRule,
    LintConfidence,
    LintDomain,
    ScheduleFormatRule,
    UnknownViewReferenceRule,
    default_lint_rules,
    iter_nodes,
    run_lint,
    strict_lint_rules,
    validate_lint_rules,
)
from logicgen.options import LoadOptions, ValidationMode
from tests._debug import debug_dump_diagnostics
from tests._shared_cases import ARENA_RULESET


def _ruleset(*rules: dict[str, object]) -> RuleSet:
    return decode_document({"rules": list(rules)})


def _rule(effects: list[object], **extra: object) -> dict[str, object]:
    rule: dict[str, object] = {"name": "Linted", "trigger": {"type": "OnTick"}, "effects": effects}
    rule.update(extra)
    return rule


def _codes(diagnostics: list[Diagnostic]) -> list[str]:
    return [diagnostic.code for diagnostic in diagnostics]


def test_default_rules_are_sorted_and_valid() -> None:
    rules = default_lint_rules()

    validate_lint_rules(rules)
    validate_lint_rules(strict_lint_rules())
    assert [rule.name for rule in rules] == ["semanticUnknownViewReference", "styleDeprecatedCurrentPath"]
    assert len(strict_lint_rules()) == 8


def test_default_lint_flags_bare_current_marker() -> None:
    ruleset = _ruleset(
        _rule(
            [{"type": "Set", "path": "hp", "value": "$"}],
            selector={"type": "Nearest", "entity": "Drones", "position": "$", "origin": "$.Base"},
        )
    )

    diagnostics = run_lint(ruleset).diagnostics
    debug_dump_diagnostics("test_default_lint_flags_bare_current_marker", diagnostics)

    assert [(d.code, d.location, d.severity) for d in diagnostics] == [
        ("LINT_DEPRECATED_CURRENT_PATH", "rules[0].effects[0].value", "warning"),
        ("LINT_DEPRECATED_CURRENT_PATH", "rules[0].selector.position", "warning"),
    ]


def test_default_lint_flags_unknown_view_references() -> None:
    ruleset = _ruleset(
        _rule(
            [
                {"type": "Destroy", "targets": "ghosts"},
                {
                    "type": "SetFromView",
                    "targets": "alive",
                    "path": "best",
                    "valueExpression": {"type": "viewResult", "view": "missing"},
                },
            ],
            views={"alive": {"source": "Players"}},
        )
    )

    diagnostics = run_lint(ruleset).diagnostics

    assert _codes(diagnostics) == ["LINT_UNKNOWN_VIEW_REFERENCE", "LINT_UNKNOWN_VIEW_REFERENCE"]
    assert diagnostics[0].location == "rules[0].effects[0].targets"
    assert "View `ghosts`." in diagnostics[0].message
    assert diagnostics[1].location == "rules[0].effects[1].valueExpression.view"


def test_strict_lint_accepts_the_arena_rules() -> None:
    ruleset = decode_document(ARENA_RULESET.document())

    result = run_lint(ruleset, mode=ValidationMode.STRICT)
    debug_dump_diagnostics("test_strict_lint_accepts_the_arena_rules", result.diagnostics)

    assert result.diagnostics == []
    assert result.ruleset is ruleset


def test_default_mode_skips_strict_checks() -> None:
    ruleset = _ruleset(_rule([{"type": "Set", "path": "$.a"}]))

    assert run_lint(ruleset).diagnostics == []
    assert _codes(run_lint(ruleset, options=LoadOptions.for_mode(ValidationMode.STRICT)).diagnostics) == [
        "LINT_EFFECT_MISSING_FIELD"
    ]


def test_strict_lint_reports_missing_effect_fields_in_nested_effects() -> None:
    ruleset = _ruleset(
        _rule([{"type": "If", "condition": "$.Game.over", "then": {"type": "Sequence", "effects": [{"type": "Emit"}]}}])
    )

    diagnostics = run_lint(ruleset, mode=ValidationMode.STRICT).diagnostics

    assert _codes(diagnostics) == ["LINT_EFFECT_MISSING_FIELD"]
    assert diagnostics[0].location == "rules[0].effects[0].then.effects[0]"
    assert "Emit requires `event`." in diagnostics[0].message


def test_strict_lint_checks_transforms() -> None:
    ruleset = _ruleset(
        _rule(
            [
                {
                    "type": "Transform",
                    "path": "$.Drone.position",
                    "transform": {"type": "MoveTowards", "current": "$.Drone.position", "target": "$.Base", "speed": 0},
                },
                {"type": "Set", "path": "$.Game.total", "value": {"type": "Add", "left": 1}},
            ]
        )
    )

    diagnostics = run_lint(ruleset, mode=ValidationMode.STRICT).diagnostics

    assert [(d.code, d.location) for d in diagnostics] == [
        ("LINT_TRANSFORM_INVALID_ARGUMENT", "rules[0].effects[0].transform.speed"),
        ("LINT_TRANSFORM_MISSING_FIELD", "rules[0].effects[1].value"),
    ]
    assert "Add requires `right`." in diagnostics[1].message


def test_strict_lint_checks_selectors_and_view_operations() -> None:
    ruleset = _ruleset(
        _rule(
            [{"type": "Destroy", "targets": "ranked"}],
            selector={"type": "Single", "entity": "Players"},
            views={"ranked": {"source": "Players", "pipeline": [{"type": "OrderBy"}, {"type": "Limit"}]}},
        )
    )

    diagnostics = run_lint(ruleset, mode=ValidationMode.STRICT).diagnostics

    assert [(d.code, d.location) for d in diagnostics] == [
        ("LINT_SELECTOR_MISSING_FIELD", "rules[0].selector"),
        ("LINT_VIEW_OPERATION_MISSING_FIELD", "rules[0].views.ranked.pipeline[0]"),
        ("LINT_VIEW_OPERATION_MISSING_FIELD", "rules[0].views.ranked.pipeline[1]"),
    ]


def test_strict_lint_requires_view_parameters_without_defaults() -> None:
    ruleset = _ruleset(
        _rule(
            [
                {
                    "type": "SetFromView",
                    "path": "$.Game.closest",
                    "valueExpression": {"type": "viewResult", "view": "near", "viewParams": {"radius": 3}},
                }
            ],
            views={
                "near": {
                    "source": "Enemies",
                    "params": {"team": {"type": "string"}, "radius": {"type": "number"}, "limit": {"default": 1}},
                    "pipeline": [{"type": "Count"}],
                }
            },
        )
    )

    diagnostics = run_lint(ruleset, mode=ValidationMode.STRICT).diagnostics

    assert _codes(diagnostics) == ["LINT_VIEW_MISSING_PARAMETER"]
    assert diagnostics[0].location == "rules[0].effects[0].valueExpression.viewParams"
    assert "View `near` requires `team`." in diagnostics[0].message


@pytest.mark.parametrize(
    ("trigger", "location", "detail"),
    [
        ({"type": "Cron", "cron": "* * *"}, "rules[0].trigger.cron", "needs five fields"),
        ({"type": "Cron", "cron": "0 12 * * MON"}, "rules[0].trigger.cron", "unsupported field"),
        ({"type": "Schedule", "at": "25:00"}, "rules[0].trigger.at", "is not HH:MM"),
        ({"type": "Schedule", "every": "soon"}, "rules[0].trigger.every", "is not a duration"),
        ({"type": "Schedule", "every": "1h", "weekdays": [0, 7]}, "rules[0].trigger.weekdays[1]", "outside 0-6"),
    ],
)
def test_schedule_format_rule(trigger: dict[str, object], location: str, detail: str) -> None:
    ruleset = _ruleset(_rule([], trigger=trigger))

    diagnostics = ScheduleFormatRule().run(ruleset)

    assert [(d.code, d.location) for d in diagnostics] == [("LINT_INVALID_SCHEDULE", location)]
    assert detail in diagnostics[0].message


def test_schedule_format_rule_accepts_valid_schedules() -> None:
    ruleset = _ruleset(
        _rule([], trigger={"type": "Cron", "cron": "*/5 0-6 1,15 * *"}),
        _rule([], trigger={"type": "Schedule", "every": "1h30m", "weekdays": [0, 6]}),
    )

    assert ScheduleFormatRule().run(ruleset) == []


def test_explicit_rules_override_mode() -> None:
    ruleset = _ruleset(_rule([{"type": "Destroy", "targets": "ghosts"}]))

    result = run_lint(ruleset, mode=ValidationMode.STRICT, rules=[DeprecatedCurrentPathRule()])

    assert result.diagnostics == []
    assert _codes(run_lint(ruleset, rules=[UnknownViewReferenceRule()]).diagnostics) == [
        "LINT_UNKNOWN_VIEW_REFERENCE"
    ]


def test_run_lint_rejects_options_and_mode_together() -> None:
    with pytest.raises(ValueError, match="either options or mode"):
        run_lint(RuleSet(), options=LoadOptions(), mode=ValidationMode.STRICT)


@dataclass(frozen=True, slots=True)
class _CustomRule:
    code: str = "LINT_UNKNOWN_VIEW_REFERENCE"
    name: str = "customDuplicate"
    category: str = "semantic"
    domain: LintDomain = "semantic"
    confidence: LintConfidence = "heuristic"

    def run(self, ruleset: RuleSet) -> list[Diagnostic]:
        return []


def test_validate_lint_rules_rejects_bad_contracts() -> None:
    with pytest.raises(ValueError, match="reuses code"):
        validate_lint_rules((UnknownViewReferenceRule(), _CustomRule()))
    with pytest.raises(ValueError, match="expected `LINT_` prefix"):
        validate_lint_rules((_CustomRule(code="CUSTOM"),))


def test_iter_nodes_yields_locations_parents_first() -> None:
    ruleset = _ruleset(_rule([{"type": "Set", "path": "$.a", "value": 1}], views={"v": {"source": "Players"}}))

    locations = [location for _, location in iter_nodes(ruleset)]

    assert locations[0] == "rules[0]"
    assert "rules[0].trigger" in locations
    assert "rules[0].views.v" in locations
    assert "rules[0].effects[0].value" in locations
