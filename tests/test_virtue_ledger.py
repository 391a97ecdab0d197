"""Virtue ledger level, consistency, classification and decay tests."""

from __future__ import annotations

import math

import pytest

from core.clock import SimulatedClock
from core.event_bus import DEVELOPMENT_STATE_CHANGED, VIRTUE_LEVEL_CHANGED, EventBus
from core.settings import VirtueSettings
from virtue.ledger import VirtueLedger, classify_development
from virtue.types.enums import DevelopmentState, VirtueCategory
from virtue.value_inference import ValueInferenceEngine


def build_ledger(**overrides: object) -> tuple[VirtueLedger, SimulatedClock]:
    clock = SimulatedClock()
    bus = EventBus()
    values = ValueInferenceEngine(event_bus=bus, clock=clock)
    ledger = VirtueLedger(settings=VirtueSettings(**overrides), value_engine=values, event_bus=bus, clock=clock)
    return ledger, clock


def test_starts_neutral_and_developing() -> None:
    ledger, _ = build_ledger()
    for record in ledger.all_records():
        assert record.level == 50.0
        assert record.consistency == 50.0
        assert record.development_state == DevelopmentState.DEVELOPING
    assert ledger.overall_score() == 50.0


def test_four_good_one_bad_courage_gives_eighty_consistency() -> None:
    ledger, clock = build_ledger()
    for _ in range(4):
        ledger.record_action("courage", "Stood guard", "Held the gate", 3.0, True)
        clock.advance(seconds=60)
    ledger.record_action("courage", "Fled", "Ran from the wolves", 2.0, False)

    assert ledger.consistency(VirtueCategory.COURAGE) == pytest.approx(80.0)
    record = ledger.get_record("courage")
    assert record.level == pytest.approx(60.0)
    assert record.consistency == pytest.approx(80.0)
    assert record.experience == 120
    assert record.recent_actions == 5
    assert record.development_state == DevelopmentState.MODERATE


def test_consistency_undetermined_below_three_actions() -> None:
    ledger, _ = build_ledger()
    ledger.record_action("justice", "Paid debt", "", 1.0, False)
    ledger.record_action("justice", "Paid debt", "", 1.0, False)

    assert ledger.consistency("justice") is None
    assert ledger.get_record("justice").consistency == 50.0
    assert ledger.meets_consistency("justice")


def test_consistency_window_excludes_old_actions() -> None:
    ledger, clock = build_ledger()
    for _ in range(3):
        ledger.record_action("temperance", "Fasted", "", 1.0, False)
    clock.advance(days=40)
    for _ in range(3):
        ledger.record_action("temperance", "Fasted", "", 1.0, True)

    assert ledger.consistency("temperance") == pytest.approx(100.0)
    assert ledger.consistency("temperance", window_days=60) == pytest.approx(50.0)
    assert ledger.meets_consistency("temperance")
    assert not ledger.meets_consistency("temperance", window_days=60)


@pytest.mark.parametrize(
    ("level", "consistency", "expected"),
    [
        (96.0, 10.0, DevelopmentState.EXCESSIVE),
        (95.0, 100.0, DevelopmentState.EXEMPLARY),
        (80.0, 100.0, DevelopmentState.EXEMPLARY),
        (70.0, 100.0, DevelopmentState.STRONG),
        (80.0, 50.0, DevelopmentState.MODERATE),
        (50.0, 50.0, DevelopmentState.DEVELOPING),
        (40.0, 50.0, DevelopmentState.DEFICIENT),
    ],
)
def test_classify_development_thresholds(level: float, consistency: float, expected: DevelopmentState) -> None:
    assert classify_development(level, consistency) == expected


def test_levels_clamped_and_impact_clamped() -> None:
    ledger, _ = build_ledger()
    for _ in range(20):
        ledger.record_action("wisdom", "Studied", "", 50.0, True)

    assert ledger.get_level("practical_wisdom") == 100.0
    assert ledger.recent_actions(1)[0].impact_magnitude == 10.0

    for _ in range(30):
        ledger.record_action("justice", "Cheated", "", 10.0, False)
    assert ledger.get_level("justice") == 0.0


def test_experience_rounds_half_up_on_positive_delta_only() -> None:
    ledger, _ = build_ledger()
    ledger.record_action("courage", "Spoke up", "", 0.25, True)
    ledger.record_action("courage", "Hid", "", 5.0, False)

    assert ledger.get_record("courage").experience == 3


def test_unknown_category_is_rejected() -> None:
    ledger, _ = build_ledger()
    assert ledger.record_action("charisma", "Charmed", "", 3.0, True) is None
    assert ledger.recent_actions(0) == []
    assert ledger.get_level("charisma") == 50.0


def test_wrappers_discount_vicious_choices() -> None:
    ledger, _ = build_ledger()
    ledger.record_wisdom_action("Trade", True, 2.0)
    ledger.record_courage_action("Dragon", False, 10.0)
    ledger.record_justice_action("Trial", False, 10.0)
    ledger.record_temperance_action("Wine", False, 10.0)

    assert ledger.get_level("wisdom") == pytest.approx(52.0)
    assert ledger.get_level("courage") == pytest.approx(47.0)
    assert ledger.get_level("justice") == pytest.approx(48.0)
    assert ledger.get_level("temperance") == pytest.approx(49.0)
    latest = ledger.actions_by_category("courage", 1)[0]
    assert latest.label == "Risk Taking"
    assert "Courage: No" in latest.description


def test_decay_moves_toward_neutral_without_overshoot() -> None:
    ledger, clock = build_ledger()
    ledger.record_action("courage", "Charged", "", 10.0, True)
    ledger.record_action("justice", "Stole", "", 10.0, False)
    clock.advance(days=2)

    courage = [ledger.get_level("courage")]
    justice = [ledger.get_level("justice")]
    for _ in range(10):
        ledger.decay_tick(10.0)
        courage.append(ledger.get_level("courage"))
        justice.append(ledger.get_level("justice"))

    for before, after in zip(courage, courage[1:]):
        assert after < before or after == 50.0
        assert after >= 50.0
    for before, after in zip(justice, justice[1:]):
        assert after > before or after == 50.0
        assert after <= 50.0
    assert courage[-1] == 50.0
    assert justice[-1] == 50.0


def test_decay_waits_a_day_and_respects_switch() -> None:
    ledger, clock = build_ledger()
    ledger.record_action("courage", "Charged", "", 10.0, True)
    clock.advance(seconds=3600)
    assert ledger.decay_tick(10.0) == 0

    disabled, other_clock = build_ledger(use_decay=False)
    disabled.record_action("courage", "Charged", "", 10.0, True)
    other_clock.advance(days=5)
    assert disabled.decay_tick(10.0) == 0
    assert disabled.get_level("courage") == 60.0


def test_decay_amount_matches_rate_idle_days_and_delta() -> None:
    ledger, clock = build_ledger()
    ledger.record_action("temperance", "Abstained", "", 10.0, True)
    clock.advance(days=2)

    ledger.decay_tick(1.0)

    assert ledger.get_level("temperance") == pytest.approx(60.0 - 0.1 * 2.0 * 1.0)


def test_history_pruned_oldest_first() -> None:
    ledger, _ = build_ledger(max_action_history=5)
    for i in range(7):
        ledger.record_action("justice", f"Act {i}", "", 1.0, True)

    history = ledger.recent_actions(0)
    assert len(history) == 5
    assert [a.label for a in history][-1] == "Act 2"


def test_compute_level_is_audit_only() -> None:
    ledger, clock = build_ledger()
    ledger.record_action("courage", "Charge", "", 4.0, True)
    ledger.record_action("courage", "Retreat", "", 2.0, False)

    assert ledger.compute_level("courage") == pytest.approx(55.0)
    assert ledger.get_level("courage") == pytest.approx(52.0)

    clock.advance(days=10)
    ledger.record_action("courage", "Charge", "", 4.0, True)
    old_weight = math.exp(-1.0)
    expected = 50.0 + 5.0 * ((4.0 - 2.0) * old_weight + 4.0) / (2 * old_weight + 1.0)
    assert ledger.compute_level("courage") == pytest.approx(expected)
    assert ledger.compute_level("temperance") == 50.0


def test_growth_rate_from_interval_and_polarity() -> None:
    ledger, clock = build_ledger()
    assert ledger.growth_rate("wisdom") == 0.0
    for _ in range(3):
        ledger.record_action("wisdom", "Read", "", 1.0, True)
        clock.advance(days=1)

    assert ledger.growth_rate("wisdom") == pytest.approx(1.0)


def test_level_and_state_notifications() -> None:
    ledger, _ = build_ledger()
    levels: list[dict] = []
    states: list[dict] = []
    ledger.event_bus.subscribe(VIRTUE_LEVEL_CHANGED, levels.append)
    ledger.event_bus.subscribe(DEVELOPMENT_STATE_CHANGED, states.append)

    for _ in range(3):
        ledger.record_action("courage", "Charge", "", 10.0, True)

    assert levels[0] == {"category": "courage", "old_level": 50.0, "new_level": 60.0, "reason": "Action: Charge"}
    assert states[0]["old_state"] == "developing"
    assert states[0]["new_state"] == "exemplary"
    assert len(states) == 1


def test_report_lists_every_virtue() -> None:
    ledger, _ = build_ledger()
    ledger.record_action("justice", "Fair split", "", 2.0, True)
    ledger.clear_history()

    report = ledger.report()
    assert report.startswith("=== Virtue Assessment Report ===")
    assert "Justice (Dikaiosyne): Level 52.0" in report
    assert "Overall Virtue Score: 50.5" in report
    assert "Total Actions Recorded: 0" in report


def test_non_positive_delta_leaves_levels_in_range() -> None:
    ledger, clock = build_ledger()
    ledger.record_action("courage", "Charged", "", 10.0, True)
    ledger.record_action("justice", "Stole", "", 10.0, False)
    clock.advance(days=10)

    assert ledger.decay_tick(-100.0) == 0
    assert ledger.decay_tick(0.0) == 0

    assert ledger.get_level("courage") == pytest.approx(60.0)
    assert ledger.get_level("justice") == pytest.approx(40.0)
    for record in ledger.all_records():
        assert 0.0 <= record.level <= 100.0
