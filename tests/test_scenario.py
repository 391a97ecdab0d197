"""Scenario loading and replay tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.clock import SimulatedClock
from core.engine import PsycheEngine
from core.scenario import load_scenario, replay, run_scenario

REPO_ROOT = Path(__file__).resolve().parents[1]

SCENARIO = """\
name: harbor
start: 2024-05-01T00:00:00+00:00
steps:
  - memory: {title: Harbor, content: Gulls and tar, category: episodic, importance: low}
  - virtue: {category: courage, action_label: Dived for the child, impact_magnitude: 4.0}
  - access: 1
  - forget: {id: 1}
  - advance: {days: 2}
  - happiness: {event_type: Festival, impact: 6.0}
"""


def write_scenario(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "scenario.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_scenario_parses_steps(tmp_path: Path) -> None:
    scenario = load_scenario(write_scenario(tmp_path, SCENARIO))

    assert scenario.name == "harbor"
    assert scenario.start.year == 2024
    assert [step.kind for step in scenario.steps] == [
        "memory",
        "virtue",
        "access",
        "forget",
        "advance",
        "happiness",
    ]
    assert scenario.steps[4].advance.total_seconds == 2 * 86400


def test_bare_list_is_a_step_list(tmp_path: Path) -> None:
    scenario = load_scenario(write_scenario(tmp_path, "- access: 1\n- happiness: {}\n"))

    assert scenario.name == "scenario"
    assert len(scenario.steps) == 2


@pytest.mark.parametrize(
    "text",
    [
        "steps:\n  - {access: 1, forget: {id: 1}}\n",
        "steps:\n  - {}\n",
        "just a string\n",
        "steps:\n  - virtue: {category: courage}\n",
    ],
)
def test_malformed_scenarios_raise_value_error(tmp_path: Path, text: str) -> None:
    with pytest.raises(ValueError):
        load_scenario(write_scenario(tmp_path, text))


def test_replay_reports_each_outcome(tmp_path: Path) -> None:
    scenario = load_scenario(write_scenario(tmp_path, SCENARIO))
    clock = SimulatedClock(start=scenario.start)
    engine = PsycheEngine(clock=clock)

    outcomes = replay(engine, clock, scenario.steps)

    results = [outcome["result"] for outcome in outcomes]
    assert results[0] == 1
    assert results[1] == 1
    assert results[2] is True
    assert results[3] is True
    assert results[4]["decay"] is not None
    assert isinstance(results[5], float)
    assert engine.state.elapsed_seconds == 2 * 86400
    assert engine.get_memory(1) is None
    assert engine.get_virtue_level("courage") == pytest.approx(54.0 - 0.1 * 2.0 * 2.0)
    assert engine.search_memories("Festival")


def test_run_scenario_uses_sample_file() -> None:
    bundle, outcomes = run_scenario(REPO_ROOT / "scenarios" / "first_day.yaml", root=REPO_ROOT)

    engine = bundle.engine
    assert len(outcomes) == 8
    assert engine.get_virtue_level("courage") == pytest.approx(53.6)
    assert engine.get_virtue_level("temperance") == pytest.approx(51.6)
    assert engine.get_virtue_level("justice") == pytest.approx(47.0)
    assert engine.get_memory(2).access_count == 1
    assert engine.state.happiness_passes >= 1
