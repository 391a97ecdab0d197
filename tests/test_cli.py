"""CLI command tests."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from ui.cli.cli import app

runner = CliRunner()

SCENARIO = """\
steps:
  - memory: {title: Lighthouse, content: A beam over black water, category: emotional, importance: high, emotional_intensity: 88}
  - virtue: {category: wisdom, action_label: Read the tide charts, impact_magnitude: 2.0}
  - happiness: {}
"""


def write_scenario(tmp_path: Path) -> Path:
    path = tmp_path / "night.yaml"
    path.write_text(SCENARIO, encoding="utf-8")
    return path


def test_run_prints_json_summary(tmp_path: Path) -> None:
    result = runner.invoke(app, ["run", str(write_scenario(tmp_path)), "--root", str(tmp_path), "--steps"])

    assert result.exit_code == 0, result.output
    summary = json.loads(result.stdout)
    assert summary["memory"]["count"] == 3
    assert summary["virtues"]["practical_wisdom"]["level"] == 52.0
    assert summary["overall_virtue"] == 50.5
    assert [step["kind"] for step in summary["steps"]] == ["memory", "virtue", "happiness"]


def test_report_prints_virtue_report(tmp_path: Path) -> None:
    result = runner.invoke(app, ["report", str(write_scenario(tmp_path)), "--root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "=== Virtue Assessment Report ===" in result.stdout
    assert "Wisdom (Sophia): Level 52.0" in result.stdout
    assert "Dominant values: self_direction" in result.stdout


def test_missing_scenario_exits_non_zero(tmp_path: Path) -> None:
    result = runner.invoke(app, ["run", str(tmp_path / "nope.yaml")])

    assert result.exit_code == 1


def test_config_show_prints_effective_config(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "default.yaml").write_text("memory:\n  max_memories: 12\n", encoding="utf-8")

    result = runner.invoke(app, ["--log-level", "debug", "config", "show", "--root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"memory": {"max_memories": 12}}
