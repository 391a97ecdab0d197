"""Typer command handlers."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

import typer

from core.orchestrator import Orchestrator, RuntimeBundle
from core.scenario import run_scenario


def _runtime(root: Path | None = None) -> RuntimeBundle:
    bundle = Orchestrator(root=root).build()
    return bundle


def _replay(scenario: Path, root: Path | None) -> tuple[RuntimeBundle, list[dict]]:
    try:
        return run_scenario(scenario, root=root)
    except (OSError, ValueError) as exc:
        typer.echo(f"Cannot replay {scenario}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def run(scenario: Path, root: Path | None = None, steps: bool = False) -> None:
    """Replay a scenario and print the resulting psyche summary."""
    bundle, outcomes = _replay(scenario, root)
    summary = bundle.engine.summary()
    if steps:
        summary["steps"] = outcomes
    typer.echo(json.dumps(_json_safe(summary), indent=2))


def report(scenario: Path, root: Path | None = None) -> None:
    """Replay a scenario and print the plain-text virtue report."""
    bundle, _ = _replay(scenario, root)
    typer.echo(bundle.engine.virtue_report(), nl=False)
    profile = bundle.engine.get_value_profile()
    typer.echo("Dominant values: " + ", ".join(a.value.value for a in profile[:3]))
    typer.echo(f"Happiness: {bundle.engine.get_happiness_metrics().overall:.1f}")


def config_show(root: Path | None = None) -> None:
    """Show effective runtime config."""
    bundle = _runtime(root)
    typer.echo(json.dumps(_json_safe(bundle.config), indent=2))


def _json_safe(payload: object) -> object:
    """Convert datetimes and enums to strings for JSON output."""
    if isinstance(payload, dict):
        return {str(k): _json_safe(v) for k, v in payload.items()}
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [_json_safe(v) for v in payload]
    if isinstance(payload, Enum):
        return payload.value
    if hasattr(payload, "isoformat"):
        return payload.isoformat()
    return payload
