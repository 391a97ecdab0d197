"""YAML scenario scripts replayed against an engine on simulated time."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, model_validator

from core.clock import SECONDS_PER_DAY, SimulatedClock
from core.engine import PsycheEngine
from core.orchestrator import Orchestrator, RuntimeBundle
from memory.types.requests import MemoryCreationRequest
from virtue.types.records import VirtueActionReport

logger = logging.getLogger("psyche.scenario")

STEP_KINDS = ("memory", "virtue", "access", "forget", "advance", "happiness")


class ForgetStep(BaseModel):
    id: int
    force: bool = False


class AdvanceStep(BaseModel):
    seconds: float = 0.0
    days: float = 0.0

    @property
    def total_seconds(self) -> float:
        return self.seconds + self.days * SECONDS_PER_DAY


class HappinessStep(BaseModel):
    """Recompute happiness, optionally after recording a happiness event."""

    event_type: str | None = None
    impact: float = 0.0
    intensity: float = 1.0


class ScenarioStep(BaseModel):
    """Exactly one of the step kinds is set."""

    memory: MemoryCreationRequest | None = None
    virtue: VirtueActionReport | None = None
    access: int | None = None
    forget: ForgetStep | None = None
    advance: AdvanceStep | None = None
    happiness: HappinessStep | None = None

    @model_validator(mode="after")
    def _one_kind(self) -> ScenarioStep:
        present = [kind for kind in STEP_KINDS if getattr(self, kind) is not None]
        if len(present) != 1:
            raise ValueError(f"Scenario step must set exactly one of {STEP_KINDS}, got {present}")
        return self

    @property
    def kind(self) -> str:
        return next(kind for kind in STEP_KINDS if getattr(self, kind) is not None)


class Scenario(BaseModel):
    name: str = "scenario"
    start: datetime | None = None
    steps: list[ScenarioStep] = []


def load_scenario(path: Path) -> Scenario:
    """Parse a scenario file. A bare list is read as the step list."""
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if isinstance(data, list):
        data = {"name": path.stem, "steps": data}
    if not isinstance(data, dict):
        raise ValueError(f"Scenario file must contain a mapping or a list: {path}")
    data.setdefault("name", path.stem)
    try:
        return Scenario.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid scenario {path}: {exc}") from exc


def replay(engine: PsycheEngine, clock: SimulatedClock, steps: list[ScenarioStep]) -> list[dict[str, Any]]:
    """Apply steps in order and return one outcome per step."""
    outcomes: list[dict[str, Any]] = []
    for index, step in enumerate(steps):
        kind = step.kind
        result: Any
        if step.memory is not None:
            result = engine.report_memory(step.memory)
        elif step.virtue is not None:
            record = engine.report_virtue_action(step.virtue)
            result = record.id if record is not None else None
        elif step.access is not None:
            result = engine.access_memory(step.access)
        elif step.forget is not None:
            result = engine.forget_memory(step.forget.id, force=step.forget.force)
        elif step.advance is not None:
            seconds = step.advance.total_seconds
            clock.advance(seconds=seconds)
            result = engine.advance(seconds)
        else:
            happiness = step.happiness or HappinessStep()
            if happiness.event_type:
                engine.happiness.record_happiness_event(
                    happiness.event_type, happiness.impact, happiness.intensity
                )
            result = engine.recompute_happiness().overall
        logger.debug("Step %d (%s) -> %r", index, kind, result)
        outcomes.append({"step": index, "kind": kind, "result": result})
    return outcomes


def run_scenario(path: Path, root: Path | None = None) -> tuple[RuntimeBundle, list[dict[str, Any]]]:
    """Load a scenario, build a fresh runtime on simulated time and replay it."""
    scenario = load_scenario(path)
    clock = SimulatedClock(start=scenario.start)
    bundle = Orchestrator(root=root).build(clock=clock)
    outcomes = replay(bundle.engine, clock, scenario.steps)
    bundle.engine.recompute_happiness()
    logger.info("Replayed scenario '%s' (%d steps)", scenario.name, len(outcomes))
    return bundle, outcomes
