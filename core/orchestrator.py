"""Top-level application orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.clock import Clock, utc_now
from core.engine import PsycheEngine
from core.event_journal import EventJournal
from core.policy_runtime import load_effective_config
from core.settings import CadenceSettings, MemorySettings, VirtueSettings


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    engine: PsycheEngine
    journal: EventJournal | None = None


class Orchestrator:
    """Creates and wires runtime components for CLI and host use."""

    def __init__(self, root: Path | None = None, config: dict[str, Any] | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self._config = config

    def build(self, clock: Clock = utc_now) -> RuntimeBundle:
        config = self._config if self._config is not None else load_effective_config(self.root)
        engine = build_engine(config, clock=clock)

        journal = None
        journal_cfg = dict(config.get("journal", {}))
        if journal_cfg.get("enabled", False):
            journal_path = Path(journal_cfg.get("path", "logs/psyche_events.jsonl"))
            if not journal_path.is_absolute():
                journal_path = self.root / journal_path
            journal = EventJournal(journal_path, clock=clock)
            journal.attach(engine.event_bus)

        return RuntimeBundle(config=config, engine=engine, journal=journal)


def build_engine(config: dict[str, Any], clock: Clock = utc_now) -> PsycheEngine:
    """Construct an engine from a merged configuration mapping."""
    return PsycheEngine(
        memory_settings=MemorySettings.from_config(config.get("memory")),
        virtue_settings=VirtueSettings.from_config(config.get("virtue")),
        cadence=CadenceSettings.from_config(config.get("cadence")),
        clock=clock,
    )
