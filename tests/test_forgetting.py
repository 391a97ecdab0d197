"""Clarity decay, fading and eviction policy tests."""

from __future__ import annotations

import pytest

from core.clock import SimulatedClock
from core.settings import MemorySettings
from memory.memory_store import MemoryStore
from memory.scoring import clarity_loss


def build_store(**overrides: object) -> tuple[MemoryStore, SimulatedClock]:
    clock = SimulatedClock()
    return MemoryStore(settings=MemorySettings(**overrides), clock=clock), clock


def test_no_decay_within_a_day_of_last_access() -> None:
    store, clock = build_store()
    memory_id = store.create("Fresh", "", "episodic", "medium")
    clock.advance(seconds=3600)

    result = store.decay_tick(100.0)

    assert result["decayed"] == 0
    assert store.get(memory_id).clarity == 100.0


def test_decay_scales_with_rate_delta_and_idle_days() -> None:
    store, clock = build_store()
    memory_id = store.create("Market", "", "episodic", "medium")
    clock.advance(days=2)

    store.decay_tick(1.0)

    assert store.get(memory_id).clarity == pytest.approx(100.0 - 0.05 * 1.0 * 2.0)


def test_fading_then_forgotten_on_following_pass() -> None:
    store, clock = build_store()
    memory_id = store.create("Old road", "", "episodic", "medium")
    clock.advance(days=2)

    store.decay_tick(600.0)
    entry = store.get(memory_id)
    assert entry.clarity == pytest.approx(40.0)
    assert entry.is_fading

    store.decay_tick(350.0)
    assert store.get(memory_id).clarity == pytest.approx(5.0)

    result = store.decay_tick(0.0)
    assert result["forgotten"] == 1
    assert store.get(memory_id) is None


def test_critical_memories_never_auto_forgotten() -> None:
    store, clock = build_store()
    memory_id = store.create("Homeland", "", "semantic", "critical")
    clock.advance(days=5)

    store.decay_tick(10_000.0)
    store.decay_tick(10_000.0)

    entry = store.get(memory_id)
    assert entry is not None
    assert entry.clarity == 0.0


def test_repressed_memories_do_not_decay() -> None:
    store, clock = build_store()
    memory_id = store.create("Shipwreck", "", "traumatic", "medium", 90.0)
    store.repress(memory_id)
    clock.advance(days=10)

    store.decay_tick(1_000.0)
    store.recover(memory_id)

    assert store.get(memory_id).clarity == 100.0


def test_decay_disabled_leaves_everything() -> None:
    store, clock = build_store(use_decay=False)
    memory_id = store.create("Static", "", "episodic", "low")
    clock.advance(days=30)

    assert store.decay_tick(1_000.0) == {"decayed": 0, "fading": 0, "forgotten": 0}
    assert store.get(memory_id).clarity == 100.0


def test_clarity_stays_in_range_under_heavy_decay() -> None:
    store, clock = build_store()
    for i in range(5):
        store.create(f"M{i}", "", "episodic", "critical", 20.0 * i)
    clock.advance(days=3)

    for _ in range(3):
        store.decay_tick(500.0)

    for entry in store.all_entries():
        assert 0.0 <= entry.clarity <= 100.0
        assert 0.0 <= entry.emotional_intensity <= 100.0


def test_capacity_eviction_never_removes_critical() -> None:
    store, _ = build_store(max_memories=10)
    critical = [store.create(f"Vow {i}", "", "moral", "critical", 0.0) for i in range(5)]
    for i in range(20):
        store.create(f"Chatter {i}", "", "episodic", "trivial", 0.0)

    assert store.count == 10
    assert all(store.get(memory_id) is not None for memory_id in critical)


def test_eviction_prefers_lowest_retention_score() -> None:
    store, _ = build_store(max_memories=3)
    weak = store.create("Weak", "", "episodic", "trivial", 10.0)
    linked = store.create("Linked", "", "episodic", "trivial", 10.0)
    loved = store.create("Loved", "", "emotional", "high", 90.0)
    store.associate(linked, loved)

    store.create("Newcomer", "", "episodic", "medium", 50.0)

    assert store.get(weak) is None
    assert store.get(linked) is not None
    assert store.get(loved) is not None


def test_retention_score_never_drops_with_more_access() -> None:
    store, _ = build_store()
    memory_id = store.create("Song", "", "episodic", "medium", 60.0)
    store.records[memory_id].clarity = 80.0

    scores = [store.retention_score(memory_id)]
    for _ in range(15):
        store.access(memory_id)
        scores.append(store.retention_score(memory_id))

    assert scores == sorted(scores)
    assert scores[-1] > scores[0]


def test_clarity_loss_helper_threshold() -> None:
    assert clarity_loss(0.05, 10.0, 1.0) == 0.0
    assert clarity_loss(0.05, 10.0, 3.0) == pytest.approx(1.5)
