"""Shared fixtures for Treasure Seeker tests."""

import random

import pytest

from treasureseeker import GameSettings
from treasureseeker.world import CacheStore, CellRegistry, SpawnOracle


def pinned_luck(values, default=0.99):
    """Luck function returning fixed values per spawn key (``"i,j"``)."""
    return lambda key: values.get(key, default)


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    monkeypatch.setenv("TREASURE_NO_COLOR", "1")
    monkeypatch.delenv("TREASURE_VERBOSE", raising=False)


@pytest.fixture
def registry():
    return CellRegistry()


@pytest.fixture
def make_store(registry):
    """Build a store whose oracle approves exactly the given spawn keys."""

    def _make(spawn_keys=(), *, min_coins=3, max_coins=3, seed=1):
        oracle = SpawnOracle(0.1, luck_fn=pinned_luck({key: 0.0 for key in spawn_keys}))
        return CacheStore(
            oracle,
            registry,
            rng=random.Random(seed),
            min_coins=min_coins,
            max_coins=max_coins,
        )

    return _make


@pytest.fixture
def settings():
    """Unit tiles so test coordinates map to cells exactly."""
    return GameSettings(
        tile_size=1.0,
        visibility_radius=1,
        min_coins=3,
        max_coins=3,
        start_lat=0.5,
        start_lng=0.5,
        seed=7,
    )
