"""Deterministic cache placement.

Whether a cache exists at a cell is a pure function of the cell's coordinates.
It does not depend on visit order, session seed or wall-clock time, so the
same cells host caches on every run. Only the contents of a cache are
randomized, once, when it is first materialized.
"""

from __future__ import annotations

import hashlib
from typing import Callable

from .cells import Cell

LuckFunction = Callable[[str], float]

_SCALE = float(2 ** 64)


def luck(key: str) -> float:
    """Map ``key`` to a stable value in ``[0, 1)``.

    Uses the first 8 bytes of the SHA-256 digest as an unsigned integer, so the
    result is identical across processes and platforms (unlike ``hash()``,
    which is salted per interpreter run).
    """

    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") / _SCALE


def spawn_key(cell: Cell) -> str:
    """Key hashed for ``cell``; matches a JS ``[i, j].toString()``."""
    return f"{cell.i},{cell.j}"


class SpawnOracle:
    """Decides whether a cache exists at a cell.

    ``should_spawn`` is ``luck(key) < probability``. Because ``luck`` is in
    ``[0, 1)``, probability 0 never spawns and probability 1 always spawns.
    """

    def __init__(self, probability: float = 0.1, luck_fn: LuckFunction = luck):
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Spawn probability must be within [0, 1] (got {probability})")
        self.probability = probability
        self._luck = luck_fn

    def roll(self, cell: Cell) -> float:
        return self._luck(spawn_key(cell))

    def should_spawn(self, cell: Cell) -> bool:
        # Exact at the boundaries even for injected luck functions
        if self.probability <= 0.0:
            return False
        if self.probability >= 1.0:
            return True
        return self.roll(cell) < self.probability
