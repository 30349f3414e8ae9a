"""Visibility window: which caches exist around the player right now.

The window is the inclusive square of cells within ``radius`` rows and
columns of the player. It is rebuilt from scratch on every call; there is
no incremental bookkeeping to drift out of sync. Caches that fall outside
the window stay in the store, only renderers forget them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .caches import Cache, CacheStore
from .cells import Cell, CellRegistry

# Ordered south-west to north-east, row by row
VisibleCaches = Dict[Cell, Cache]


class VisibilityWindow:
    """Materializes the caches inside the square window around a cell."""

    def __init__(self, store: CacheStore, registry: CellRegistry):
        self.store = store
        self.registry = registry

    def cells_around(self, center: Cell, radius: int) -> Iterator[Cell]:
        if radius < 0:
            raise ValueError(f"radius cannot be negative (got {radius})")
        for di in range(-radius, radius + 1):
            for dj in range(-radius, radius + 1):
                yield self.registry.get_cell(center.i + di, center.j + dj)

    def regenerate(self, center: Cell, radius: int) -> VisibleCaches:
        """Return every cache inside the window, spawning new ones as needed.

        Calling this twice with the same center and an unchanged store returns
        the same caches in the same order.
        """

        visible: VisibleCaches = {}
        for cell in self.cells_around(center, radius):
            cache = self.store.get(cell)
            if cache is None:
                cache = self.store.ensure(cell)
            if cache is not None:
                visible[cell] = cache
        return visible


@dataclass
class WindowUpdate:
    """What a renderer needs after the window was regenerated.

    ``entered`` and ``exited`` list cells whose markers should be added or
    removed relative to the previous window; ``caches`` is the full new set.
    """

    center: Cell
    radius: int
    caches: VisibleCaches = field(default_factory=dict)
    entered: List[Cell] = field(default_factory=list)
    exited: List[Cell] = field(default_factory=list)

    @classmethod
    def between(
        cls,
        previous: Optional[VisibleCaches],
        center: Cell,
        radius: int,
        caches: VisibleCaches,
    ) -> WindowUpdate:
        previous = previous or {}
        entered = [cell for cell in caches if cell not in previous]
        exited = [cell for cell in previous if cell not in caches]
        return cls(center=center, radius=radius, caches=caches, entered=entered, exited=exited)
