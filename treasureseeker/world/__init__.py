"""World-state core: cells, spawning, caches and the visibility window."""

from .cells import Cell, CellRegistry, CoordinateMapper, LatLng
from .oracle import SpawnOracle, luck, spawn_key
from .schemas import CacheMemento, Coin
from .caches import Cache, CacheStore
from .window import VisibilityWindow, VisibleCaches, WindowUpdate
from .helpers import describe_cache, render_ascii_window

__all__ = [
    "Cell",
    "CellRegistry",
    "CoordinateMapper",
    "LatLng",
    "SpawnOracle",
    "luck",
    "spawn_key",
    "CacheMemento",
    "Coin",
    "Cache",
    "CacheStore",
    "VisibilityWindow",
    "VisibleCaches",
    "WindowUpdate",
    "describe_cache",
    "render_ascii_window",
]
