"""Grid cells and the geographic coordinate mapping.

The world is a flat, unbounded grid of square cells addressed by integer
``(i, j)`` offsets: ``i`` grows northward with latitude, ``j`` grows eastward
with longitude. Cells are interned by ``CellRegistry`` so every reference to
the same coordinates shares one instance for the lifetime of a session.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .schemas import CELL_KEY_PATTERN

_CELL_KEY_RE = re.compile(CELL_KEY_PATTERN)

LatLng = Tuple[float, float]


@dataclass(frozen=True)
class Cell:
    """A canonical grid square. Obtain instances from ``CellRegistry``."""

    i: int
    j: int

    @property
    def key(self) -> str:
        return f"{self.i}:{self.j}"

    def __str__(self) -> str:
        return self.key


@dataclass
class CellRegistry:
    """Flyweight table of cells keyed by coordinate pair.

    The table only grows; cells are never evicted during a session.
    """

    _cells: Dict[Tuple[int, int], Cell] = field(default_factory=dict)

    def get_cell(self, i: int, j: int) -> Cell:
        coords = (int(i), int(j))
        cell = self._cells.get(coords)
        if cell is None:
            cell = Cell(*coords)
            self._cells[coords] = cell
        return cell

    def parse_key(self, key: str) -> Cell:
        """Resolve a persisted ``"{i}:{j}"`` key to its canonical cell."""
        match = _CELL_KEY_RE.match(key) if isinstance(key, str) else None
        if match is None:
            raise ValueError(f"Malformed cell key: {key!r}")
        return self.get_cell(int(match.group(1)), int(match.group(2)))

    def __contains__(self, coords: object) -> bool:
        return coords in self._cells

    def __len__(self) -> int:
        return len(self._cells)


class CoordinateMapper:
    """Converts latitude/longitude to cells and back with a fixed tile size."""

    def __init__(self, registry: CellRegistry, tile_size: float = 1e-4):
        if not tile_size > 0:
            raise ValueError(f"tile_size must be positive (got {tile_size})")
        self.registry = registry
        self.tile_size = tile_size

    def to_cell(self, lat: float, lng: float) -> Cell:
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise ValueError(f"Coordinates must be finite (got {lat}, {lng})")
        # floor on both axes so negative coordinates land in the cell to the south/west
        i = math.floor(lat / self.tile_size)
        j = math.floor(lng / self.tile_size)
        return self.registry.get_cell(i, j)

    def to_lat_lng(self, cell: Cell) -> LatLng:
        """Return the south-west anchor point of ``cell``."""
        return (cell.i * self.tile_size, cell.j * self.tile_size)

    def cell_bounds(self, cell: Cell) -> Tuple[LatLng, LatLng]:
        """Return ``(south_west, north_east)`` corners of ``cell``."""
        south, west = self.to_lat_lng(cell)
        return (south, west), ((cell.i + 1) * self.tile_size, (cell.j + 1) * self.tile_size)
