"""Player state: position, inventory and movement trail."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .world.cells import Cell, CoordinateMapper, LatLng
from .world.schemas import Coin


class Direction(Enum):
    """One-cell moves. Values are ``(di, dj)`` grid offsets."""

    NORTH = (1, 0)
    SOUTH = (-1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def offset(self) -> Tuple[int, int]:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Direction:
        """Accept ``"north"``, ``"n"``, ``"NORTH"`` and so on."""
        normalized = text.strip().lower()
        for direction in cls:
            name = direction.name.lower()
            if normalized in (name, name[0]):
                return direction
        raise ValueError(f"Unknown direction: {text!r}")


@dataclass
class Player:
    """The single player of a session.

    ``history`` is append-only: every move or location fix adds a point and
    nothing ever rewrites earlier entries.
    """

    cell: Cell
    inventory: List[Coin] = field(default_factory=list)
    history: List[LatLng] = field(default_factory=list)

    def move(self, direction: Direction, mapper: CoordinateMapper) -> Cell:
        """Step one cell and record the new cell's anchor point."""
        di, dj = direction.offset
        self.cell = mapper.registry.get_cell(self.cell.i + di, self.cell.j + dj)
        self.history.append(mapper.to_lat_lng(self.cell))
        return self.cell

    def relocate(self, lat: float, lng: float, mapper: CoordinateMapper) -> Cell:
        """Jump to the cell containing ``(lat, lng)`` and record the point."""
        self.cell = mapper.to_cell(lat, lng)
        self.history.append((lat, lng))
        return self.cell

    def add_coin(self, coin: Coin) -> None:
        self.inventory.append(coin)

    def remove_coin(self, coin: Coin) -> bool:
        """Remove one held copy of ``coin``. Returns False (and does nothing) otherwise."""
        if coin not in self.inventory:
            return False
        self.inventory.remove(coin)
        return True

    def find_coin(self, coin_id: str) -> Optional[Coin]:
        for coin in self.inventory:
            if coin.coin_id == coin_id:
                return coin
        return None

    @property
    def coin_count(self) -> int:
        return len(self.inventory)
