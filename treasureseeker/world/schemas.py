"""Pydantic schemas for world content.

Coins and cache mementos are immutable values. A cache's live coin list is
mutable (see ``caches.py``), but every persisted or restored form goes
through these frozen models so snapshots can be shared without copying.
"""

from __future__ import annotations

import re
from typing import Annotated, Dict, Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

COIN_ID_PATTERN = r"^(-?\d+):(-?\d+)#(\d+)$"
CELL_KEY_PATTERN = r"^(-?\d+):(-?\d+)$"

_COIN_ID_RE = re.compile(COIN_ID_PATTERN)

# Serialized forms used by persisted snapshots
CoinId = Annotated[str, StringConstraints(pattern=COIN_ID_PATTERN)]
CellKey = Annotated[str, StringConstraints(pattern=CELL_KEY_PATTERN)]
CacheTable = Dict[CellKey, List[CoinId]]


class Coin(BaseModel):
    """A collectible token, identified by its origin cell and serial."""

    model_config = ConfigDict(frozen=True)

    i: int = Field(..., description="Row of the cell the coin was minted in")
    j: int = Field(..., description="Column of the cell the coin was minted in")
    serial: int = Field(..., ge=0, description="Mint order within the origin cache")

    @property
    def coin_id(self) -> str:
        return f"{self.i}:{self.j}#{self.serial}"

    @property
    def origin_key(self) -> str:
        return f"{self.i}:{self.j}"

    @classmethod
    def parse(cls, coin_id: str) -> Coin:
        """Parse ``"{i}:{j}#{serial}"`` back into a coin.

        Raises:
            ValueError: If the string is not a coin id.
        """
        match = _COIN_ID_RE.match(coin_id) if isinstance(coin_id, str) else None
        if match is None:
            raise ValueError(f"Malformed coin id: {coin_id!r}")
        i, j, serial = match.groups()
        return cls(i=int(i), j=int(j), serial=int(serial))

    def __str__(self) -> str:
        return self.coin_id


class CacheMemento(BaseModel):
    """Immutable snapshot of one cache's coin list."""

    model_config = ConfigDict(frozen=True)

    cell_key: str = Field(..., pattern=CELL_KEY_PATTERN)
    coins: Tuple[Coin, ...] = Field(default_factory=tuple)

    def to_ids(self) -> List[str]:
        return [coin.coin_id for coin in self.coins]

    @classmethod
    def from_ids(cls, cell_key: str, coin_ids: Iterable[str]) -> CacheMemento:
        return cls(cell_key=cell_key, coins=tuple(Coin.parse(cid) for cid in coin_ids))
