"""
Pydantic schemas for Treasure Seeker sessions.

Design Philosophy:
- ``GameSettings`` is the only place components get tunables from; nothing
  reads environment variables or globals directly.
- ``SavedGame`` mirrors the persisted key/value layout one field per key, so
  a malformed key can be replaced by its default without touching the rest.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .config import Config
from .world.schemas import CacheTable, CoinId

# Persisted key names (external contract)
KEY_PLAYER_CELL = "playerCell"
KEY_PLAYER_INVENTORY = "playerInventory"
KEY_MOVEMENT_HISTORY = "movementHistory"
KEY_CACHE_STORAGE = "cacheStorage"
KEY_CACHE_ORIGINALS = "cacheOriginals"


class GameSettings(BaseModel):
    """Tunables for one game session."""

    model_config = ConfigDict(frozen=True)

    tile_size: float = Field(1e-4, gt=0, description="Cell edge length in degrees")
    spawn_probability: float = Field(0.1, ge=0.0, le=1.0)
    visibility_radius: int = Field(8, ge=0, description="Cells searched in each direction")
    min_coins: int = Field(1, ge=0)
    max_coins: int = Field(5, ge=0)
    start_lat: float = 36.98949379578401
    start_lng: float = -122.06277128548504
    seed: Optional[int] = Field(None, description="Seed for cache contents; None is nondeterministic")

    @model_validator(mode="after")
    def _check_coin_range(self) -> "GameSettings":
        if self.max_coins < self.min_coins:
            raise ValueError(
                f"max_coins ({self.max_coins}) must be >= min_coins ({self.min_coins})"
            )
        return self

    def with_overrides(self, **overrides) -> "GameSettings":
        """Return a copy with ``overrides`` applied and validated.

        Raises:
            ValidationError: If an override breaks a field constraint.
        """
        if not overrides:
            return self
        return type(self).model_validate({**self.model_dump(), **overrides})

    @classmethod
    def from_config(cls) -> "GameSettings":
        """Build settings from environment-backed ``Config``."""
        Config.validate()
        return cls(
            tile_size=Config.TILE_SIZE,
            spawn_probability=Config.SPAWN_PROBABILITY,
            visibility_radius=Config.VISIBILITY_RADIUS,
            min_coins=Config.MIN_COINS,
            max_coins=Config.MAX_COINS,
            start_lat=Config.START_LAT,
            start_lng=Config.START_LNG,
            seed=Config.SEED,
        )


class SavedGame(BaseModel):
    """Durable form of the player and the whole cache store.

    Field aliases are the storage keys. ``player_cell`` is None when no save
    exists, in which case the session starts at the configured location.
    """

    model_config = ConfigDict(populate_by_name=True)

    player_cell: Optional[Tuple[int, int]] = Field(None, alias=KEY_PLAYER_CELL)
    player_inventory: List[CoinId] = Field(default_factory=list, alias=KEY_PLAYER_INVENTORY)
    movement_history: List[Tuple[float, float]] = Field(
        default_factory=list, alias=KEY_MOVEMENT_HISTORY
    )
    cache_storage: CacheTable = Field(default_factory=dict, alias=KEY_CACHE_STORAGE)
    cache_originals: CacheTable = Field(default_factory=dict, alias=KEY_CACHE_ORIGINALS)


# Validators for loading one key at a time
FIELD_ADAPTERS: Dict[str, Tuple[str, TypeAdapter]] = {
    KEY_PLAYER_CELL: ("player_cell", TypeAdapter(Tuple[int, int])),
    KEY_PLAYER_INVENTORY: ("player_inventory", TypeAdapter(List[CoinId])),
    KEY_MOVEMENT_HISTORY: ("movement_history", TypeAdapter(List[Tuple[float, float]])),
    KEY_CACHE_STORAGE: ("cache_storage", TypeAdapter(CacheTable)),
    KEY_CACHE_ORIGINALS: ("cache_originals", TypeAdapter(CacheTable)),
}
