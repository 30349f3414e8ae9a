"""
Treasure Seeker - deterministic world-state engine for a location-based coin game.

Players walk a grid laid over real-world coordinates, collecting and
depositing coins in procedurally placed caches that persist across sessions.

No rendering, no global state, no required storage backend.
All dependencies injected by the caller.
"""

__version__ = "0.1.0"

# Main session object
from .session import GameSession, WindowListener

# Player
from .player import Direction, Player

# Persistence
from .persistence import (
    PersistenceStrategy,
    InMemoryPersistence,
    JsonPersistence,
    save_game,
    load_game,
)

# Schemas and settings
from .schemas import GameSettings, SavedGame
from .config import Config

# World core
from .world import (
    Cell,
    CellRegistry,
    CoordinateMapper,
    SpawnOracle,
    luck,
    Coin,
    CacheMemento,
    Cache,
    CacheStore,
    VisibilityWindow,
    VisibleCaches,
    WindowUpdate,
    describe_cache,
    render_ascii_window,
)

# Errors
from .errors import (
    TreasureSeekerError,
    UserActionInvalidError,
    NoSuchCoinError,
    NothingToDepositError,
    CacheNotVisibleError,
    PersistenceMalformedError,
    GeolocationUnavailableError,
)

__all__ = [
    # Session
    "GameSession",
    "WindowListener",
    "Direction",
    "Player",
    # Persistence
    "PersistenceStrategy",
    "InMemoryPersistence",
    "JsonPersistence",
    "save_game",
    "load_game",
    # Schemas / config
    "GameSettings",
    "SavedGame",
    "Config",
    # World
    "Cell",
    "CellRegistry",
    "CoordinateMapper",
    "SpawnOracle",
    "luck",
    "Coin",
    "CacheMemento",
    "Cache",
    "CacheStore",
    "VisibilityWindow",
    "VisibleCaches",
    "WindowUpdate",
    "describe_cache",
    "render_ascii_window",
    # Errors
    "TreasureSeekerError",
    "UserActionInvalidError",
    "NoSuchCoinError",
    "NothingToDepositError",
    "CacheNotVisibleError",
    "PersistenceMalformedError",
    "GeolocationUnavailableError",
]
