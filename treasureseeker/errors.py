"""
Exceptions raised by the Treasure Seeker core.

Nothing here is fatal. Invalid player actions are raised to the caller with
world state unchanged; persistence and geolocation problems are logged and
the session keeps running on its last valid (or default) state.
"""

from typing import Optional


class TreasureSeekerError(Exception):
    """Base class for all Treasure Seeker errors."""


class UserActionInvalidError(TreasureSeekerError):
    """Raised when a player action cannot be applied (state unchanged)."""


class NoSuchCoinError(UserActionInvalidError):
    """Raised when collecting an index that does not exist in the cache."""

    def __init__(self, *, cell_key: str, index: int, available: int) -> None:
        self.cell_key = cell_key
        self.index = index
        self.available = available
        super().__init__(
            f"No such coin: cache {cell_key} has {available} coin(s), "
            f"index {index} is out of range"
        )


class NothingToDepositError(UserActionInvalidError):
    """Raised when the player tries to deposit with an empty inventory."""

    def __init__(self) -> None:
        super().__init__("No coins to deposit!")


class CacheNotVisibleError(UserActionInvalidError):
    """Raised when the player interacts with a cache outside the visibility window."""

    def __init__(self, *, cell_key: str) -> None:
        self.cell_key = cell_key
        super().__init__(
            f"No visible cache at {cell_key}. Move closer before interacting with it."
        )


class PersistenceMalformedError(TreasureSeekerError):
    """Raised (in strict loads only) when a saved key cannot be parsed.

    Regular loads log the problem and fall back to the default for the
    affected field.
    """

    def __init__(self, *, key: str, underlying: Exception) -> None:
        self.key = key
        self.underlying = underlying
        message = (
            f"Saved value for '{key}' is malformed: {underlying}\n\n"
            "Remediation tips:\n"
            "  - Inspect the save file (TREASURE_SAVE_PATH) for hand edits\n"
            "  - Delete the key to start that part of the game fresh"
        )
        super().__init__(message)


class GeolocationUnavailableError(TreasureSeekerError):
    """Describes a failed geolocation fix. Logged, never raised by the session."""

    def __init__(self, reason: Optional[str] = None) -> None:
        self.reason = reason or "position unavailable"
        super().__init__(
            f"Geolocation unavailable: {self.reason}. "
            "Use the movement controls instead."
        )
