"""
Treasure Seeker Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    APP_NAME: str = "Treasure Seeker"

    # Grid geometry (degrees per cell edge, ~11m at 1e-4)
    TILE_SIZE: float = float(os.getenv("TREASURE_TILE_SIZE", "1e-4"))

    # Procedural generation
    SPAWN_PROBABILITY: float = float(os.getenv("TREASURE_SPAWN_PROBABILITY", "0.1"))
    MIN_COINS: int = int(os.getenv("TREASURE_MIN_COINS", "1"))
    MAX_COINS: int = int(os.getenv("TREASURE_MAX_COINS", "5"))
    # Seed for cache contents only; cache existence never depends on it
    SEED: int | None = (
        int(os.environ["TREASURE_SEED"]) if os.getenv("TREASURE_SEED") else None
    )

    # Cells searched in each direction around the player
    VISIBILITY_RADIUS: int = int(os.getenv("TREASURE_VISIBILITY_RADIUS", "8"))

    # Default start location (used when no save exists)
    START_LAT: float = float(os.getenv("TREASURE_START_LAT", "36.98949379578401"))
    START_LNG: float = float(os.getenv("TREASURE_START_LNG", "-122.06277128548504"))

    # Persistence
    SAVE_PATH: Path = Path(os.getenv("TREASURE_SAVE_PATH", "treasure_save.json"))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are out of range."""
        if cls.TILE_SIZE <= 0:
            raise ValueError(
                f"TREASURE_TILE_SIZE must be positive (got {cls.TILE_SIZE})"
            )

        if not 0.0 <= cls.SPAWN_PROBABILITY <= 1.0:
            raise ValueError(
                "TREASURE_SPAWN_PROBABILITY must be between 0 and 1 "
                f"(got {cls.SPAWN_PROBABILITY})"
            )

        if cls.MIN_COINS < 0 or cls.MAX_COINS < cls.MIN_COINS:
            raise ValueError(
                "TREASURE_MIN_COINS/TREASURE_MAX_COINS must satisfy 0 <= min <= max "
                f"(got {cls.MIN_COINS}..{cls.MAX_COINS})"
            )

        if cls.VISIBILITY_RADIUS < 0:
            raise ValueError(
                f"TREASURE_VISIBILITY_RADIUS cannot be negative (got {cls.VISIBILITY_RADIUS})"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            f"{cls.APP_NAME} Configuration:",
            f"  Tile size: {cls.TILE_SIZE}°",
            f"  Spawn probability: {cls.SPAWN_PROBABILITY}",
            f"  Coins per cache: {cls.MIN_COINS}..{cls.MAX_COINS}",
            f"  Visibility radius: {cls.VISIBILITY_RADIUS} cells",
            f"  Start: ({cls.START_LAT}, {cls.START_LNG})",
            f"  Save file: {cls.SAVE_PATH}",
            f"  Seed: {cls.SEED if cls.SEED is not None else 'random'}",
        ]
        return "\n".join(lines)
