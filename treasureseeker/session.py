"""
Game session: the context object that owns all world state.

Fully decoupled from rendering and input.
Storage is injected; settings are passed in, not read from globals.

Every public mutation runs to completion before returning:
1. Update player state (cell, history, inventory)
2. Regenerate the visibility window around the player
3. Persist player and cache store through the injected strategy
4. Notify listeners with a ``WindowUpdate``

Nothing yields control between those steps, so two events that arrive close
together (a button press and a geolocation fix) are applied one after the
other against a single authoritative player cell.
"""

import random
from typing import Callable, List, Optional

from .errors import (
    CacheNotVisibleError,
    GeolocationUnavailableError,
    NothingToDepositError,
    UserActionInvalidError,
)
from .logging_utils import log_deterministic, log_error, log_success
from .persistence import InMemoryPersistence, PersistenceStrategy, load_game, save_game
from .player import Direction, Player
from .schemas import GameSettings, SavedGame
from .world.caches import Cache, CacheStore
from .world.cells import Cell, CellRegistry, CoordinateMapper
from .world.oracle import SpawnOracle
from .world.schemas import Coin
from .world.window import VisibilityWindow, VisibleCaches, WindowUpdate

WindowListener = Callable[[WindowUpdate], None]


class GameSession:
    """
    One player's world: registry, mapper, oracle, cache store, window, player.

    Args:
        settings: Tunables; defaults match the original game.
        persistence: Storage backend. Defaults to ``InMemoryPersistence``.
        rng: Source for cache contents. Defaults to ``random.Random(settings.seed)``.
        oracle: Override the spawn oracle (e.g. with a pinned luck function).
        listeners: Callables notified with a ``WindowUpdate`` after each change.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        persistence: Optional[PersistenceStrategy] = None,
        *,
        rng: Optional[random.Random] = None,
        oracle: Optional[SpawnOracle] = None,
        listeners: Optional[List[WindowListener]] = None,
    ):
        self.settings = settings or GameSettings()
        self.persistence = persistence or InMemoryPersistence()
        self.registry = CellRegistry()
        self.mapper = CoordinateMapper(self.registry, self.settings.tile_size)
        self.oracle = oracle or SpawnOracle(self.settings.spawn_probability)
        self.store = CacheStore(
            self.oracle,
            self.registry,
            rng=rng or random.Random(self.settings.seed),
            min_coins=self.settings.min_coins,
            max_coins=self.settings.max_coins,
        )
        self.window = VisibilityWindow(self.store, self.registry)

        start = (self.settings.start_lat, self.settings.start_lng)
        self.player = Player(cell=self.mapper.to_cell(*start), history=[start])
        self.visible: VisibleCaches = {}
        self.listeners: List[WindowListener] = list(listeners or [])

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @classmethod
    def start(
        cls,
        settings: Optional[GameSettings] = None,
        persistence: Optional[PersistenceStrategy] = None,
        **kwargs,
    ) -> "GameSession":
        """Create a session, load any saved state, and show the first window."""

        session = cls(settings, persistence, **kwargs)
        session.persistence.initialize()
        session.load()
        return session

    def close(self) -> None:
        self.persistence.close()

    def add_listener(self, listener: WindowListener) -> None:
        self.listeners.append(listener)

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def move(self, direction: Direction | str) -> WindowUpdate:
        """Step one cell in ``direction`` and regenerate the window."""

        if isinstance(direction, str):
            direction = Direction.parse(direction)
        cell = self.player.move(direction, self.mapper)
        log_deterministic(f"[Move] {direction.name.lower()} to {cell.key}")
        return self._refresh()

    def set_location(self, lat: float, lng: float) -> WindowUpdate:
        """Place the player at a geographic point (e.g. a geolocation fix)."""

        cell = self.player.relocate(lat, lng, self.mapper)
        log_deterministic(f"[Move] located at ({lat:.6f}, {lng:.6f}) -> {cell.key}")
        return self._refresh()

    def on_geolocation_error(self, reason: Optional[str] = None) -> GeolocationUnavailableError:
        """Report a failed geolocation fix. State is left untouched."""

        error = GeolocationUnavailableError(reason)
        log_error(str(error))
        return error

    # ------------------------------------------------------------------
    # Cache interaction
    # ------------------------------------------------------------------

    def collect(self, cell: Cell, index: int) -> Coin:
        """Move the coin at ``index`` of the cache at ``cell`` into the inventory.

        Raises:
            CacheNotVisibleError: No cache at ``cell`` inside the current window.
            NoSuchCoinError: ``index`` out of range.
        """

        cache = self._visible_cache(cell)
        coin = self.store.collect(cache, index)
        self.player.add_coin(coin)
        log_deterministic(f"[Collect] {coin.coin_id} from {cell.key}")
        self._after_interaction()
        return coin

    def deposit(self, cell: Cell, coin_id: Optional[str] = None) -> Coin:
        """Move a coin from the inventory into the cache at ``cell``.

        Deposits ``coin_id`` if given, otherwise the most recently collected
        coin. The coin keeps its id.

        Raises:
            CacheNotVisibleError: No cache at ``cell`` inside the current window.
            NothingToDepositError: The inventory is empty.
            UserActionInvalidError: ``coin_id`` is not in the inventory.
        """

        cache = self._visible_cache(cell)
        if not self.player.inventory:
            raise NothingToDepositError()
        if coin_id is None:
            coin = self.player.inventory[-1]
        else:
            coin = self.player.find_coin(coin_id)
            if coin is None:
                raise UserActionInvalidError(f"Coin {coin_id} is not in your inventory")

        self.player.remove_coin(coin)
        self.store.deposit(cache, coin)
        log_deterministic(f"[Deposit] {coin.coin_id} into {cell.key}")
        self._after_interaction()
        return coin

    def reset(self) -> WindowUpdate:
        """Restore every cache to its original contents and empty the inventory.

        Location and movement history are kept.
        """

        self.store.reset_all()
        self.player.inventory = []
        log_success(f"[Reset] {len(self.store)} cache(s) restored")
        return self._refresh()

    def cache_at(self, cell: Cell) -> Optional[Cache]:
        return self.visible.get(cell)

    @property
    def inventory_count(self) -> int:
        return self.player.coin_count

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> SavedGame:
        return SavedGame(
            player_cell=(self.player.cell.i, self.player.cell.j),
            player_inventory=[coin.coin_id for coin in self.player.inventory],
            movement_history=list(self.player.history),
            cache_storage=self.store.serialize(),
            cache_originals=self.store.serialize_originals(),
        )

    def save(self) -> None:
        save_game(self.persistence, self.snapshot())

    def load(self, *, strict: bool = False) -> WindowUpdate:
        """Replace in-memory state with whatever the backend holds.

        Fields that are missing (first run) or malformed keep their defaults.
        The window is then regenerated around the loaded cell and listeners
        are notified.
        """

        saved = load_game(self.persistence, strict=strict)
        self.apply(saved)
        return self._refresh()

    def apply(self, saved: SavedGame) -> None:
        self.store.load(saved.cache_storage, saved.cache_originals)
        if saved.player_cell is not None:
            self.player.cell = self.registry.get_cell(*saved.player_cell)
        self.player.inventory = [Coin.parse(coin_id) for coin_id in saved.player_inventory]
        if saved.movement_history:
            self.player.history = list(saved.movement_history)
        elif saved.player_cell is not None:
            self.player.history = [self.mapper.to_lat_lng(self.player.cell)]
        self.visible = {}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _visible_cache(self, cell: Cell) -> Cache:
        cache = self.visible.get(cell)
        if cache is None:
            raise CacheNotVisibleError(cell_key=cell.key)
        return cache

    def _refresh(self) -> WindowUpdate:
        previous = self.visible
        center = self.player.cell
        radius = self.settings.visibility_radius
        self.visible = self.window.regenerate(center, radius)
        self.save()
        update = WindowUpdate.between(previous, center, radius, self.visible)
        self._notify(update)
        return update

    def _after_interaction(self) -> None:
        self.save()
        self._notify(
            WindowUpdate(
                center=self.player.cell,
                radius=self.settings.visibility_radius,
                caches=self.visible,
            )
        )

    def _notify(self, update: WindowUpdate) -> None:
        # Listeners are observers only; one failing must not undo a completed mutation
        for listener in self.listeners:
            try:
                listener(update)
            except Exception as exc:
                log_error(f"[Render] Listener failed: {exc}")
