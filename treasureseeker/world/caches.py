"""Cache contents and the memento-backed cache store.

The store is the single owner of every ``Cache``. Alongside the live coin
lists it keeps two tables of immutable ``CacheMemento`` values:

- ``current``: the persisted form of each cache, re-recorded after every
  collect or deposit so a save always reflects the latest contents.
- ``originals``: the contents as first generated, captured exactly once per
  cell, before any player interaction. ``reset_all`` restores from here.

Cells the oracle rejects never get an entry. The oracle is deterministic, so
it rejects them again on every later visit and there is nothing to remember.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from ..errors import NoSuchCoinError
from ..logging_utils import log_deterministic
from .cells import Cell, CellRegistry
from .oracle import SpawnOracle
from .schemas import CacheMemento, Coin

SerializedCache = Union[CacheMemento, Iterable[str]]


@dataclass
class Cache:
    """The coin collection attached to one cell."""

    cell: Cell
    coins: List[Coin] = field(default_factory=list)

    @property
    def coin_ids(self) -> List[str]:
        return [coin.coin_id for coin in self.coins]

    @property
    def count(self) -> int:
        return len(self.coins)


class CacheStore:
    """Durable mapping from cell to cache, with lazy spawning.

    Args:
        oracle: Decides which cells host a cache.
        registry: Canonicalizes cells when loading persisted keys.
        rng: Source for cache sizes. Pass a seeded ``random.Random`` for
            reproducible contents; existence never depends on it.
        min_coins, max_coins: Inclusive range for the size of a new cache.
    """

    def __init__(
        self,
        oracle: SpawnOracle,
        registry: CellRegistry,
        *,
        rng: Optional[random.Random] = None,
        min_coins: int = 1,
        max_coins: int = 5,
    ):
        if min_coins < 0 or max_coins < min_coins:
            raise ValueError(f"Invalid coin range {min_coins}..{max_coins}")
        self.oracle = oracle
        self.registry = registry
        self.rng = rng or random.Random()
        self.min_coins = min_coins
        self.max_coins = max_coins
        self._caches: Dict[str, Cache] = {}
        self._current: Dict[str, CacheMemento] = {}
        self._originals: Dict[str, CacheMemento] = {}

    # ------------------------------------------------------------------
    # Lookup and lazy creation
    # ------------------------------------------------------------------

    def get(self, cell: Cell) -> Optional[Cache]:
        return self._caches.get(cell.key)

    def ensure(self, cell: Cell) -> Optional[Cache]:
        """Return the cache at ``cell``, spawning it on first visit.

        Returns None when the oracle rejects the cell; no entry is created.
        """

        cache = self._caches.get(cell.key)
        if cache is not None:
            return cache
        if not self.oracle.should_spawn(cell):
            return None

        # Size is rolled once here; the oracle only gates existence
        count = self.rng.randint(self.min_coins, self.max_coins)
        cache = Cache(cell=cell, coins=[Coin(i=cell.i, j=cell.j, serial=n) for n in range(count)])
        self._caches[cell.key] = cache

        memento = self.snapshot(cache)
        self._originals[cell.key] = memento
        self._current[cell.key] = memento
        log_deterministic(f"[Spawn] Cache at {cell.key} with {count} coin(s)")
        return cache

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def collect(self, cache: Cache, index: int) -> Coin:
        """Remove and return the coin at ``index``.

        Raises:
            NoSuchCoinError: If ``index`` is out of range. The cache is unchanged.
        """

        if not 0 <= index < len(cache.coins):
            raise NoSuchCoinError(cell_key=cache.cell.key, index=index, available=len(cache.coins))
        coin = cache.coins.pop(index)
        self._record(cache)
        return coin

    def deposit(self, cache: Cache, coin: Coin) -> None:
        """Append ``coin`` to ``cache``. The coin keeps its original id."""

        cache.coins.append(coin)
        self._record(cache)

    def reset_all(self, originals: Optional[Mapping[str, SerializedCache]] = None) -> None:
        """Restore every cache to its originally generated contents.

        Args:
            originals: Mapping of cell key to original contents. Defaults to
                the originals captured by this store at spawn time.
        """

        if originals is not None:
            for key, serialized in originals.items():
                self._originals[key] = self._as_memento(key, serialized)

        for key, cache in self._caches.items():
            original = self._originals.get(key)
            if original is None:
                continue
            cache.coins = list(original.coins)
            self._current[key] = original

    # ------------------------------------------------------------------
    # Mementos
    # ------------------------------------------------------------------

    def snapshot(self, cache: Cache) -> CacheMemento:
        return CacheMemento(cell_key=cache.cell.key, coins=tuple(cache.coins))

    def restore(self, cell: Cell, serialized: SerializedCache) -> Cache:
        """Install ``serialized`` contents at ``cell`` without re-rolling anything.

        An existing cache object is updated in place so references held by
        renderers stay valid. A cell restored for the first time also takes
        these contents as its original when none were recorded.
        """

        memento = self._as_memento(cell.key, serialized)
        cache = self._caches.get(cell.key)
        if cache is None:
            cache = Cache(cell=cell)
            self._caches[cell.key] = cache
        cache.coins = list(memento.coins)
        self._current[cell.key] = memento
        self._originals.setdefault(cell.key, memento)
        return cache

    def original(self, cell: Cell) -> Optional[CacheMemento]:
        return self._originals.get(cell.key)

    def serialize(self) -> Dict[str, List[str]]:
        """Current contents as ``{"i:j": [coin_id, ...]}``."""
        return {key: memento.to_ids() for key, memento in self._current.items()}

    def serialize_originals(self) -> Dict[str, List[str]]:
        return {key: memento.to_ids() for key, memento in self._originals.items()}

    def load(
        self,
        current: Mapping[str, SerializedCache],
        originals: Optional[Mapping[str, SerializedCache]] = None,
    ) -> None:
        """Replace the whole store with persisted tables.

        Raises:
            ValueError: If a cell key or coin id cannot be parsed.
        """

        self._caches.clear()
        self._current.clear()
        self._originals.clear()
        for key, serialized in (originals or {}).items():
            self._originals[key] = self._as_memento(key, serialized)
        for key, serialized in current.items():
            self.restore(self.registry.parse_key(key), serialized)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def caches(self) -> Iterator[Tuple[Cell, Cache]]:
        for cache in self._caches.values():
            yield cache.cell, cache

    def __contains__(self, cell: object) -> bool:
        return isinstance(cell, Cell) and cell.key in self._caches

    def __len__(self) -> int:
        return len(self._caches)

    def _record(self, cache: Cache) -> None:
        self._current[cache.cell.key] = self.snapshot(cache)

    @staticmethod
    def _as_memento(key: str, serialized: SerializedCache) -> CacheMemento:
        if isinstance(serialized, CacheMemento):
            if serialized.cell_key == key:
                return serialized
            return CacheMemento(cell_key=key, coins=serialized.coins)
        return CacheMemento.from_ids(key, serialized)
