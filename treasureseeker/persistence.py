"""
PersistenceStrategy interface for pluggable key/value storage backends.

This module provides the abstract PersistenceStrategy interface, two concrete
implementations, and the helpers that map a ``SavedGame`` onto storage keys.

Core principle: "The game must run without any storage backend (in-memory default)."

Two included implementations:
1. InMemoryPersistence - Dict-based storage, data lost on exit (testing, prototyping)
2. JsonPersistence - One human-readable JSON document on disk (local play)

Storage model:
- Flat string keys to string values, the same shape as browser localStorage
- Each saved field lives under its own key and holds a JSON document
- A missing key means "first run" for that field; a malformed key falls back
  to the field's default and is reported through ``log_error``

Synchronous design rationale:
- Every game mutation must finish (cell update, history, regeneration, save)
  before another event is handled, so saves never yield control
- Storage is local and small (one document per session)

Usage pattern:
    persistence = JsonPersistence("treasure_save.json")
    persistence.initialize()

    save_game(persistence, saved)
    restored = load_game(persistence)

    persistence.close()
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from .errors import PersistenceMalformedError
from .logging_utils import log_deterministic, log_error
from .schemas import FIELD_ADAPTERS, SavedGame


class PersistenceStrategy(ABC):
    """Abstract base class for key/value game storage.

    Method categories:
    1. Lifecycle: initialize(), close()
    2. Values: load(), save(), delete(), save_many()

    Concrete implementations:
    - InMemoryPersistence: Fast, ephemeral, no dependencies (testing/prototyping)
    - JsonPersistence: Single JSON file, easy to inspect and back up
    - Custom: Implement this interface for browser storage bridges, SQLite, etc.

    Design pattern: Strategy pattern - behavior varies (memory vs file) but the
    interface stays the same. GameSession depends on the interface only.
    """

    @abstractmethod
    def initialize(self) -> None:
        """
        Prepare the backend (open files, read existing data).

        Called once before the session loads its state.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Release backend resources.

        Called once when the session ends. Must not discard saved data.
        """
        pass

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """
        Return the value stored under ``key``.

        Returns:
            The stored string, or None if the key was never saved
        """
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """
        Store ``value`` under ``key``, replacing any previous value.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Remove ``key``. Safe to call for keys that do not exist.
        """
        pass

    def save_many(self, values: Mapping[str, Optional[str]]) -> None:
        """
        Apply a batch of writes; a None value deletes its key.

        The default applies keys one by one. Backends that can commit a batch
        in one step should override this.
        """
        for key, value in values.items():
            if value is None:
                self.delete(key)
            else:
                self.save(key, value)


class InMemoryPersistence(PersistenceStrategy):
    """In-memory persistence using a Python dict (no files).

    Perfect for:
    - Unit testing (fast, isolated, no cleanup needed)
    - Embedding the core in a host that persists elsewhere

    NOT suitable for:
    - Persistence across restarts (data lost on exit)
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def initialize(self) -> None:
        """No-op for in-memory implementation."""
        pass

    def close(self) -> None:
        """
        No-op: values are kept so callers can inspect them after a session.
        """
        pass

    def load(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def save(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class JsonPersistence(PersistenceStrategy):
    """File-based persistence storing every key in one JSON document.

    File layout:
    ```
    {
      "playerCell": "[369894, -1220628]",
      "playerInventory": "[\\"369894:-1220628#0\\"]",
      ...
    }
    ```

    Values stay JSON strings inside the document so the file is a faithful
    image of the key/value contract. Writes go to a sibling temp file that is
    then renamed over the original. ``save_many`` flushes once per batch, so a
    ``save_game`` lands on disk whole or not at all.
    A document that cannot be parsed is reported and treated as empty.
    """

    def __init__(self, path: Path | str = "treasure_save.json"):
        self.path = Path(path)
        self.values: Dict[str, str] = {}

    def initialize(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.values = {}
            return

        try:
            payload: Any = json.loads(self.path.read_text("utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            log_error(f"[Persistence] Could not read {self.path}: {exc}; starting fresh")
            self.values = {}
            return

        if not isinstance(payload, dict):
            log_error(f"[Persistence] {self.path} is not a JSON object; starting fresh")
            self.values = {}
            return
        self.values = {str(k): v for k, v in payload.items() if isinstance(v, str)}

    def close(self) -> None:
        # Every save already hit the disk
        return None

    def load(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def save(self, key: str, value: str) -> None:
        self.values[key] = value
        self._flush()

    def delete(self, key: str) -> None:
        if self.values.pop(key, None) is not None:
            self._flush()

    def save_many(self, values: Mapping[str, Optional[str]]) -> None:
        for key, value in values.items():
            if value is None:
                self.values.pop(key, None)
            else:
                self.values[key] = value
        self._flush()

    def _flush(self) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(self.values, indent=2), "utf-8")
        os.replace(tmp_path, self.path)


def save_game(persistence: PersistenceStrategy, saved: SavedGame) -> None:
    """Write every field of ``saved`` under its storage key."""

    payload = saved.model_dump(mode="json", by_alias=True)
    persistence.save_many(
        {key: None if value is None else json.dumps(value) for key, value in payload.items()}
    )
    log_deterministic(f"[Persistence] Saved {len(payload)} key(s)")


def load_game(persistence: PersistenceStrategy, *, strict: bool = False) -> SavedGame:
    """Read a ``SavedGame`` back, one key at a time.

    Missing keys keep their defaults. Malformed keys are logged and keep their
    defaults too, unless ``strict`` is set.

    Raises:
        PersistenceMalformedError: In strict mode, for the first malformed key.
    """

    values: Dict[str, Any] = {}
    for key, (field_name, adapter) in FIELD_ADAPTERS.items():
        raw = persistence.load(key)
        if raw is None:
            continue
        try:
            values[field_name] = adapter.validate_json(raw)
        except ValidationError as exc:
            if strict:
                raise PersistenceMalformedError(key=key, underlying=exc) from exc
            log_error(f"[Persistence] Ignoring malformed '{key}': {exc.error_count()} error(s)")
    return SavedGame(**values)
