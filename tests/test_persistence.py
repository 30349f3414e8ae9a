"""Tests for storage backends and SavedGame key mapping."""

import json

import pytest

from treasureseeker.errors import PersistenceMalformedError
from treasureseeker.persistence import (
    InMemoryPersistence,
    JsonPersistence,
    load_game,
    save_game,
)
from treasureseeker.schemas import SavedGame


def make_saved_game() -> SavedGame:
    return SavedGame(
        player_cell=(369894, -1220628),
        player_inventory=["369894:-1220627#0"],
        movement_history=[(36.9894, -122.0628), (36.9895, -122.0628)],
        cache_storage={"369894:-1220627": ["369894:-1220627#1"]},
        cache_originals={"369894:-1220627": ["369894:-1220627#0", "369894:-1220627#1"]},
    )


def test_in_memory_persistence_round_trip():
    persistence = InMemoryPersistence()
    persistence.initialize()

    saved = make_saved_game()
    save_game(persistence, saved)

    assert json.loads(persistence.load("playerCell")) == [369894, -1220628]
    assert load_game(persistence) == saved

    persistence.delete("playerCell")
    persistence.delete("playerCell")
    assert persistence.load("playerCell") is None
    persistence.close()


def test_missing_keys_mean_first_run():
    loaded = load_game(InMemoryPersistence())

    assert loaded.player_cell is None
    assert loaded.player_inventory == []
    assert loaded.movement_history == []
    assert loaded.cache_storage == {}


def test_save_without_player_cell_removes_key():
    persistence = InMemoryPersistence({"playerCell": "[1, 1]"})
    save_game(persistence, SavedGame())

    assert persistence.load("playerCell") is None
    assert persistence.load("cacheStorage") == "{}"


@pytest.mark.parametrize(
    "key, raw",
    [
        ("playerCell", "[1, 2, 3]"),
        ("playerInventory", '["not-a-coin"]'),
        ("movementHistory", "[[1.0]]"),
        ("cacheStorage", '{"bad key": []}'),
        ("cacheOriginals", "{oops"),
    ],
)
def test_malformed_key_falls_back_for_that_field_only(key, raw, capsys):
    persistence = InMemoryPersistence()
    save_game(persistence, make_saved_game())
    persistence.save(key, raw)

    loaded = load_game(persistence)
    expected = make_saved_game().model_dump(by_alias=True)
    default = SavedGame().model_dump(by_alias=True)

    dumped = loaded.model_dump(by_alias=True)
    assert dumped[key] == default[key]
    for other in expected:
        if other != key:
            assert dumped[other] == expected[other]
    assert key in capsys.readouterr().out


def test_strict_load_raises():
    persistence = InMemoryPersistence({"playerInventory": "42"})

    with pytest.raises(PersistenceMalformedError) as excinfo:
        load_game(persistence, strict=True)
    assert excinfo.value.key == "playerInventory"


def test_json_persistence_round_trip(tmp_path):
    path = tmp_path / "saves" / "game.json"
    persistence = JsonPersistence(path)
    persistence.initialize()

    saved = make_saved_game()
    save_game(persistence, saved)
    persistence.close()

    document = json.loads(path.read_text("utf-8"))
    assert set(document) == {
        "playerCell",
        "playerInventory",
        "movementHistory",
        "cacheStorage",
        "cacheOriginals",
    }
    assert all(isinstance(value, str) for value in document.values())
    assert not path.with_name("game.json.tmp").exists()

    reopened = JsonPersistence(path)
    reopened.initialize()
    assert load_game(reopened) == saved


def test_json_persistence_delete(tmp_path):
    path = tmp_path / "game.json"
    persistence = JsonPersistence(path)
    persistence.initialize()
    persistence.save("a", "1")
    persistence.save("b", "2")
    persistence.delete("a")

    assert json.loads(path.read_text("utf-8")) == {"b": "2"}


def test_json_persistence_unreadable_file_starts_fresh(tmp_path, capsys):
    path = tmp_path / "game.json"
    path.write_text("definitely not json", "utf-8")

    persistence = JsonPersistence(path)
    persistence.initialize()

    assert persistence.load("playerCell") is None
    assert "starting fresh" in capsys.readouterr().out


def test_json_persistence_ignores_non_string_values(tmp_path):
    path = tmp_path / "game.json"
    path.write_text(json.dumps({"playerCell": [1, 2], "cacheStorage": "{}"}), "utf-8")

    persistence = JsonPersistence(path)
    persistence.initialize()

    assert persistence.load("playerCell") is None
    assert persistence.load("cacheStorage") == "{}"


def test_json_persistence_writes_a_save_in_one_flush(tmp_path):
    path = tmp_path / "game.json"
    persistence = JsonPersistence(path)
    persistence.initialize()
    persistence.save("playerCell", "[1, 1]")
    flushes = []
    real_flush = persistence._flush
    persistence._flush = lambda: (flushes.append(1), real_flush())

    save_game(persistence, make_saved_game().model_copy(update={"player_cell": None}))

    assert len(flushes) == 1
    document = json.loads(path.read_text("utf-8"))
    assert "playerCell" not in document
    assert set(document) == {"playerInventory", "movementHistory", "cacheStorage", "cacheOriginals"}


def test_default_save_many_saves_and_deletes():
    persistence = InMemoryPersistence({"stale": "1"})

    persistence.save_many({"stale": None, "fresh": "2"})

    assert persistence.values == {"fresh": "2"}
