"""Unit tests for coin, memento and settings schemas."""

import pytest
from pydantic import ValidationError

from treasureseeker.config import Config
from treasureseeker.schemas import GameSettings
from treasureseeker.world import CacheMemento, Coin


def test_coin_id_format_and_parse():
    coin = Coin(i=-3, j=14, serial=2)

    assert coin.coin_id == "-3:14#2"
    assert str(coin) == "-3:14#2"
    assert coin.origin_key == "-3:14"
    assert Coin.parse("-3:14#2") == coin


@pytest.mark.parametrize("text", ["3:14", "3,14#2", "a:b#c", "3:14#-1", ""])
def test_coin_parse_rejects_malformed(text):
    with pytest.raises(ValueError):
        Coin.parse(text)


def test_coins_are_hashable_values():
    assert {Coin(i=1, j=2, serial=3), Coin(i=1, j=2, serial=3)} == {Coin(i=1, j=2, serial=3)}
    with pytest.raises(ValidationError):
        Coin(i=0, j=0, serial=-1)


def test_memento_ids_round_trip():
    memento = CacheMemento.from_ids("5:6", ["5:6#0", "1:1#4"])

    assert memento.coins == (Coin(i=5, j=6, serial=0), Coin(i=1, j=1, serial=4))
    assert memento.to_ids() == ["5:6#0", "1:1#4"]
    with pytest.raises(ValidationError):
        CacheMemento(cell_key="5-6")


def test_settings_defaults_match_game_constants():
    settings = GameSettings()

    assert settings.tile_size == 1e-4
    assert settings.spawn_probability == 0.1
    assert settings.visibility_radius == 8
    assert (settings.min_coins, settings.max_coins) == (1, 5)
    assert (settings.start_lat, settings.start_lng) == (36.98949379578401, -122.06277128548504)


@pytest.mark.parametrize(
    "overrides",
    [
        {"tile_size": 0},
        {"spawn_probability": 1.01},
        {"visibility_radius": -1},
        {"min_coins": 4, "max_coins": 2},
    ],
)
def test_settings_validation(overrides):
    with pytest.raises(ValidationError):
        GameSettings(**overrides)


def test_settings_overrides_are_validated():
    settings = GameSettings(seed=1)

    updated = settings.with_overrides(seed=5, visibility_radius=2)
    assert (updated.seed, updated.visibility_radius) == (5, 2)
    assert settings.with_overrides() is settings

    with pytest.raises(ValidationError):
        settings.with_overrides(visibility_radius=-1)
    with pytest.raises(ValidationError):
        settings.with_overrides(min_coins=9)


def test_settings_from_config(monkeypatch):
    monkeypatch.setattr(Config, "SPAWN_PROBABILITY", 0.25)
    monkeypatch.setattr(Config, "VISIBILITY_RADIUS", 3)
    monkeypatch.setattr(Config, "SEED", 99)

    settings = GameSettings.from_config()

    assert settings.spawn_probability == 0.25
    assert settings.visibility_radius == 3
    assert settings.seed == 99


def test_config_validate_rejects_bad_values(monkeypatch):
    monkeypatch.setattr(Config, "MIN_COINS", 6)
    with pytest.raises(ValueError):
        Config.validate()


def test_config_display_lists_values():
    text = Config.display()
    assert "Spawn probability" in text
    assert "Visibility radius" in text
