"""Tests for configuration and racer models."""

import logging

import numpy as np
import pytest
from pydantic import ValidationError

from derbysim.models import RaceConfig, RacerDescriptor, build_lineup
from derbysim.models.lineup import DEFAULT_JOCKEY, PLAYER_ID
from derbysim.simulation import RaceSimulator


def test_config_defaults_match_original_game():
    config = RaceConfig()
    assert config.race_distance == 400.0
    assert config.max_speed == 20.0
    assert config.acceleration_factor == 2.0
    assert config.fixed_time_step == pytest.approx(1 / 60)
    assert config.broadcast_interval_ms == 100.0
    assert config.clock_step == 0.1
    assert config.min_racers == 1


@pytest.mark.parametrize(
    "field, value",
    [
        ("race_distance", 0.0),
        ("max_speed", -1.0),
        ("acceleration_factor", 0.0),
        ("fixed_time_step", 2.0),
        ("clock_step", 0.0),
        ("min_racers", 0),
    ],
)
def test_config_rejects_out_of_range(field, value):
    with pytest.raises(ValidationError):
        RaceConfig(**{field: value})


def test_config_from_toml_race_table(tmp_path):
    path = tmp_path / "race.toml"
    path.write_text("[race]\nrace_distance = 120.0\nmin_racers = 2\n")
    config = RaceConfig.from_toml(path)
    assert config.race_distance == 120.0
    assert config.min_racers == 2
    assert config.max_speed == 20.0


def test_config_from_toml_top_level(tmp_path):
    path = tmp_path / "race.toml"
    path.write_text("max_speed = 15.5\n")
    assert RaceConfig.from_toml(str(path)).max_speed == 15.5


def test_config_from_toml_validates(tmp_path):
    path = tmp_path / "race.toml"
    path.write_text("[race]\nmax_speed = -3\n")
    with pytest.raises(ValidationError):
        RaceConfig.from_toml(path)


def test_descriptor_requires_id():
    with pytest.raises(ValidationError):
        RacerDescriptor(id="", seed=0.5)


@pytest.mark.parametrize("seed", [float("nan"), float("inf")])
def test_descriptor_requires_finite_seed(seed):
    with pytest.raises(ValidationError):
        RacerDescriptor(id="a", seed=seed)


def test_display_name_falls_back_to_id():
    assert RacerDescriptor(id="a", seed=0.1).display_name == "a"
    assert RacerDescriptor(id="a", seed=0.1, label="Ace").display_name == "Ace"


def test_lineup_has_player_and_opponents():
    racers = build_lineup(player_name="Sam", rng=np.random.default_rng(1))
    assert [r.id for r in racers] == [PLAYER_ID, "ai-0", "ai-1", "ai-2"]
    assert racers[0].label == f"Sam ({DEFAULT_JOCKEY})"
    assert racers[1].label == "Rival (Gallop Ghost)"
    assert all(0.0 <= r.seed < 1.0 for r in racers)
    assert len({r.seed for r in racers}) == len(racers)


def test_lineup_is_reproducible():
    first = build_lineup(rng=np.random.default_rng(9))
    second = build_lineup(rng=np.random.default_rng(9))
    assert [r.seed for r in first] == [r.seed for r in second]


def test_lineup_with_extra_opponents():
    racers = build_lineup(opponents=5, rng=np.random.default_rng(2))
    assert len(racers) == 6
    assert racers[-1].label == "Opponent 5"


def test_lineup_uses_name_provider():
    racers = build_lineup(player_name="Sam", name_provider=lambda name: f"{name}'s Comet")
    assert racers[0].label == "Sam (Sam's Comet)"


def test_failed_name_provider_does_not_block_race(caplog):
    def broken(name):
        raise ConnectionError("name service unavailable")

    with caplog.at_level(logging.WARNING, logger="derbysim"):
        racers = build_lineup(player_name="Sam", name_provider=broken, rng=np.random.default_rng(4))

    assert racers[0].label == f"Sam ({DEFAULT_JOCKEY})"
    assert "name service unavailable" in caplog.text

    result = RaceSimulator(racers, RaceConfig(race_distance=20.0)).run()
    assert set(result.finish_times) == {r.id for r in racers}
