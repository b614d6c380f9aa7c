"""Shared pytest fixtures for derbysim tests."""

import logging
from collections.abc import Callable

import pytest

from derbysim.models import RaceConfig, RacerDescriptor
from derbysim.simulation import ManualFrameHost, RaceSimulator


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging so caplog keeps seeing derbysim records."""
    yield
    logger = logging.getLogger("derbysim")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config() -> RaceConfig:
    """Original game constants on a short track."""
    return RaceConfig(race_distance=50.0)


@pytest.fixture
def racers() -> list[RacerDescriptor]:
    return [
        RacerDescriptor(id="a", seed=0.1),
        RacerDescriptor(id="b", seed=0.5),
        RacerDescriptor(id="c", seed=0.9),
    ]


@pytest.fixture
def make_simulator(racers, config) -> Callable[..., RaceSimulator]:
    """Factory fixture for simulators, defaulting to the shared racers and config."""

    def _builder(
        racer_list: list[RacerDescriptor] | None = None,
        race_config: RaceConfig | None = None,
    ) -> RaceSimulator:
        return RaceSimulator(
            racer_list if racer_list is not None else racers,
            race_config if race_config is not None else config,
        )

    return _builder


@pytest.fixture
def host() -> ManualFrameHost:
    """Steady 60 Hz frame source."""
    return ManualFrameHost(frame_interval_ms=1000 / 60)
