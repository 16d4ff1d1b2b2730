"""Shared fixtures."""
from __future__ import annotations

import random

import pytest

from neonrun.game.geometry import Viewport
from neonrun.game.player import Player
from neonrun.game.simulation import Simulation
from neonrun.graphics.recording import RecordingSurface
from neonrun.settings import Settings
from neonrun.storage.records import MemoryRecordStore
from neonrun.ui.sink import RecordingSink


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Default settings, isolated from any .env file."""
    return Settings(_env_file=None, data_dir=tmp_path)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def viewport(settings: Settings) -> Viewport:
    return Viewport(
        settings.display.width,
        settings.display.height,
        settings.physics.ground_height,
    )


@pytest.fixture
def player(settings: Settings, viewport: Viewport) -> Player:
    return Player(settings.physics, viewport, settings.effects)


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface(960, 540)


@pytest.fixture
def store() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def sim(settings: Settings, store: MemoryRecordStore, sink: RecordingSink, rng: random.Random) -> Simulation:
    return Simulation(settings, store, sink, rng=rng)
