"""Tests for settings loading and validation."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from neonrun.settings import (
    DisplaySettings,
    GameplaySettings,
    PhysicsSettings,
    Settings,
)


class TestDefaults:
    def test_values(self, settings: Settings) -> None:
        assert settings.display.width == 960
        assert settings.physics.gravity == 0.8
        assert settings.physics.jump_force == -15
        assert settings.gameplay.min_spacing == 300
        assert settings.effects.shake_decay == 0.9
        assert settings.seed is None

    def test_records_path(self, settings: Settings) -> None:
        assert settings.records_path == settings.data_dir / "records.json"


class TestEnvironment:
    def test_nested_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEONRUN_DISPLAY__WIDTH", "1280")
        monkeypatch.setenv("NEONRUN_SEED", "99")
        settings = Settings(_env_file=None)
        assert settings.display.width == 1280
        assert settings.seed == 99

    def test_env_file(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("NEONRUN_DEBUG=true\nNEONRUN_GAMEPLAY__MAX_SPEED=12\n")
        settings = Settings(_env_file=env_file)
        assert settings.debug
        assert settings.gameplay.max_speed == 12


class TestValidation:
    def test_inverted_spacing(self) -> None:
        with pytest.raises(ValidationError):
            GameplaySettings(min_spacing=600, max_spacing=500)

    def test_inverted_air_band(self) -> None:
        with pytest.raises(ValidationError):
            GameplaySettings(air_min_y=300, air_max_y=200)

    def test_hitbox_swallowing_player(self) -> None:
        with pytest.raises(ValidationError):
            PhysicsSettings(player_size=10, hitbox_inset=5)

    def test_zero_size_display(self) -> None:
        with pytest.raises(ValidationError):
            DisplaySettings(width=0)

    def test_ground_leaves_no_room(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, physics=PhysicsSettings(ground_height=520))
