"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested sections can be overridden with a double underscore, e.g.
``NEONRUN_DISPLAY__WIDTH=1280``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseModel):
    """Window and frame settings."""

    width: int = Field(default=960, ge=1)
    height: int = Field(default=540, ge=1)
    fps: int = Field(default=60, ge=1)
    title: str = "NEON RUN"
    resizable: bool = True


class PhysicsSettings(BaseModel):
    """Player physics, in units per tick."""

    gravity: float = 0.8
    jump_force: float = -15.0
    player_size: int = Field(default=40, ge=1)
    player_x: float = 100.0
    ground_height: int = Field(default=100, ge=0)
    hitbox_inset: float = Field(default=2.0, ge=0.0)
    spin_rate: float = 0.15  # radians per airborne tick

    @model_validator(mode="after")
    def _check_hitbox(self) -> "PhysicsSettings":
        if self.hitbox_inset * 2 >= self.player_size:
            raise ValueError("hitbox_inset leaves no collision area")
        return self


class GameplaySettings(BaseModel):
    """Pace, scoring and obstacle generation."""

    base_speed: float = Field(default=5.0, gt=0.0)
    max_speed: float = Field(default=10.0, gt=0.0)
    speed_ramp: float = Field(default=500.0, gt=0.0)  # distance per +1 speed
    distance_rate: float = Field(default=0.1, gt=0.0)
    score_divisor: float = Field(default=10.0, gt=0.0)

    min_spacing: float = Field(default=300.0, gt=0.0)
    max_spacing: float = Field(default=500.0, gt=0.0)
    first_spawn_offset: float = 200.0
    despawn_margin: float = 100.0
    draw_margin: float = 200.0
    air_min_y: float = 50.0
    air_max_y: float = 200.0

    # Continuous jumping while the jump input is held
    hold_to_jump: bool = True
    hold_interval_ms: int = Field(default=50, ge=1)

    @model_validator(mode="after")
    def _check_ranges(self) -> "GameplaySettings":
        if self.min_spacing > self.max_spacing:
            raise ValueError("min_spacing must not exceed max_spacing")
        if self.air_min_y > self.air_max_y:
            raise ValueError("air_min_y must not exceed air_max_y")
        if self.base_speed > self.max_speed:
            raise ValueError("base_speed must not exceed max_speed")
        return self


class EffectSettings(BaseModel):
    """Cosmetic feedback tuning."""

    shake_decay: float = Field(default=0.9, gt=0.0, lt=1.0)
    death_shake: float = Field(default=20.0, ge=0.0)
    death_particles: int = Field(default=50, ge=0)
    death_spread: float = Field(default=20.0, ge=0.0)
    trail_capacity: int = Field(default=20, ge=1)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEONRUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Where best score/distance are kept
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".neonrun")

    # Fixed seed for reproducible runs (None = system entropy)
    seed: Optional[int] = None

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    gameplay: GameplaySettings = Field(default_factory=GameplaySettings)
    effects: EffectSettings = Field(default_factory=EffectSettings)

    @model_validator(mode="after")
    def _check_layout(self) -> "Settings":
        play_height = self.display.height - self.physics.ground_height
        if play_height < self.physics.player_size:
            raise ValueError(
                f"ground band leaves {play_height}px of air space, "
                f"player needs {self.physics.player_size}px"
            )
        return self

    @property
    def records_path(self) -> Path:
        """JSON file holding the high-water marks."""
        return self.data_dir / "records.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
