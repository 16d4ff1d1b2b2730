"""
UI notification sink.

The simulation never touches widgets directly. It tells a sink which
screen to show and which text fields changed; the host decides how that
looks.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional


class ScreenName(Enum):
    START_MENU = "start-menu"
    GAME_HUD = "game-hud"
    PAUSE_MENU = "pause-menu"
    GAME_OVER = "game-over"


class TextField(Enum):
    CURRENT_SCORE = "current-score"
    CURRENT_DISTANCE = "current-distance"
    HIGH_SCORE = "high-score"
    HIGH_DISTANCE = "high-distance"
    FINAL_SCORE = "final-score"
    FINAL_DISTANCE = "final-distance"


class UiSink(ABC):
    """Receives screen and text updates from the simulation."""

    @abstractmethod
    def show_screen(self, screen: ScreenName) -> None:
        """Make ``screen`` the only visible screen."""
        ...

    @abstractmethod
    def set_text(self, field: TextField, value: str) -> None:
        ...


class RecordingSink(UiSink):
    """Keeps every notification for inspection in tests."""

    def __init__(self) -> None:
        self.screens: List[ScreenName] = []
        self.texts: Dict[TextField, str] = {}

    @property
    def current_screen(self) -> Optional[ScreenName]:
        return self.screens[-1] if self.screens else None

    def show_screen(self, screen: ScreenName) -> None:
        self.screens.append(screen)

    def set_text(self, field: TextField, value: str) -> None:
        self.texts[field] = value
