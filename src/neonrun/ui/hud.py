"""
Pygame text overlay for the game screens.

Stores whatever the simulation reports and paints the active screen on
top of the rendered frame. Fonts are created lazily, after pygame is
initialized by the host window.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
import logging

import pygame

from neonrun.core.events import Event, EventBus, EventType
from neonrun.ui.sink import ScreenName, TextField, UiSink

logger = logging.getLogger(__name__)


@dataclass
class HudStyle:
    """Overlay colors and font sizes."""
    title_size: int = 64
    text_size: int = 28
    small_size: int = 18

    title_color: Tuple[int, int, int] = (0, 255, 255)
    text_color: Tuple[int, int, int] = (230, 230, 240)
    accent_color: Tuple[int, int, int] = (255, 51, 51)
    dim_color: Tuple[int, int, int] = (140, 140, 160)
    shade: Tuple[int, int, int, int] = (0, 0, 0, 150)


class HudOverlay(UiSink):
    """UiSink that draws screens with pygame fonts."""

    def __init__(self, style: Optional[HudStyle] = None) -> None:
        self.style = style or HudStyle()
        self.screen = ScreenName.START_MENU
        self.texts: Dict[TextField, str] = {field: "0" for field in TextField}
        self.new_record = False
        self._unsubscribe: Optional[Callable[[], None]] = None

        self._title_font: Optional[pygame.font.Font] = None
        self._font: Optional[pygame.font.Font] = None
        self._small_font: Optional[pygame.font.Font] = None

    def attach(self, event_bus: EventBus) -> None:
        """Listen for game over to flag beaten records."""
        self.detach()
        self._unsubscribe = event_bus.subscribe(EventType.GAME_OVER, self._on_game_over)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_game_over(self, event: Event) -> None:
        self.new_record = bool(event.data.get("new_records"))

    def show_screen(self, screen: ScreenName) -> None:
        logger.debug(f"Screen: {screen.value}")
        if screen is ScreenName.GAME_HUD:
            self.new_record = False
        self.screen = screen

    def set_text(self, field: TextField, value: str) -> None:
        self.texts[field] = value

    def _init_fonts(self) -> None:
        pygame.font.init()
        self._title_font = pygame.font.SysFont(None, self.style.title_size, bold=True)
        self._font = pygame.font.SysFont(None, self.style.text_size)
        self._small_font = pygame.font.SysFont(None, self.style.small_size)

    def render(self, target: pygame.Surface) -> None:
        """Paint the active screen onto ``target``."""
        if self._font is None:
            self._init_fonts()

        if self.screen is ScreenName.GAME_HUD:
            self._render_hud(target)
        elif self.screen is ScreenName.START_MENU:
            self._render_panel(target, "NEON RUN", self.style.title_color, [
                f"Best score: {self.texts[TextField.HIGH_SCORE]}",
                f"Best distance: {self.texts[TextField.HIGH_DISTANCE]}m",
            ], "SPACE / click to play")
        elif self.screen is ScreenName.PAUSE_MENU:
            self._render_panel(target, "PAUSED", self.style.title_color, [
                f"Score: {self.texts[TextField.CURRENT_SCORE]}",
            ], "ESC / R resume   S restart   M menu")
        elif self.screen is ScreenName.GAME_OVER:
            lines = [
                f"Score: {self.texts[TextField.FINAL_SCORE]}",
                f"Distance: {self.texts[TextField.FINAL_DISTANCE]}m",
                f"Best: {self.texts[TextField.HIGH_SCORE]}",
            ]
            if self.new_record:
                lines.append("NEW RECORD!")
            self._render_panel(target, "GAME OVER", self.style.accent_color, lines, "SPACE / R retry   M menu")

    def _render_hud(self, target: pygame.Surface) -> None:
        lines = [
            f"SCORE {self.texts[TextField.CURRENT_SCORE]}",
            f"{self.texts[TextField.CURRENT_DISTANCE]}m",
            f"BEST {self.texts[TextField.HIGH_SCORE]}",
        ]
        y = 12
        for line in lines:
            text_surface = self._font.render(line, True, self.style.text_color)
            target.blit(text_surface, (16, y))
            y += self.style.text_size

    def _render_panel(
        self,
        target: pygame.Surface,
        title: str,
        title_color: Tuple[int, int, int],
        lines: List[str],
        hint: str,
    ) -> None:
        width, height = target.get_size()

        shade = pygame.Surface((width, height), pygame.SRCALPHA)
        shade.fill(self.style.shade)
        target.blit(shade, (0, 0))

        title_surface = self._title_font.render(title, True, title_color)
        y = height // 3
        target.blit(title_surface, title_surface.get_rect(center=(width // 2, y)))

        y += self.style.title_size
        for line in lines:
            text_surface = self._font.render(line, True, self.style.text_color)
            target.blit(text_surface, text_surface.get_rect(center=(width // 2, y)))
            y += self.style.text_size + 6

        hint_surface = self._small_font.render(hint, True, self.style.dim_color)
        target.blit(hint_surface, hint_surface.get_rect(center=(width // 2, y + 20)))
