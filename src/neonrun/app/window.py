"""
Desktop host window using pygame.

Maps keyboard, mouse and touch input to intents, drives one simulation
step and render per frame, and paints the HUD and an optional debug
panel on top.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import asyncio
import logging

import pygame

from neonrun.core.events import Intent
from neonrun.game.simulation import Simulation
from neonrun.graphics.raster import BufferSurface
from neonrun.settings import DisplaySettings
from neonrun.ui.hud import HudOverlay

logger = logging.getLogger(__name__)

# Fired by pygame's timer while the game runs; turned into hold ticks
HOLD_TIMER_EVENT = pygame.USEREVENT + 1

JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)

KEY_INTENTS: Dict[int, Intent] = {
    pygame.K_RETURN: Intent.START_OR_RESTART,
    pygame.K_KP_ENTER: Intent.START_OR_RESTART,
    pygame.K_p: Intent.START,
    pygame.K_ESCAPE: Intent.TOGGLE_PAUSE,
    pygame.K_r: Intent.RESUME_OR_RESTART,
    pygame.K_s: Intent.RESTART,
    pygame.K_m: Intent.SHOW_MENU,
}


@dataclass
class DebugStyle:
    """Debug panel look."""
    panel_color: tuple[int, int, int, int] = (20, 25, 35, 220)
    text_color: tuple[int, int, int] = (200, 200, 220)
    font_size: int = 18
    width: int = 280
    log_lines: int = 8


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / UP / W: Jump (hold for repeated jumps)
        ENTER: Start or retry
        P: Start from the title screen
        ESC: Pause / resume
        R: Resume when paused, retry after game over
        S: Restart
        M: Menu
        F1: Toggle debug panel
    Mouse buttons and touches jump as well.
    """

    def __init__(
        self,
        simulation: Simulation,
        hud: HudOverlay,
        display: Optional[DisplaySettings] = None,
        debug: bool = False,
    ) -> None:
        self.simulation = simulation
        self.hud = hud
        self.display = display or DisplaySettings()
        self.debug_style = DebugStyle()

        self._screen: pygame.Surface | None = None
        self._frame: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = debug

        self.surface = BufferSurface(self.display.width, self.display.height)

        self._log_buffer: List[str] = []
        self._setup_log_capture()

        logger.info("GameWindow created")

    def _setup_log_capture(self) -> None:
        """Keep the latest log lines for the debug panel."""
        class PanelLogHandler(logging.Handler):
            def __init__(self, window: "GameWindow"):
                super().__init__()
                self.window = window

            def emit(self, record: logging.LogRecord) -> None:
                buffer = self.window._log_buffer
                buffer.append(self.format(record))
                limit = self.window.debug_style.log_lines
                if len(buffer) > limit * 2:
                    del buffer[:-limit]

        handler = PanelLogHandler(self)
        handler.setFormatter(logging.Formatter("%(levelname).1s %(name)s: %(message)s"))
        logging.getLogger().addHandler(handler)
        self._log_handler = handler

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.display.title)

        flags = pygame.DOUBLEBUF
        if self.display.resizable:
            flags |= pygame.RESIZABLE

        self._screen = pygame.display.set_mode((self.display.width, self.display.height), flags)
        self._frame = pygame.Surface((self.display.width, self.display.height))
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, self.debug_style.font_size)

        pygame.time.set_timer(HOLD_TIMER_EVENT, self.simulation.settings.gameplay.hold_interval_ms)

        logger.info(f"Pygame initialized: {self.display.width}x{self.display.height}")

    # Input

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            self._handle_event(event)

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False

        elif event.type == pygame.KEYDOWN:
            self._handle_keydown(event)

        elif event.type == pygame.KEYUP:
            if event.key in JUMP_KEYS:
                self.simulation.post(Intent.JUMP_RELEASED, "keyboard")

        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
            # Touches also arrive as emulated mouse events; ignore those
            if getattr(event, "touch", False):
                return
            source = "touch" if event.type == pygame.FINGERDOWN else "mouse"
            self.simulation.post(Intent.JUMP_PRESSED, source)

        elif event.type in (pygame.MOUSEBUTTONUP, pygame.FINGERUP):
            if getattr(event, "touch", False):
                return
            source = "touch" if event.type == pygame.FINGERUP else "mouse"
            self.simulation.post(Intent.JUMP_RELEASED, source)

        elif event.type == HOLD_TIMER_EVENT:
            self.simulation.post(Intent.JUMP_HOLD_TICK, "timer")

        elif event.type == pygame.VIDEORESIZE:
            self._resize(event.w, event.h)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_F1:
            self._show_debug = not self._show_debug
        elif key in JUMP_KEYS:
            self.simulation.post(Intent.JUMP_PRESSED, "keyboard")
        elif key in KEY_INTENTS:
            self.simulation.post(KEY_INTENTS[key], "keyboard")

    def _last_input(self) -> str:
        for event in reversed(self.simulation.event_bus.get_history(limit=20)):
            if isinstance(event.type, Intent):
                return f"{event.type.name} ({event.source})"
        return "--"

    def _resize(self, width: int, height: int) -> None:
        width, height = max(1, width), max(1, height)
        self.simulation.resize(width, height)
        self.surface.resize(width, height)
        self._frame = pygame.Surface((width, height))
        logger.info(f"Window resized to {width}x{height}")

    # Rendering

    def _render(self) -> None:
        """Render the frame, the HUD and the debug panel."""
        if not self._screen or not self._frame:
            return

        self.simulation.render(self.surface)
        pygame.surfarray.blit_array(self._frame, self.surface.buffer.swapaxes(0, 1))
        self._screen.blit(self._frame, (0, 0))

        self.hud.render(self._screen)
        if self._show_debug:
            self._render_debug_panel()

        pygame.display.flip()

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        if not self._font or not self._screen:
            return

        sim = self.simulation
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"State: {sim.state.name}",
            f"Speed: {sim.speed:.2f}",
            f"Distance: {sim.distance:.1f}",
            f"Obstacles: {len(sim.generator.obstacles)}",
            f"Particles: {len(sim.particles)}",
            f"Shake: {sim.camera.shake:.2f}",
            f"Jump held: {sim.jump_held}",
            f"Last input: {self._last_input()}",
            "",
        ] + self._log_buffer[-self.debug_style.log_lines:]

        style = self.debug_style
        height = (len(lines) + 1) * style.font_size
        panel = pygame.Surface((style.width, height), pygame.SRCALPHA)
        panel.fill(style.panel_color)

        y = 8
        for line in lines:
            display_line = line[:40] + "..." if len(line) > 43 else line
            text_surface = self._font.render(display_line, True, style.text_color)
            panel.blit(text_surface, (8, y))
            y += style.font_size

        self._screen.blit(panel, (self._screen.get_width() - style.width - 10, 10))

    # Loop

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game started")

        while self._running:
            self._handle_events()

            self.simulation.step()
            self._render()

            if self._clock:
                self._clock.tick(self.display.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.time.set_timer(HOLD_TIMER_EVENT, 0)
        logging.getLogger().removeHandler(self._log_handler)
        self.simulation.close()
        self.hud.detach()
        pygame.quit()
        logger.info("Game stopped")

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False
