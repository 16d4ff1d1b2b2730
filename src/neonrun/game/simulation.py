"""
Game orchestrator.

Owns every piece of simulation state and is its only mutator. Input
adapters post intents to the event bus; ``step()`` drains them once and
then advances whatever the current state allows.
"""

from typing import Callable, Dict, List, Optional
import logging
import math
import random

from neonrun.core.events import Event, EventBus, EventType, Intent, intent_event
from neonrun.core.state import GameState, StateMachine
from neonrun.game.camera import Camera
from neonrun.game.geometry import Viewport
from neonrun.game.obstacles import ObstacleGenerator
from neonrun.game.particles import DEATH_COLOR, Particle, spawn_burst, update_particles
from neonrun.game.player import Player, PlayerStatus
from neonrun.game.scenery import draw_backdrop, draw_ground, draw_sky
from neonrun.graphics.surface import DrawingSurface
from neonrun.settings import GameplaySettings, Settings
from neonrun.storage.records import (
    HIGH_DISTANCE_KEY, HIGH_SCORE_KEY, RecordStore, read_record,
)
from neonrun.ui.sink import ScreenName, TextField, UiSink

logger = logging.getLogger(__name__)

STATE_SCREENS: Dict[GameState, ScreenName] = {
    GameState.MENU: ScreenName.START_MENU,
    GameState.PLAYING: ScreenName.GAME_HUD,
    GameState.PAUSED: ScreenName.PAUSE_MENU,
    GameState.GAME_OVER: ScreenName.GAME_OVER,
}


def game_speed(distance: float, gameplay: GameplaySettings) -> float:
    """Scroll speed for a given distance, capped at ``max_speed``."""
    return min(gameplay.base_speed + distance / gameplay.speed_ramp, gameplay.max_speed)


def score_for(distance: float, gameplay: GameplaySettings) -> int:
    return math.floor(distance / gameplay.score_divisor)


class Simulation:
    """
    One run of the game, from the title screen to game over and back.

    Args:
        settings: Validated application settings
        records: Store for the best score and best distance
        ui: Receives screen and text notifications
        event_bus: Bus carrying intents (a private one is made if omitted)
        rng: Random source shared by spawning and effects
    """

    def __init__(
        self,
        settings: Settings,
        records: RecordStore,
        ui: UiSink,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings
        self.records = records
        self.ui = ui
        self.event_bus = event_bus or EventBus()
        self._rng = rng or random.Random(settings.seed)

        self.viewport = Viewport(
            settings.display.width,
            settings.display.height,
            settings.physics.ground_height,
        )
        self.player = Player(settings.physics, self.viewport, settings.effects)
        self.camera = Camera(settings.effects.shake_decay, rng=self._rng)
        self.generator = ObstacleGenerator(settings.gameplay, self.viewport, rng=self._rng)
        self.particles: List[Particle] = []
        self.state_machine = StateMachine(GameState.MENU)
        self.state_machine.add_listener(self._on_state_change)

        self.score = 0
        self.distance = 0.0
        self.speed = settings.gameplay.base_speed
        self.background_offset = 0.0
        self.frame = 0

        # Written only by intent handlers, read by the hold tick
        self._jump_held = False

        self.high_score = read_record(records, HIGH_SCORE_KEY)
        self.high_distance = read_record(records, HIGH_DISTANCE_KEY)
        logger.info(f"Records loaded: score={self.high_score}, distance={self.high_distance}")

        self._unsubscribers: List[Callable[[], None]] = []
        self._register_intents()

        self.ui.set_text(TextField.HIGH_SCORE, str(self.high_score))
        self.ui.set_text(TextField.HIGH_DISTANCE, str(self.high_distance))
        self.ui.show_screen(ScreenName.START_MENU)

    @property
    def state(self) -> GameState:
        return self.state_machine.state

    @property
    def jump_held(self) -> bool:
        return self._jump_held

    # Intents

    def _register_intents(self) -> None:
        routes: Dict[Intent, Callable[[Event], None]] = {
            Intent.START: self._on_start,
            Intent.START_OR_RESTART: self._on_start_or_restart,
            Intent.RESTART: self._on_restart,
            Intent.RESUME_OR_RESTART: self._on_resume_or_restart,
            Intent.PAUSE: lambda e: self.pause_game(),
            Intent.RESUME: lambda e: self.resume_game(),
            Intent.TOGGLE_PAUSE: self._on_toggle_pause,
            Intent.SHOW_MENU: lambda e: self.show_menu(),
            Intent.JUMP_PRESSED: self._on_jump_pressed,
            Intent.JUMP_RELEASED: self._on_jump_released,
            Intent.JUMP_HOLD_TICK: self._on_jump_hold_tick,
        }
        for intent, handler in routes.items():
            self._unsubscribers.append(self.event_bus.subscribe(intent, handler))

    def post(self, intent: Intent, source: str = "input") -> None:
        """Queue an intent for the next step. Safe to call from input callbacks."""
        self.event_bus.queue_event(intent_event(intent, source))

    def _on_start(self, event: Event) -> None:
        if self.state is GameState.MENU:
            self.start_game()
        else:
            logger.debug(f"Ignored {event.type.name} in {self.state.name}")

    def _on_start_or_restart(self, event: Event) -> None:
        if self.state_machine.is_in(GameState.MENU, GameState.GAME_OVER):
            self.start_game()
        else:
            logger.debug(f"Ignored {event.type.name} in {self.state.name}")

    def _on_restart(self, event: Event) -> None:
        if self.state_machine.is_in(GameState.PAUSED, GameState.GAME_OVER):
            self.start_game()
        else:
            logger.debug(f"Ignored {event.type.name} in {self.state.name}")

    def _on_resume_or_restart(self, event: Event) -> None:
        if self.state is GameState.PAUSED:
            self.resume_game()
        elif self.state is GameState.GAME_OVER:
            self.start_game()
        else:
            logger.debug(f"Ignored {event.type.name} in {self.state.name}")

    def _on_toggle_pause(self, event: Event) -> None:
        if self.state is GameState.PLAYING:
            self.pause_game()
        elif self.state is GameState.PAUSED:
            self.resume_game()

    def _on_state_change(self, old: GameState, new: GameState) -> None:
        self.ui.show_screen(STATE_SCREENS[new])

    def _on_jump_pressed(self, event: Event) -> None:
        if self.state_machine.is_in(GameState.MENU, GameState.GAME_OVER):
            self.start_game()
        elif self.state is GameState.PLAYING and not self._jump_held:
            self.player.jump()
            self._jump_held = True

    def _on_jump_released(self, event: Event) -> None:
        self._jump_held = False

    def _on_jump_hold_tick(self, event: Event) -> None:
        if (
            self.state is GameState.PLAYING
            and self._jump_held
            and self.settings.gameplay.hold_to_jump
        ):
            self.player.jump()

    # State changes

    def start_game(self) -> None:
        """Begin a fresh run."""
        if not self.state_machine.transition(GameState.PLAYING):
            return

        self.score = 0
        self.distance = 0.0
        self.speed = self.settings.gameplay.base_speed
        self.background_offset = 0.0
        self._jump_held = False

        self.player.reset()
        self.camera.reset()
        self.generator.reset()
        self.particles = []

    def pause_game(self) -> None:
        if self.state is GameState.PLAYING:
            self.state_machine.transition(GameState.PAUSED)

    def resume_game(self) -> None:
        if self.state is GameState.PAUSED:
            self.state_machine.transition(GameState.PLAYING)

    def show_menu(self) -> None:
        if self.state_machine.transition(GameState.MENU):
            self._jump_held = False

    def game_over(self) -> None:
        """End the run: effects, record check and the results screen."""
        if not self.state_machine.transition(GameState.GAME_OVER):
            return

        effects = self.settings.effects
        self.camera.add_shake(effects.death_shake)

        center = self.player.center
        self.particles.extend(
            spawn_burst(
                center.x, center.y, DEATH_COLOR,
                count=effects.death_particles,
                spread=effects.death_spread,
                rng=self._rng,
            )
        )

        new_records = self._update_records()

        final_distance = math.floor(self.distance)
        self.ui.set_text(TextField.FINAL_SCORE, str(self.score))
        self.ui.set_text(TextField.FINAL_DISTANCE, str(final_distance))

        logger.info(f"Game over: score={self.score}, distance={final_distance}")
        self.event_bus.emit(Event(
            EventType.GAME_OVER,
            data={"score": self.score, "distance": final_distance, "new_records": new_records},
            source="simulation",
        ))

    def _update_records(self) -> List[str]:
        """Store any beaten high-water mark. Returns the keys written."""
        written = []

        if self.score > self.high_score:
            self.high_score = self.score
            self.records.set(HIGH_SCORE_KEY, self.high_score)
            written.append(HIGH_SCORE_KEY)

        final_distance = math.floor(self.distance)
        if final_distance > self.high_distance:
            self.high_distance = final_distance
            self.records.set(HIGH_DISTANCE_KEY, self.high_distance)
            written.append(HIGH_DISTANCE_KEY)

        if written:
            logger.info(f"New record: score={self.high_score}, distance={self.high_distance}")
            self.ui.set_text(TextField.HIGH_SCORE, str(self.high_score))
            self.ui.set_text(TextField.HIGH_DISTANCE, str(self.high_distance))
        return written

    # Frame work

    def step(self) -> None:
        """Drain pending intents, then advance one tick."""
        self.event_bus.process_queue()
        self.update()
        self.frame += 1

    def update(self) -> None:
        state = self.state
        if state is GameState.PLAYING:
            self._update_playing()
        elif state is GameState.GAME_OVER:
            # Let the death burst play out and the shake settle
            self.camera.update()
            self.particles = update_particles(self.particles)

    def _update_playing(self) -> None:
        gameplay = self.settings.gameplay

        if self.player.update() is PlayerStatus.DEAD:
            self.game_over()
            return

        self.distance += self.speed * gameplay.distance_rate
        self.speed = game_speed(self.distance, gameplay)
        self.background_offset += self.speed * 0.3
        self.score = score_for(self.distance, gameplay)

        self.camera.update()
        self.generator.update(self.speed, self.distance)

        if self.generator.check_collision(self.player):
            self.game_over()
            return

        self.particles = update_particles(self.particles)

        self.ui.set_text(TextField.CURRENT_SCORE, str(self.score))
        self.ui.set_text(TextField.CURRENT_DISTANCE, str(math.floor(self.distance)))
        self.ui.set_text(TextField.HIGH_SCORE, str(self.high_score))

    def render(self, surface: DrawingSurface) -> None:
        """Issue the draw commands for the current frame."""
        draw_sky(surface, self.viewport)
        if self.state is GameState.MENU:
            return

        offset = self.camera.get_shake_offset()

        with surface.scope():
            surface.translate(offset.x, offset.y)
            draw_backdrop(surface, self.viewport, self.background_offset)
            draw_ground(surface, self.viewport)

        self.generator.draw(surface, offset)

        with surface.scope():
            surface.translate(offset.x, offset.y)
            for particle in self.particles:
                particle.draw(surface)
            self.player.draw(surface)

    def resize(self, width: int, height: int) -> None:
        """Follow a window resize. The player is re-seated if it was standing."""
        standing = self.player.on_ground
        self.viewport.resize(width, height)
        if standing or self.player.y + self.player.size > self.viewport.ground_y:
            self.player.y = max(0.0, self.viewport.ground_y - self.player.size)

    def close(self) -> None:
        """Detach from the event bus and the state machine."""
        self.state_machine.remove_listener(self._on_state_change)
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
