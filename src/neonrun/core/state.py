"""
State machine for the game flow.

States:
    MENU: Title screen, nothing simulated
    PLAYING: A run is in progress
    PAUSED: Run frozen, pause overlay shown
    GAME_OVER: Run ended by a collision, results shown
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Game states."""
    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


StateListener = Callable[[GameState, GameState], None]


class StateMachine:
    """
    Tracks the current game state and validates transitions.

    Invalid requests are ignored: ``transition`` returns False and
    nothing changes. Listeners are notified after every change.
    """

    # Valid state transitions
    VALID_TRANSITIONS: list[tuple[GameState, GameState]] = [
        # From MENU
        (GameState.MENU, GameState.PLAYING),

        # From PLAYING
        (GameState.PLAYING, GameState.PAUSED),
        (GameState.PLAYING, GameState.GAME_OVER),
        (GameState.PLAYING, GameState.MENU),

        # From PAUSED
        (GameState.PAUSED, GameState.PLAYING),  # Resume or restart
        (GameState.PAUSED, GameState.MENU),

        # From GAME_OVER
        (GameState.GAME_OVER, GameState.PLAYING),  # Retry
        (GameState.GAME_OVER, GameState.MENU),
    ]

    def __init__(self, initial_state: GameState = GameState.MENU) -> None:
        self._state = initial_state
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> GameState:
        """Get current state."""
        return self._state

    def is_in(self, *states: GameState) -> bool:
        """Check whether the current state is one of ``states``."""
        return self._state in states

    def can_transition(self, to_state: GameState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: GameState) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.debug(
                f"Ignored transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, old_state: GameState, new_state: GameState) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
