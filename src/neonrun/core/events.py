"""
Event bus for the game.

Input adapters post intents into the queue; the simulation drains it
once per step, so handlers always run on the stepping thread.
Notifications such as game over are emitted immediately.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
import logging
import time

logger = logging.getLogger(__name__)


class Intent(Enum):
    """Discrete input commands, independent of the physical device."""
    START = auto()  # Menu only
    START_OR_RESTART = auto()
    RESTART = auto()
    RESUME_OR_RESTART = auto()  # Resume when paused, retry after game over
    PAUSE = auto()
    RESUME = auto()
    TOGGLE_PAUSE = auto()
    SHOW_MENU = auto()
    JUMP_PRESSED = auto()
    JUMP_RELEASED = auto()
    JUMP_HOLD_TICK = auto()  # Fired by the hold timer


class EventType(Enum):
    """Notifications emitted by the core."""
    GAME_OVER = auto()


@dataclass(frozen=True)
class Event:
    """
    Event data container.

    Attributes:
        type: Intent or notification type
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: Intent | EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Events can be emitted immediately or queued for the next
    ``process_queue`` call.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[Intent | EventType, list[Handler]] = defaultdict(list)
        self._queue: deque[Event] = deque()
        self._event_history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(
        self,
        event_type: Intent | EventType,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event immediately."""
        self._add_to_history(event)
        self._dispatch(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for later processing."""
        self._queue.append(event)

    def process_queue(self) -> int:
        """
        Dispatch every event queued before this call.

        Events queued by handlers while draining wait for the next call.

        Returns:
            Number of events dispatched
        """
        count = len(self._queue)
        for _ in range(count):
            event = self._queue.popleft()
            self._add_to_history(event)
            self._dispatch(event)
        return count

    @property
    def pending(self) -> int:
        """Number of queued events."""
        return len(self._queue)

    def _dispatch(self, event: Event) -> None:
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def _add_to_history(self, event: Event) -> None:
        self._event_history.append(event)

    def get_history(
        self,
        event_type: Intent | EventType | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = list(self._event_history)
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]


def intent_event(intent: Intent, source: str = "input") -> Event:
    """Create an input intent event."""
    return Event(intent, source=source)
