"""Core framework components: state machine and event bus."""

from .state import GameState, StateMachine
from .events import EventBus, Event, EventType, Intent

__all__ = ["GameState", "StateMachine", "EventBus", "Event", "EventType", "Intent"]
