"""Desktop host for the game."""

from neonrun.app.window import GameWindow

__all__ = ["GameWindow"]
