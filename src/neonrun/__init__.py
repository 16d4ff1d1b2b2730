"""NEON RUN: a side-scrolling neon reflex game."""

__version__ = "1.0.0"
