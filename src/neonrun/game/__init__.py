"""Game entities and the simulation that drives them."""

from neonrun.game.camera import Camera
from neonrun.game.geometry import AABB, Vector2, Viewport, aabb_overlap
from neonrun.game.obstacles import (
    OBSTACLE_CATALOG,
    Obstacle,
    ObstacleGenerator,
    ObstacleKind,
    ObstacleTemplate,
)
from neonrun.game.particles import Particle, spawn_burst
from neonrun.game.player import Player, PlayerStatus
from neonrun.game.simulation import Simulation, game_speed, score_for
from neonrun.game.trail import Trail, TrailPoint

__all__ = [
    "AABB",
    "Camera",
    "OBSTACLE_CATALOG",
    "Obstacle",
    "ObstacleGenerator",
    "ObstacleKind",
    "ObstacleTemplate",
    "Particle",
    "Player",
    "PlayerStatus",
    "Simulation",
    "Trail",
    "TrailPoint",
    "Vector2",
    "Viewport",
    "aabb_overlap",
    "game_speed",
    "score_for",
    "spawn_burst",
]
