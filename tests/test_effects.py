"""Tests for particles and camera shake."""
from __future__ import annotations

import random

import pytest

from neonrun.game.camera import Camera
from neonrun.game.geometry import Vector2
from neonrun.game.particles import Particle, spawn_burst, update_particles
from neonrun.graphics.recording import RecordingSurface


class TestParticle:
    def test_dies_after_exactly_fifty_updates(self) -> None:
        particle = Particle(0, 0, (255, 51, 51), life=1.0, decay=0.02)
        for _ in range(49):
            particle.update()
        assert not particle.is_dead

        particle.update()
        assert particle.is_dead
        assert particle.life == 0

    def test_motion(self) -> None:
        particle = Particle(10, 10, (255, 255, 255), vx=2, vy=-1, size=4)
        particle.update()
        assert particle.x == 12
        assert particle.y == 9
        assert particle.vy == pytest.approx(-0.8)
        assert particle.size == pytest.approx(3.92)

    def test_create_random_ranges(self) -> None:
        rng = random.Random(7)
        for _ in range(100):
            particle = Particle.create(0, 0, (1, 2, 3), rng=rng)
            assert -5 <= particle.vx <= 5
            assert -5 <= particle.vy <= 5
            assert 2 <= particle.size <= 6

    def test_create_keeps_given_velocity(self) -> None:
        particle = Particle.create(0, 0, (1, 2, 3), velocity=Vector2(3, 4), rng=random.Random(1))
        assert (particle.vx, particle.vy) == (3, 4)

    def test_draw_uses_life_as_alpha(self) -> None:
        particle = Particle(0, 0, (255, 0, 0), life=0.5)
        surface = RecordingSurface()
        particle.draw(surface)
        (command,) = surface.named("fill_rect")
        assert command.state.alpha == 0.5
        assert command.state.glow_blur == 10


class TestBurst:
    def test_count_and_spread(self) -> None:
        particles = spawn_burst(50, 60, (255, 51, 51), count=50, spread=20, rng=random.Random(3))
        assert len(particles) == 50
        for particle in particles:
            assert (particle.x, particle.y) == (50, 60)
            assert -10 <= particle.vx <= 10
            assert -10 <= particle.vy <= 10

    def test_update_particles_drops_dead(self) -> None:
        particles = [
            Particle(0, 0, (1, 1, 1), life=0.02),
            Particle(0, 0, (1, 1, 1), life=1.0),
        ]
        survivors = update_particles(particles)
        assert len(survivors) == 1
        assert survivors[0].life == pytest.approx(0.98)


class TestCamera:
    def test_shake_takes_max_not_sum(self) -> None:
        camera = Camera()
        camera.add_shake(20)
        camera.add_shake(5)
        assert camera.shake == 20

        camera.update()
        assert camera.shake == pytest.approx(18)

    def test_offset_bounded_by_shake(self) -> None:
        camera = Camera(rng=random.Random(5))
        camera.add_shake(20)
        for _ in range(200):
            offset = camera.get_shake_offset()
            assert -10 <= offset.x <= 10
            assert -10 <= offset.y <= 10

    def test_no_shake_no_offset(self) -> None:
        assert Camera().get_shake_offset() == Vector2.zero()

    def test_shake_settles_to_zero(self) -> None:
        camera = Camera()
        camera.add_shake(20)
        for _ in range(100):
            camera.update()
        assert camera.shake == 0
        assert camera.get_shake_offset() == Vector2.zero()

    def test_reset(self) -> None:
        camera = Camera()
        camera.add_shake(3)
        camera.reset()
        assert camera.shake == 0
