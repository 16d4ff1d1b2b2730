"""Tests for the UI sinks."""
from __future__ import annotations

import random

from neonrun.core.events import Event, EventBus, EventType, Intent
from neonrun.game.obstacles import OBSTACLE_CATALOG, Obstacle
from neonrun.game.simulation import Simulation
from neonrun.settings import Settings
from neonrun.storage.records import HIGH_SCORE_KEY, MemoryRecordStore
from neonrun.ui.hud import HudOverlay
from neonrun.ui.sink import RecordingSink, ScreenName, TextField


class TestRecordingSink:
    def test_tracks_screens_and_texts(self) -> None:
        sink = RecordingSink()
        assert sink.current_screen is None

        sink.show_screen(ScreenName.GAME_HUD)
        sink.set_text(TextField.CURRENT_SCORE, "12")

        assert sink.current_screen is ScreenName.GAME_HUD
        assert sink.texts == {TextField.CURRENT_SCORE: "12"}


class TestHudOverlay:
    def test_state_without_display(self) -> None:
        hud = HudOverlay()
        assert hud.screen is ScreenName.START_MENU
        assert hud.texts[TextField.HIGH_SCORE] == "0"

        hud.show_screen(ScreenName.GAME_OVER)
        hud.set_text(TextField.FINAL_SCORE, "120")
        assert hud.screen is ScreenName.GAME_OVER
        assert hud.texts[TextField.FINAL_SCORE] == "120"

    def test_screen_names(self) -> None:
        assert [s.value for s in ScreenName] == [
            "start-menu", "game-hud", "pause-menu", "game-over",
        ]

    def test_new_record_flag_follows_game_over(self) -> None:
        bus = EventBus()
        hud = HudOverlay()
        hud.attach(bus)

        bus.emit(Event(EventType.GAME_OVER, data={"new_records": [HIGH_SCORE_KEY]}))
        assert hud.new_record

        hud.show_screen(ScreenName.GAME_HUD)
        assert not hud.new_record

        bus.emit(Event(EventType.GAME_OVER, data={"new_records": []}))
        assert not hud.new_record

    def test_detach_stops_listening(self) -> None:
        bus = EventBus()
        hud = HudOverlay()
        hud.attach(bus)
        hud.detach()

        bus.emit(Event(EventType.GAME_OVER, data={"new_records": [HIGH_SCORE_KEY]}))
        assert not hud.new_record

    def test_flags_record_beaten_by_simulation(self, settings: Settings) -> None:
        bus = EventBus()
        hud = HudOverlay()
        hud.attach(bus)
        sim = Simulation(settings, MemoryRecordStore(), hud, event_bus=bus, rng=random.Random(0))

        sim.post(Intent.START)
        sim.step()
        sim.distance = 400.0
        player = sim.player
        sim.generator.obstacles = [Obstacle.from_template(OBSTACLE_CATALOG[1], player.x, player.y)]
        sim.step()

        assert hud.screen is ScreenName.GAME_OVER
        assert hud.new_record
        assert hud.texts[TextField.FINAL_DISTANCE] == "400"
