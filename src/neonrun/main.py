"""
Main entry point for NEON RUN.

Loads settings, wires the simulation to its collaborators and runs the
pygame window.
"""

import asyncio
import logging
import random
import sys

from neonrun.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_game(settings: Settings) -> None:
    """Build the game and run it until the window closes."""
    from neonrun.app.window import GameWindow
    from neonrun.core.events import EventBus
    from neonrun.game.simulation import Simulation
    from neonrun.storage.records import JsonRecordStore
    from neonrun.ui.hud import HudOverlay

    records = JsonRecordStore(settings.records_path)
    hud = HudOverlay()
    event_bus = EventBus()
    hud.attach(event_bus)

    simulation = Simulation(
        settings=settings,
        records=records,
        ui=hud,
        event_bus=event_bus,
        rng=random.Random(settings.seed),
    )

    window = GameWindow(
        simulation=simulation,
        hud=hud,
        display=settings.display,
        debug=settings.debug,
    )

    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("NEON RUN starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("NEON RUN stopped")


if __name__ == "__main__":
    main()
