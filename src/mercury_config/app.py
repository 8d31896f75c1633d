"""Application startup: logging and the process-wide settings store."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .core.events import EventBus
from .storage.errors import LoadStatus
from .storage.settings import SettingsStore

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def create_store(
    config_dir: Optional[Union[str, Path]] = None,
    event_bus: Optional[EventBus] = None,
) -> SettingsStore:
    """Build and load the settings store that the rest of the app shares.

    Args:
        config_dir: Override for the settings directory
        event_bus: Bus for settings change notifications

    Returns:
        A loaded store, usable even if loading failed
    """
    store = SettingsStore(config_dir=config_dir, event_bus=event_bus)
    result = store.load()

    if result.status is LoadStatus.FAILED:
        logger.error(f"Running with default settings: {result.error}")
    elif result.warnings:
        logger.warning(f"Settings loaded with {len(result.warnings)} warning(s)")

    return store


def main():
    """Application entry point."""
    setup_logging(verbose="-v" in sys.argv[1:])

    logger.info("Initializing MercuryTrade settings")
    store = create_store(event_bus=EventBus())

    logger.info(f"Settings file: {store.config_file}")
    logger.info(f"Quick-reply buttons: {len(store.get_buttons_config())}")
    logger.info(f"Game path valid: {store.is_valid_game_path(store.game_path)}")


if __name__ == "__main__":
    main()
