"""Main entry point for the emotion detector."""

import sys
import tkinter as tk
import logging

from .config.settings import load_config
from .core.exceptions import ConfigError
from .core.logging_config import configure_logging
from .services.emotion_state import EmotionStateStore
from .services.initialization_service import InitializationSequencer
from .ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> int:
    """Application entry point."""
    try:
        config = load_config()
    except ConfigError as e:
        configure_logging()
        logger.error(f"Failed to load configuration: {e}")
        return 1

    configure_logging(
        log_level="DEBUG" if config.debug else config.log_level,
        log_dir=config.log_dir,
        enable_file_logging=config.enable_file_logging,
        structured_logging=config.structured_logging,
    )

    state_store = EmotionStateStore()
    sequencer = InitializationSequencer(config, state_store=state_store)

    root = tk.Tk()
    window = MainWindow(root, config, sequencer, state_store)

    # Models load in the background so the window appears immediately
    sequencer.initialize_async(on_complete=window.on_initialized)

    logger.info("Starting emotion detector")
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
