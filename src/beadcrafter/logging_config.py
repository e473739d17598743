"""
Logging Configuration
Sets up the global logger for the application.

The BEADCRAFTER_LOG environment variable (e.g. BEADCRAFTER_LOG=DEBUG) overrides
the level chosen on the command line, so a packaged build can be debugged
without changing its shortcut.
"""
import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "BEADCRAFTER_LOG"

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
# Playback and layout debugging needs to know where a message came from
DEBUG_FORMAT = '%(asctime)s.%(msecs)03d - %(name)s:%(lineno)d - %(levelname)s - %(message)s'


def resolve_level(level: int) -> int:
    """The level from BEADCRAFTER_LOG if it names a valid level, else `level`."""
    override = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not override:
        return level
    resolved = logging.getLevelName(override)
    if not isinstance(resolved, int):
        # Unknown names come back as "Level X"
        print(f"Ignoring {LOG_LEVEL_ENV}={override!r}: not a logging level.", file=sys.stderr)
        return level
    return resolved


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> int:
    """
    Configures the root logger for the 'beadcrafter' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.

    Returns:
        The level actually in effect after the environment override.
    """
    level = resolve_level(level)

    # Get the logger for our package
    logger = logging.getLogger("beadcrafter")
    logger.setLevel(level)

    # Avoid duplicate handlers when the app is restarted in the same process
    if logger.hasHandlers():
        logger.handlers.clear()

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # DEBUG adds milliseconds (step timing) and line numbers
    formatter = logging.Formatter(
        DEBUG_FORMAT if level <= logging.DEBUG else DEFAULT_FORMAT,
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return level
