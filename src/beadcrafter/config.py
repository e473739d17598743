"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (timer periods, bead dimensions,
   split-row offsets) from being scattered throughout the code.
2. Deployment: It resolves where the user's pattern library lives, so the
   frozen app and the development checkout read the same file.

Exports:
    DEFAULT_LIBRARY_PATH (str): Absolute path to the user's pattern library.
"""
import os
from pathlib import Path


def get_library_path() -> str:
    """
    Location of the HDF5 pattern library.

    The BEADCRAFTER_LIBRARY environment variable wins, otherwise the file
    lives in the user's home directory.
    """
    override = os.environ.get("BEADCRAFTER_LIBRARY")
    if override:
        return os.path.abspath(override)
    return os.path.join(str(Path.home()), ".beadcrafter", "patterns.h5")


# Global Constants
DEFAULT_LIBRARY_PATH: str = get_library_path()

# --- Playback ---
BASE_INTERVAL_MS: int = 500  # ms per step at 1x speed
SPEED_PRESETS: tuple[float, ...] = (0.25, 0.5, 1.0, 1.5, 2.0, 4.0)

# --- Reveal transition ---
REVEAL_DURATION_MS: int = 200
REVEAL_FRAME_INTERVAL_MS: int = 16  # ~60 FPS

# --- Bead geometry (3D units) ---
BEAD_RADIUS: float = 0.4
BEAD_HEIGHT: float = 0.3
BEAD_HOLE_RADIUS: float = 0.12
STRING_RADIUS: float = 0.03

# --- View defaults ---
DEFAULT_BEAD_SPACING: float = 0.65  # X-axis gap between beads
DEFAULT_ROW_SPACING: float = 0.65   # Y-axis gap between rows
DEFAULT_STRING_COLOR: str = "#3d3d3d"

# --- Split rows (limbs) ---
SPLIT_SIDE_OFFSET_X: float = 1.5
SPLIT_DEPTH_OFFSET_Z: float = 0.3
SPLIT_ROW_DESCENT: float = 0.8  # fraction of row spacing between limb beads
