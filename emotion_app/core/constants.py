"""Application-wide constants."""
from __future__ import annotations

from typing import Final, Tuple

APP_NAME: Final[str] = "Face Emotion Detection"
VERSION: Final[str] = "1.0.0"

# --- Model input ---
DEFAULT_TENSOR_SIZE: Final[int] = 64
TENSOR_CHANNELS: Final[int] = 3
MAX_SAMPLE_VALUE: Final[float] = 255.0

# --- Detector ---
DEFAULT_CASCADE_FILE: Final[str] = "haarcascade_frontalface_default.xml"
DEFAULT_SCALE_FACTOR: Final[float] = 1.1
DEFAULT_MIN_NEIGHBORS: Final[int] = 3

# --- Overlay (BGR) ---
CANDIDATE_BOX_COLOR: Final[Tuple[int, int, int]] = (0, 255, 0)  # lime
CANDIDATE_BOX_THICKNESS: Final[int] = 2
LABEL_BOX_COLOR: Final[Tuple[int, int, int]] = (0, 0, 0)
LABEL_TEXT_COLOR: Final[Tuple[int, int, int]] = (255, 255, 255)
LABEL_BOX_WIDTH: Final[int] = 220
LABEL_BOX_HEIGHT: Final[int] = 28
LABEL_TEXT_OFFSET: Final[Tuple[int, int]] = (6, 8)

# --- Observable state ---
NO_EMOTION: Final[str] = "-"

__all__ = [
    "APP_NAME",
    "VERSION",
    "DEFAULT_TENSOR_SIZE",
    "TENSOR_CHANNELS",
    "MAX_SAMPLE_VALUE",
    "DEFAULT_CASCADE_FILE",
    "DEFAULT_SCALE_FACTOR",
    "DEFAULT_MIN_NEIGHBORS",
    "CANDIDATE_BOX_COLOR",
    "CANDIDATE_BOX_THICKNESS",
    "LABEL_BOX_COLOR",
    "LABEL_TEXT_COLOR",
    "LABEL_BOX_WIDTH",
    "LABEL_BOX_HEIGHT",
    "LABEL_TEXT_OFFSET",
    "NO_EMOTION",
]
