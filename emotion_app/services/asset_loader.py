"""Read the startup assets: cascade definition and class labels."""
import json
import logging
from pathlib import Path
from typing import List

import cv2

from ..core.constants import DEFAULT_CASCADE_FILE
from ..core.exceptions import AssetFetchError, LabelLoadError

logger = logging.getLogger(__name__)


def resolve_cascade_path(location: str = "") -> Path:
    """Return the cascade path, defaulting to the one bundled with OpenCV."""
    if location:
        return Path(location)
    return Path(cv2.data.haarcascades) / DEFAULT_CASCADE_FILE


def fetch_asset_bytes(location: str = "") -> bytes:
    """Read the serialized detector definition.

    Raises:
        AssetFetchError: If the file is missing, unreadable or empty
    """
    path = resolve_cascade_path(location)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise AssetFetchError(f"Could not read detector asset '{path}': {e}", e) from e

    if not data:
        raise AssetFetchError(f"Detector asset '{path}' is empty")

    logger.debug(f"Read detector asset '{path}' ({len(data)} bytes)")
    return data


def load_labels(path: str) -> List[str]:
    """Load the class label list (a JSON array of strings).

    Raises:
        LabelLoadError: If the file is missing or not a list of strings
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            labels = json.load(f)
    except OSError as e:
        raise LabelLoadError(f"Could not read labels '{path}': {e}", e) from e
    except json.JSONDecodeError as e:
        raise LabelLoadError(f"Labels file '{path}' is not valid JSON: {e}", e) from e

    if not isinstance(labels, list) or not all(isinstance(label, str) for label in labels):
        raise LabelLoadError(f"Labels file '{path}' must contain a JSON list of strings")
    if not labels:
        raise LabelLoadError(f"Labels file '{path}' is empty")

    logger.info(f"Loaded {len(labels)} class labels from '{path}'")
    return labels
