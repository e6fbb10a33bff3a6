"""Haar cascade face detector backed by OpenCV."""
import os
import logging
import tempfile
from typing import List, Dict, Any, Optional
import numpy as np
import cv2
from .base_backend import BaseFaceDetector
from ..core.constants import DEFAULT_MIN_NEIGHBORS, DEFAULT_SCALE_FACTOR
from ..core.entities import Region
from ..core.exceptions import DetectionError

logger = logging.getLogger(__name__)


class HaarCascadeDetector(BaseFaceDetector):
    """Face detector using ``cv2.CascadeClassifier``.

    ``CascadeClassifier`` only loads from a filesystem path, so the asset
    bytes are staged in a temporary file that is removed once bound.
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self._cascade: Optional[cv2.CascadeClassifier] = None
        self.scale_factor = float(config.get('detector_scale_factor', DEFAULT_SCALE_FACTOR))
        self.min_neighbors = int(config.get('detector_min_neighbors', DEFAULT_MIN_NEIGHBORS))
        min_size = int(config.get('detector_min_size', 0))
        self.min_size = (min_size, min_size)

    def load(self, asset_bytes: bytes) -> bool:
        """Bind the classifier to a serialized cascade definition."""
        self.is_loaded = False
        if not asset_bytes:
            logger.error("Empty cascade definition")
            return False

        fd, staged_path = tempfile.mkstemp(suffix=".xml", prefix="cascade_")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(asset_bytes)

            cascade = cv2.CascadeClassifier()
            try:
                loaded = cascade.load(staged_path)
            except cv2.error as e:
                logger.error(f"Failed to parse cascade definition: {e}")
                return False
            if not loaded or cascade.empty():
                logger.error("CascadeClassifier rejected the cascade definition")
                return False
        finally:
            try:
                os.remove(staged_path)
            except OSError as e:
                logger.debug(f"Could not remove staged cascade {staged_path}: {e}")

        self._cascade = cascade
        self.is_loaded = True
        logger.info(f"Cascade bound ({len(asset_bytes)} bytes)")
        return True

    def detect(self, gray: np.ndarray) -> List[Region]:
        """Run multi-scale detection on a grayscale frame.

        Returns:
            Candidate regions clipped to the frame, in detector order
        """
        if not self.is_loaded or self._cascade is None:
            raise DetectionError("No cascade loaded")
        if gray is None or gray.ndim != 2:
            raise DetectionError("Detector expects a single-channel frame")

        try:
            rects = self._cascade.detectMultiScale(
                gray,
                scaleFactor=self.scale_factor,
                minNeighbors=self.min_neighbors,
                flags=0,
                minSize=self.min_size,
            )
        except cv2.error as e:
            raise DetectionError(f"detectMultiScale failed: {e}") from e

        frame_h, frame_w = gray.shape[:2]
        regions: List[Region] = []
        for (x, y, w, h) in np.asarray(rects, dtype=np.int64).reshape(-1, 4):
            region = Region.clamped(x, y, w, h, frame_w, frame_h)
            if region is not None:
                regions.append(region)
        return regions
