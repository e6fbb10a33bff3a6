"""Drawing surface shared by detection and presentation."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple

import cv2
import numpy as np

from ..core.entities import Region
from ..core.exceptions import ValidationError
from ..utils.image_utils import ensure_bgr

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]  # BGR


class PresentationSurface(ABC):
    """Drawing primitives the frame pipeline relies on."""

    @abstractmethod
    def begin_frame(self, frame: np.ndarray) -> np.ndarray:
        """Copy ``frame`` onto the surface and return the working image."""
        pass

    @abstractmethod
    def draw_rectangle(self, region: Region, color: Color, thickness: int = 2) -> None:
        pass

    @abstractmethod
    def draw_filled_rectangle(self, x: int, y: int, width: int, height: int,
                              color: Color, alpha: float = 1.0) -> None:
        pass

    @abstractmethod
    def draw_text(self, text: str, origin: Tuple[int, int], color: Color) -> None:
        pass

    @abstractmethod
    def present(self) -> None:
        """Hand the finished frame to the display."""
        pass


class FrameSurface(PresentationSurface):
    """OpenCV drawing on a BGR working copy of the current frame.

    ``on_present`` receives the annotated image once per cycle; the tkinter
    canvas uses it to refresh the preview.
    """

    FONT = cv2.FONT_HERSHEY_SIMPLEX
    FONT_SCALE = 0.55
    FONT_THICKNESS = 1

    def __init__(self, on_present: Optional[Callable[[np.ndarray], None]] = None):
        self._image: Optional[np.ndarray] = None
        self._on_present = on_present
        self.presented_count = 0

    @property
    def image(self) -> Optional[np.ndarray]:
        return self._image

    def set_present_callback(self, on_present: Optional[Callable[[np.ndarray], None]]) -> None:
        self._on_present = on_present

    def begin_frame(self, frame: np.ndarray) -> np.ndarray:
        self._image = ensure_bgr(frame)
        return self._image

    def _require_image(self) -> np.ndarray:
        if self._image is None:
            raise ValidationError("No frame on the surface; call begin_frame first")
        return self._image

    def draw_rectangle(self, region: Region, color: Color, thickness: int = 2) -> None:
        image = self._require_image()
        x1, y1, x2, y2 = region.to_xyxy()
        cv2.rectangle(image, (x1, y1), (x2, y2), color, thickness)

    def draw_filled_rectangle(self, x: int, y: int, width: int, height: int,
                              color: Color, alpha: float = 1.0) -> None:
        image = self._require_image()
        h, w = image.shape[:2]
        region = Region.clamped(x, y, width, height, w, h)
        if region is None:
            return

        x1, y1, x2, y2 = region.to_xyxy()
        if alpha >= 1.0:
            image[y1:y2, x1:x2] = color
            return

        roi = image[y1:y2, x1:x2]
        overlay = np.empty_like(roi)
        overlay[:] = color
        image[y1:y2, x1:x2] = cv2.addWeighted(overlay, alpha, roi, 1.0 - alpha, 0)

    def draw_text(self, text: str, origin: Tuple[int, int], color: Color) -> None:
        image = self._require_image()
        cv2.putText(image, text, (int(origin[0]), int(origin[1])), self.FONT,
                    self.FONT_SCALE, color, self.FONT_THICKNESS, cv2.LINE_AA)

    def present(self) -> None:
        image = self._require_image()
        self.presented_count += 1
        if self._on_present is not None:
            self._on_present(image)
