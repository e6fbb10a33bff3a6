"""Image processing utilities."""

import cv2
import numpy as np

from ..core.exceptions import ValidationError

def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR, BGRA or gray frame to a single-channel frame."""
    if image is None or image.size == 0:
        raise ValidationError("Cannot convert an empty image")
    if image.ndim == 2:
        return image.copy()
    channels = image.shape[2]
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    if channels == 1:
        return image[:, :, 0].copy()
    raise ValidationError(f"Unsupported channel count: {channels}")

def ensure_bgr(image: np.ndarray) -> np.ndarray:
    """Return a 3-channel BGR copy of ``image``."""
    if image is None or image.size == 0:
        raise ValidationError("Cannot convert an empty image")
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 1:
        return cv2.cvtColor(np.ascontiguousarray(image[:, :, 0]), cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    if image.shape[2] == 3:
        return image.copy()
    raise ValidationError(f"Unsupported channel count: {image.shape[2]}")

def resize_to_fit(image: np.ndarray, max_width: int, max_height: int) -> np.ndarray:
    """Resize image to fit the box while maintaining aspect ratio."""
    h, w = image.shape[:2]
    if max_width <= 0 or max_height <= 0:
        return image

    scale = min(max_width / w, max_height / h)
    new_w = max(1, int(w * scale))
    new_h = max(1, int(h * scale))
    if (new_w, new_h) == (w, h):
        return image

    interpolation = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_LINEAR
    return cv2.resize(image, (new_w, new_h), interpolation=interpolation)
