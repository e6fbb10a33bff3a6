"""Turn a face crop into the model input tensor."""

import cv2
import numpy as np

from ..core.constants import MAX_SAMPLE_VALUE, TENSOR_CHANNELS
from ..core.entities import Region
from ..core.exceptions import PreprocessingError


def crop_region(frame: np.ndarray, region: Region) -> np.ndarray:
    """Copy ``region`` out of ``frame`` after clipping it to the frame bounds.

    Raises:
        PreprocessingError: If nothing of the region lies inside the frame
    """
    if frame is None or frame.ndim < 2:
        raise PreprocessingError("Cannot crop from an empty frame")

    h, w = frame.shape[:2]
    clipped = Region.clamped(region.x, region.y, region.width, region.height, w, h)
    if clipped is None:
        raise PreprocessingError(f"Region {region} lies outside the {w}x{h} frame")

    x1, y1, x2, y2 = clipped.to_xyxy()
    return frame[y1:y2, x1:x2].copy()


def _to_rgb(crop: np.ndarray) -> np.ndarray:
    if crop.ndim == 2:
        return cv2.cvtColor(crop, cv2.COLOR_GRAY2RGB)
    channels = crop.shape[2]
    if channels == 1:
        return cv2.cvtColor(np.ascontiguousarray(crop[:, :, 0]), cv2.COLOR_GRAY2RGB)
    if channels == 3:
        return cv2.cvtColor(crop, cv2.COLOR_BGR2RGB)
    if channels == 4:
        return cv2.cvtColor(crop, cv2.COLOR_BGRA2RGB)
    raise PreprocessingError(f"Unsupported channel count: {channels}")


def preprocess_to_tensor(crop: np.ndarray, size: int) -> np.ndarray:
    """Resize a BGR face crop to ``size`` x ``size`` and pack it as NCHW.

    The crop is resampled bilinearly regardless of its aspect ratio, each
    sample is divided by 255, and channels are written R, G, B, one full
    plane after another.

    Args:
        crop: uint8 crop (H x W, H x W x 3 BGR or H x W x 4 BGRA)
        size: Target spatial size S

    Returns:
        float32 array of shape (1, 3, S, S) with values in [0, 1]

    Raises:
        PreprocessingError: If the crop is empty or malformed
    """
    if size < 1:
        raise PreprocessingError(f"Tensor size must be >= 1, got {size}")
    if crop is None or crop.ndim not in (2, 3):
        raise PreprocessingError("Crop must be a 2-D or 3-D image array")
    if crop.shape[0] == 0 or crop.shape[1] == 0:
        raise PreprocessingError(f"Empty crop: {crop.shape[1]}x{crop.shape[0]}")

    rgb = _to_rgb(np.ascontiguousarray(crop, dtype=np.uint8))
    resized = cv2.resize(rgb, (size, size), interpolation=cv2.INTER_LINEAR)

    normalized = resized.astype(np.float32) / MAX_SAMPLE_VALUE
    tensor = np.transpose(normalized, (2, 0, 1))[np.newaxis, ...]
    return np.ascontiguousarray(tensor.reshape(1, TENSOR_CHANNELS, size, size))
