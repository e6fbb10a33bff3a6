"""Utility functions package."""

from .image_utils import ensure_bgr, resize_to_fit, to_grayscale

__all__ = ["ensure_bgr", "resize_to_fit", "to_grayscale"]
