"""Backend implementations for the face detector and the inference engine."""

from .base_backend import BaseFaceDetector, BaseInferenceBackend
from .cascade_backend import HaarCascadeDetector
from .onnx_backend import OnnxInferenceBackend

__all__ = [
    "BaseFaceDetector", "BaseInferenceBackend",
    "HaarCascadeDetector", "OnnxInferenceBackend"
]
