"""Core domain entities and constants."""

from .entities import (
    Region, ClassificationResult, EmotionState, ReadinessState, CycleReport, BBox
)
from .exceptions import (
    ApplicationError, ConfigError, InitializationError, PipelineError, ValidationError
)
from .constants import APP_NAME, VERSION, DEFAULT_TENSOR_SIZE

__all__ = [
    "Region", "ClassificationResult", "EmotionState", "ReadinessState", "CycleReport", "BBox",
    "ApplicationError", "ConfigError", "InitializationError", "PipelineError", "ValidationError",
    "APP_NAME", "VERSION", "DEFAULT_TENSOR_SIZE"
]
