"""
Main application package for the Face Emotion Detection System.
"""

__version__ = "1.0.0"
__author__ = "Face Emotion Detection Team"

from .config.settings import Config, load_config
from .core.entities import (
    ClassificationResult, CycleReport, EmotionState, ReadinessState, Region
)

__all__ = [
    "Config", "load_config",
    "ClassificationResult", "CycleReport", "EmotionState", "ReadinessState", "Region"
]
