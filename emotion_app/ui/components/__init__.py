"""UI components package."""

from .emotion_panel import EmotionPanel
from .optimized_canvas import OptimizedCanvas

__all__ = [
    'EmotionPanel',
    'OptimizedCanvas'
]
