"""Domain entities (data-only structures) used across services."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .constants import NO_EMOTION

BBox = Tuple[int,int,int,int]  # (x1,y1,x2,y2)

@dataclass(frozen=True, slots=True)
class Region:
    """Axis-aligned face rectangle in frame coordinates."""
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        for name in ("x", "y", "width", "height"):
            if getattr(self, name) < 0:
                raise ValueError(f"Region.{name} must be >= 0, got {getattr(self, name)}")

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def to_xyxy(self) -> BBox:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def fits(self, frame_width: int, frame_height: int) -> bool:
        return self.x + self.width <= frame_width and self.y + self.height <= frame_height

    @classmethod
    def clamped(cls, x: int, y: int, width: int, height: int,
                frame_width: int, frame_height: int) -> Optional["Region"]:
        """Build a region clipped to the frame, or None if nothing is left."""
        x1 = max(0, min(int(x), frame_width))
        y1 = max(0, min(int(y), frame_height))
        x2 = max(x1, min(int(x) + int(width), frame_width))
        y2 = max(y1, min(int(y) + int(height), frame_height))
        if x2 == x1 or y2 == y1:
            return None
        return cls(x1, y1, x2 - x1, y2 - y1)

@dataclass(frozen=True, slots=True)
class ClassificationResult:
    label: str
    confidence: float
    class_index: int
    probabilities: Tuple[float, ...] = ()

    def format_overlay(self) -> str:
        return f"{self.label} {self.confidence * 100:.1f}%"

class ReadinessState(Enum):
    """Lifecycle of the one-time startup sequence."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"

@dataclass(frozen=True, slots=True)
class EmotionState:
    """Snapshot of the values shown by the presentation layer."""
    status: str = "Not started"
    emotion: str = NO_EMOTION
    confidence: float = 0.0

@dataclass(slots=True)
class CycleReport:
    cycle_id: int
    skipped: bool = False
    candidates: Tuple[Region, ...] = ()
    selected: Optional[Region] = None
    result: Optional[ClassificationResult] = None
    error: Optional[str] = None
    latency_ms: float = 0.0
    fps: float = 0.0
    released: int = field(default=0)
