"""Unit tests for core entities."""
import pytest
from dataclasses import FrozenInstanceError

from emotion_app.core.entities import (
    ClassificationResult, CycleReport, EmotionState, ReadinessState, Region
)


class TestRegion:
    """Test suite for the Region entity."""

    def test_area_and_corners(self):
        region = Region(10, 20, 30, 40)

        assert region.area == 1200
        assert region.to_xyxy() == (10, 20, 40, 60)
        assert not region.is_empty

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError):
            Region(-1, 0, 10, 10)
        with pytest.raises(ValueError):
            Region(0, 0, 10, -5)

    def test_region_immutability(self):
        region = Region(0, 0, 10, 10)

        with pytest.raises(FrozenInstanceError):
            region.width = 20

    def test_fits(self):
        assert Region(0, 0, 640, 480).fits(640, 480)
        assert not Region(600, 0, 50, 10).fits(640, 480)

    def test_clamped_inside_frame_is_unchanged(self):
        assert Region.clamped(10, 10, 50, 50, 640, 480) == Region(10, 10, 50, 50)

    def test_clamped_clips_overhanging_region(self):
        region = Region.clamped(600, 450, 100, 100, 640, 480)

        assert region == Region(600, 450, 40, 30)
        assert region.fits(640, 480)

    def test_clamped_negative_origin(self):
        assert Region.clamped(-10, -20, 50, 50, 640, 480) == Region(0, 0, 40, 30)

    def test_clamped_outside_frame_returns_none(self):
        assert Region.clamped(700, 10, 50, 50, 640, 480) is None
        assert Region.clamped(10, 10, 0, 50, 640, 480) is None


class TestClassificationResult:
    """Test suite for ClassificationResult."""

    def test_format_overlay_uses_one_decimal_percent(self):
        result = ClassificationResult(label="happy", confidence=0.87654, class_index=1)

        assert result.format_overlay() == "happy 87.7%"

    def test_format_overlay_full_confidence(self):
        result = ClassificationResult(label="sad", confidence=1.0, class_index=3)

        assert result.format_overlay() == "sad 100.0%"


class TestEmotionState:
    """Test suite for EmotionState defaults."""

    def test_defaults(self):
        state = EmotionState()

        assert state.status == "Not started"
        assert state.emotion == "-"
        assert state.confidence == 0.0

    def test_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            EmotionState().emotion = "happy"


def test_readiness_states_are_distinct():
    assert len({s.value for s in ReadinessState}) == 4


def test_cycle_report_defaults():
    report = CycleReport(cycle_id=3)

    assert report.cycle_id == 3
    assert not report.skipped
    assert report.candidates == ()
    assert report.selected is None
    assert report.result is None
    assert report.error is None
    assert report.released == 0
