"""Unit tests for score interpretation."""
import numpy as np
import pytest

from emotion_app.core.exceptions import InterpretationError
from emotion_app.services.score_interpreter import fallback_label, interpret_scores, softmax


class TestSoftmax:
    """Normalized exponential."""

    def test_known_values(self):
        probs = softmax([2.0, 1.0, 0.1])

        assert np.allclose(probs, [0.659, 0.242, 0.099], atol=1e-3)

    def test_sums_to_one(self):
        probs = softmax(np.random.randn(7) * 10)

        assert abs(probs.sum() - 1.0) < 1e-5
        assert np.all(probs >= 0.0)

    def test_shift_invariance(self):
        scores = np.array([0.5, -1.0, 2.5, 0.0])

        assert np.allclose(softmax(scores), softmax(scores + 1000.0))

    def test_large_scores_do_not_overflow(self):
        probs = softmax([1000.0, 999.0])

        assert np.all(np.isfinite(probs))
        assert probs[0] > probs[1]

    def test_single_score(self):
        assert np.allclose(softmax([-3.0]), [1.0])

    def test_negative_infinity_maps_to_zero(self):
        probs = softmax([2.0, float("-inf"), 0.1])

        assert probs[1] == 0.0
        assert abs(probs.sum() - 1.0) < 1e-9

    def test_all_negative_infinity_raises(self):
        with pytest.raises(InterpretationError):
            softmax([float("-inf"), float("-inf")])

    def test_positive_infinity_raises(self):
        with pytest.raises(InterpretationError):
            softmax([1.0, float("inf")])

    def test_empty_raises(self):
        with pytest.raises(InterpretationError):
            softmax([])

    def test_non_finite_raises(self):
        with pytest.raises(InterpretationError):
            softmax([1.0, float("nan")])


class TestInterpretScores:
    """Argmax, labels and confidence."""

    def test_picks_argmax_label(self):
        result = interpret_scores([0.1, 3.0, 0.2], ["angry", "happy", "sad"])

        assert result.label == "happy"
        assert result.class_index == 1
        assert result.confidence == pytest.approx(max(result.probabilities))
        assert len(result.probabilities) == 3

    def test_ties_pick_first(self):
        result = interpret_scores([1.0, 1.0], ["a", "b"])

        assert result.label == "a"
        assert result.confidence == pytest.approx(0.5)

    def test_negative_infinity_score_is_tolerated(self):
        result = interpret_scores([2.0, float("-inf"), 0.1], ["angry", "happy", "sad"])

        assert result.label == "angry"
        assert result.probabilities[1] == 0.0

    def test_missing_label_falls_back(self):
        result = interpret_scores([0.0, 0.0, 5.0], ["angry", "happy"])

        assert result.label == "class_2"
        assert result.class_index == 2

    def test_accepts_nested_output(self):
        result = interpret_scores(np.array([[0.0, 4.0]], dtype=np.float32), ["x", "y"])

        assert result.label == "y"


def test_fallback_label():
    assert fallback_label(5) == "class_5"
