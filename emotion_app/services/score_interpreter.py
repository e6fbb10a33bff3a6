"""Convert raw model scores into a labelled classification."""
import logging
from typing import Sequence

import numpy as np

from ..core.entities import ClassificationResult
from ..core.exceptions import InterpretationError

logger = logging.getLogger(__name__)


def softmax(scores) -> np.ndarray:
    """Numerically stable normalized exponential of a score vector."""
    values = np.asarray(scores, dtype=np.float64).reshape(-1)
    if values.size == 0:
        raise InterpretationError("Score vector is empty")
    if np.any(np.isnan(values)) or np.any(values == np.inf):
        raise InterpretationError("Score vector contains NaN or +inf values")
    if np.all(values == -np.inf):
        raise InterpretationError("Score vector has no finite values")

    exps = np.exp(values - values.max())
    return exps / exps.sum()


def fallback_label(index: int) -> str:
    return f"class_{index}"


def interpret_scores(scores, labels: Sequence[str]) -> ClassificationResult:
    """Pick the most probable class and attach its label.

    A label list shorter than the score vector does not fail: the missing
    labels are replaced with ``class_<index>`` so the live loop keeps going.
    """
    probs = softmax(scores)
    index = int(np.argmax(probs))  # first occurrence on ties

    if len(labels) != probs.size:
        logger.debug(f"Label count {len(labels)} does not match score count {probs.size}")

    label = labels[index] if index < len(labels) else fallback_label(index)
    return ClassificationResult(
        label=str(label),
        confidence=float(probs[index]),
        class_index=index,
        probabilities=tuple(float(p) for p in probs),
    )
