"""Observable status / emotion / confidence values."""
import logging
import threading
from dataclasses import replace
from typing import Callable, List

from ..core.entities import EmotionState

logger = logging.getLogger(__name__)

StateListener = Callable[[EmotionState], None]


class EmotionStateStore:
    """Holds the current :class:`EmotionState` snapshot.

    Writers swap in a whole new frozen snapshot, so readers on any thread
    always see a consistent (status, emotion, confidence) triple.
    """

    def __init__(self, initial: EmotionState = None):
        self._state = initial or EmotionState()
        self._lock = threading.Lock()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> EmotionState:
        return self._state

    def add_listener(self, cb: StateListener) -> None:
        self._listeners.append(cb)

    def remove_listener(self, cb: StateListener) -> None:
        if cb in self._listeners:
            self._listeners.remove(cb)

    def update(self, **changes) -> EmotionState:
        with self._lock:
            self._state = replace(self._state, **changes)
            snapshot = self._state

        for cb in list(self._listeners):
            try:
                cb(snapshot)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
        return snapshot

    def set_status(self, status: str) -> EmotionState:
        return self.update(status=status)

    def set_emotion(self, emotion: str, confidence: float) -> EmotionState:
        return self.update(emotion=emotion, confidence=float(confidence))
