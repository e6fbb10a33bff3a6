"""Schedulers that request the next pipeline cycle."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class FrameScheduler(ABC):
    """Requests a single future call of a cycle callback."""

    @abstractmethod
    def schedule(self, callback: Callable[[], None]) -> None:
        """Queue ``callback`` to run once at the next refresh."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        pass


class TkAfterScheduler(FrameScheduler):
    """Runs cycles on the tkinter event loop via ``after``."""

    def __init__(self, tk_root, interval_ms: int = 16):
        self._tk_root = tk_root
        self.interval_ms = max(1, int(interval_ms))
        self._after_id = None

    def schedule(self, callback: Callable[[], None]) -> None:
        self._after_id = self._tk_root.after(self.interval_ms, callback)

    def cancel(self) -> None:
        if self._after_id is not None:
            try:
                self._tk_root.after_cancel(self._after_id)
            except Exception as e:  # window already destroyed
                logger.debug(f"after_cancel failed: {e}")
            self._after_id = None


class ManualScheduler(FrameScheduler):
    """Scheduler driven by explicit :meth:`tick` calls (tests, headless runs)."""

    def __init__(self):
        self._pending: Optional[Callable[[], None]] = None
        self.scheduled_count = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self._pending = callback
        self.scheduled_count += 1

    def cancel(self) -> None:
        self._pending = None

    def tick(self) -> bool:
        """Run the pending callback; returns False if nothing was queued."""
        callback, self._pending = self._pending, None
        if callback is None:
            return False
        callback()
        return True
