"""Per-cycle ownership of transient detection buffers."""
import logging
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Releaser = Optional[Callable[[Any], None]]


class TransientResources:
    """Scope that releases every tracked buffer when it exits.

    Buffers are released in reverse acquisition order, on the normal path and
    on the error path alike. Objects exposing ``release()`` (e.g.
    ``cv2.VideoCapture``, ``cv2.UMat``-like wrappers) have it called; plain
    numpy buffers are simply dereferenced.
    """

    def __init__(self):
        self._items: List[Tuple[Any, Releaser]] = []
        self.allocated = 0
        self.released = 0

    def track(self, obj: Any, release: Releaser = None) -> Any:
        """Register ``obj`` for release and return it unchanged."""
        self._items.append((obj, release))
        self.allocated += 1
        return obj

    @property
    def outstanding(self) -> int:
        return len(self._items)

    def release_all(self) -> None:
        while self._items:
            obj, release = self._items.pop()
            try:
                if release is not None:
                    release(obj)
                elif hasattr(obj, "release"):
                    obj.release()
            except Exception as e:
                logger.warning(f"Failed to release {type(obj).__name__}: {e}")
            finally:
                self.released += 1
            del obj

    def __enter__(self) -> "TransientResources":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.release_all()
        return False
