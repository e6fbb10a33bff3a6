"""Webcam service for camera capture and frame management."""

import cv2
import threading
import time
import logging
import platform
from abc import ABC, abstractmethod
from typing import Optional, Tuple
import numpy as np

from ..core.exceptions import WebcamError

logger = logging.getLogger(__name__)


class FrameSource(ABC):
    """Delivers the most recent raw frame on demand."""

    @abstractmethod
    def is_frame_available(self) -> bool:
        pass

    @abstractmethod
    def get_current_frame(self) -> Optional[np.ndarray]:
        """Return a copy of the latest frame, or None."""
        pass

    @abstractmethod
    def get_resolution(self) -> Tuple[int, int]:
        """Native (width, height) of the frames."""
        pass


class WebcamService(FrameSource):
    """Captures frames on a background thread and keeps only the latest one.

    The pipeline reads :meth:`get_current_frame` once per cycle, which never
    blocks on the camera.
    """

    stop_timeout = 2.0

    def __init__(self, camera_index: int = 0, width: int = 640, height: int = 480, fps: int = 30):
        """Initialize webcam service.

        Args:
            camera_index: Camera device index
            width: Requested frame width
            height: Requested frame height
            fps: Target frames per second
        """
        self.camera_index = camera_index
        self.width = width
        self.height = height
        self.target_fps = fps

        self._capture: Optional[cv2.VideoCapture] = None
        self._is_streaming = False
        self._stream_thread: Optional[threading.Thread] = None
        self._current_frame: Optional[np.ndarray] = None
        self._frame_lock = threading.Lock()
        self._capture_lock = threading.Lock()
        self._loop_done = False

    @classmethod
    def from_config(cls, config) -> "WebcamService":
        return cls(
            camera_index=config.camera_index,
            width=config.camera_width,
            height=config.camera_height,
            fps=config.camera_fps,
        )

    @staticmethod
    def _backend() -> int:
        return cv2.CAP_DSHOW if platform.system() == "Windows" else cv2.CAP_ANY

    def start_stream(self) -> bool:
        """Open the camera and start the capture thread.

        Returns:
            True if stream started successfully

        Raises:
            WebcamError: If the camera cannot be opened
        """
        if self._is_streaming:
            logger.warning("Stream already running")
            return True

        try:
            self._capture = cv2.VideoCapture(self.camera_index, self._backend())
        except Exception as e:
            self._cleanup()
            raise WebcamError(f"Failed to open camera {self.camera_index}: {e}") from e

        if not self._capture.isOpened():
            self._cleanup()
            raise WebcamError(f"Failed to open camera {self.camera_index}")

        self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._capture.set(cv2.CAP_PROP_FPS, self.target_fps)

        actual_width, actual_height = self.get_resolution()
        logger.info(f"Camera {self.camera_index} opened: {actual_width}x{actual_height}")

        self._is_streaming = True
        self._loop_done = False

        self._stream_thread = threading.Thread(target=self._stream_loop, args=(self._capture,),
                                               name="WebcamCapture", daemon=True)
        self._stream_thread.start()
        return True

    def stop_stream(self):
        """Stop webcam streaming and release resources."""
        if not self._is_streaming:
            self._cleanup()
            return

        self._is_streaming = False

        if self._stream_thread and self._stream_thread.is_alive():
            self._stream_thread.join(timeout=self.stop_timeout)
        self._stream_thread = None

        with self._capture_lock:
            if not self._loop_done:
                # Reader is still blocked in read(); it releases the capture on exit
                logger.warning("Capture thread did not stop in time, deferring camera release")
                self._capture = None
        self._cleanup()
        logger.info("Stream stopped")

    def _stream_loop(self, capture: cv2.VideoCapture):
        """Capture loop running in a separate thread."""
        frame_delay = 1.0 / max(1, self.target_fps)

        while self._is_streaming:
            loop_start = time.time()

            try:
                if capture.isOpened():
                    ret, frame = capture.read()

                    if ret and frame is not None:
                        with self._frame_lock:
                            if self._is_streaming:
                                self._current_frame = frame
                    else:
                        logger.warning("Failed to read frame from camera")
                        time.sleep(0.1)

            except Exception as e:
                logger.error(f"Error in stream loop: {e}")
                time.sleep(0.1)

            sleep_time = frame_delay - (time.time() - loop_start)
            if sleep_time > 0:
                time.sleep(sleep_time)

        with self._capture_lock:
            self._loop_done = True
            if self._capture is not capture:
                capture.release()

    def is_frame_available(self) -> bool:
        with self._frame_lock:
            return self._current_frame is not None

    def get_current_frame(self) -> Optional[np.ndarray]:
        """Get a copy of the most recent frame, or None if no frame yet."""
        with self._frame_lock:
            return self._current_frame.copy() if self._current_frame is not None else None

    def get_resolution(self) -> Tuple[int, int]:
        """Get current camera resolution as (width, height)."""
        if self._capture and self._capture.isOpened():
            width = int(self._capture.get(cv2.CAP_PROP_FRAME_WIDTH))
            height = int(self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT))
            return (width, height)
        return (0, 0)

    def is_streaming(self) -> bool:
        return self._is_streaming

    def _cleanup(self):
        """Clean up camera resources."""
        if self._capture is not None:
            self._capture.release()
            self._capture = None

        with self._frame_lock:
            self._current_frame = None
