"""Unit tests for WebcamService.

The camera is replaced by a mocked ``cv2.VideoCapture``.
"""
import threading
import time

import cv2
import numpy as np
import pytest
from unittest.mock import Mock, patch

from emotion_app.core.exceptions import WebcamError
from emotion_app.services.webcam_service import WebcamService


def _mock_capture(frame=None, opened=True):
    cap = Mock()
    cap.isOpened.return_value = opened
    cap.read.return_value = (frame is not None, frame)
    cap.get.side_effect = lambda prop: {
        cv2.CAP_PROP_FRAME_WIDTH: 640,
        cv2.CAP_PROP_FRAME_HEIGHT: 480,
    }.get(prop, 0)
    return cap


def _wait_for_frame(service, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if service.is_frame_available():
            return True
        time.sleep(0.01)
    return False


class TestWebcamService:
    """Test suite for WebcamService functionality."""

    def test_from_config(self, mock_config):
        mock_config.camera_index = 2
        service = WebcamService.from_config(mock_config)

        assert service.camera_index == 2
        assert service.width == 640
        assert service.target_fps == 30

    def test_no_frame_before_start(self):
        service = WebcamService()

        assert not service.is_frame_available()
        assert service.get_current_frame() is None
        assert service.get_resolution() == (0, 0)

    @patch('cv2.VideoCapture')
    def test_start_stream_failure_raises(self, mock_video_capture):
        cap = _mock_capture(opened=False)
        mock_video_capture.return_value = cap

        with pytest.raises(WebcamError):
            WebcamService().start_stream()

        cap.release.assert_called_once()

    @patch('cv2.VideoCapture')
    def test_stream_delivers_frames(self, mock_video_capture, sample_image):
        cap = _mock_capture(frame=sample_image)
        mock_video_capture.return_value = cap
        service = WebcamService(fps=100)

        try:
            assert service.start_stream() is True
            assert service.is_streaming()
            assert _wait_for_frame(service)
            assert service.get_resolution() == (640, 480)

            frame = service.get_current_frame()
            assert np.array_equal(frame, sample_image)
            frame[:] = 0
            assert service.get_current_frame().sum() > 0
        finally:
            service.stop_stream()

        assert not service.is_streaming()
        assert service.get_current_frame() is None
        cap.release.assert_called_once()

    @patch('cv2.VideoCapture')
    def test_requested_resolution_applied(self, mock_video_capture):
        cap = _mock_capture(frame=None)
        mock_video_capture.return_value = cap
        service = WebcamService(width=320, height=240)

        try:
            service.start_stream()
        finally:
            service.stop_stream()

        cap.set.assert_any_call(cv2.CAP_PROP_FRAME_WIDTH, 320)
        cap.set.assert_any_call(cv2.CAP_PROP_FRAME_HEIGHT, 240)

    def test_stop_without_start(self):
        WebcamService().stop_stream()

    @patch('cv2.VideoCapture')
    def test_stuck_reader_releases_camera_itself(self, mock_video_capture, sample_image):
        entered, unblock = threading.Event(), threading.Event()

        def blocking_read():
            entered.set()
            unblock.wait(timeout=5.0)
            return True, sample_image

        cap = _mock_capture()
        cap.read.side_effect = blocking_read
        mock_video_capture.return_value = cap
        service = WebcamService(fps=100)
        service.stop_timeout = 0.05

        service.start_stream()
        reader = service._stream_thread
        assert entered.wait(timeout=2.0)
        service.stop_stream()

        # Capture must stay open while the reader is inside read()
        cap.release.assert_not_called()

        unblock.set()
        reader.join(timeout=2.0)

        assert not reader.is_alive()
        cap.release.assert_called_once()
        assert service.get_current_frame() is None
