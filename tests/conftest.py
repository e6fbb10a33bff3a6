"""Pytest configuration and shared fixtures for the emotion detector.

Fixtures here replace the camera, the cascade and the ONNX model with small
deterministic fakes so the pipeline can be exercised without hardware or
model files.
"""
import sys
import json
import tempfile
import logging
from pathlib import Path
from typing import List, Optional
from unittest.mock import Mock

import numpy as np
import pytest

# Add the project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from emotion_app.backends.base_backend import BaseFaceDetector, BaseInferenceBackend
from emotion_app.config.settings import Config
from emotion_app.core.entities import Region
from emotion_app.core.exceptions import InferenceError
from emotion_app.services.initialization_service import PipelineContext
from emotion_app.services.webcam_service import FrameSource


# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

logging.getLogger('PIL').setLevel(logging.WARNING)

EMOTION_LABELS = ["angry", "happy", "neutral", "sad", "surprise"]


class FakeDetector(BaseFaceDetector):
    """Detector returning a fixed list of regions."""

    def __init__(self, config=None, regions: Optional[List[Region]] = None):
        super().__init__(config or {})
        self.regions = list(regions or [])
        self.load_calls = 0
        self.detect_calls = 0
        self.last_gray = None

    def load(self, asset_bytes: bytes) -> bool:
        self.load_calls += 1
        self.is_loaded = bool(asset_bytes)
        return self.is_loaded

    def detect(self, gray: np.ndarray) -> List[Region]:
        self.detect_calls += 1
        self.last_gray = gray
        return list(self.regions)


class FakeEngine(BaseInferenceBackend):
    """Engine returning fixed scores, optionally failing on demand."""

    def __init__(self, config=None, scores=None):
        super().__init__(config or {})
        self.scores = np.asarray(scores if scores is not None else [0.1, 3.0, 0.2, 0.0, -1.0],
                                 dtype=np.float32)
        self.fail = False
        self.load_calls = 0
        self.run_calls = 0
        self.last_tensor = None

    @property
    def input_name(self) -> str:
        return "images"

    @property
    def output_name(self) -> str:
        return "output0"

    def load_model(self, model_path: str) -> bool:
        self.load_calls += 1
        self.is_loaded = True
        return True

    def run(self, tensor: np.ndarray) -> np.ndarray:
        self.run_calls += 1
        self.last_tensor = tensor
        if self.fail:
            raise InferenceError("engine failure")
        return self.scores.copy()


class StaticFrameSource(FrameSource):
    """Frame source that always hands out copies of one frame."""

    def __init__(self, frame: Optional[np.ndarray]):
        self.frame = frame
        self.reads = 0

    def is_frame_available(self) -> bool:
        return self.frame is not None

    def get_current_frame(self) -> Optional[np.ndarray]:
        self.reads += 1
        return None if self.frame is None else self.frame.copy()

    def get_resolution(self):
        if self.frame is None:
            return (0, 0)
        return (self.frame.shape[1], self.frame.shape[0])


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config():
    """Provide a real configuration with default values."""
    return Config()


@pytest.fixture
def mock_config():
    """Provide a mock configuration object for testing."""
    config = Mock(spec=Config)
    config.cascade_path = ""
    config.model_path = "models/emotion_yolo11n_cls.onnx"
    config.labels_path = "models/classes.json"
    config.tensor_size = 64
    config.overlay_alpha = 0.6
    config.refresh_interval_ms = 16
    config.debug = False
    config.camera_index = 0
    config.camera_width = 640
    config.camera_height = 480
    config.camera_fps = 30
    return config


@pytest.fixture
def sample_image():
    """Provide a 640x480 BGR test frame with a bright square in the middle."""
    image = np.full((480, 640, 3), 40, dtype=np.uint8)
    image[140:340, 220:420] = (200, 180, 160)
    return image


@pytest.fixture
def face_region():
    return Region(220, 140, 200, 200)


@pytest.fixture
def fake_detector(face_region):
    return FakeDetector(regions=[face_region])


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def pipeline_context(fake_detector, fake_engine):
    return PipelineContext(detector=fake_detector, engine=fake_engine,
                           labels=tuple(EMOTION_LABELS))


@pytest.fixture
def frame_source(sample_image):
    return StaticFrameSource(sample_image)


@pytest.fixture
def labels_file(temp_dir):
    path = temp_dir / "classes.json"
    path.write_text(json.dumps(EMOTION_LABELS), encoding="utf-8")
    return path


@pytest.fixture
def cascade_file(temp_dir):
    path = temp_dir / "cascade.xml"
    path.write_bytes(b"<opencv_storage></opencv_storage>")
    return path


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "webcam: mark test as requiring webcam access")
