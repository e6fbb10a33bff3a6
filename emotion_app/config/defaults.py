"""Default configuration values."""

from typing import Any, Dict

from ..core.constants import DEFAULT_MIN_NEIGHBORS, DEFAULT_SCALE_FACTOR, DEFAULT_TENSOR_SIZE

DEFAULT_CONFIG: Dict[str, Any] = {
    # Detector asset ("" means the cascade shipped with OpenCV)
    "cascade_path": "",
    "detector_scale_factor": DEFAULT_SCALE_FACTOR,
    "detector_min_neighbors": DEFAULT_MIN_NEIGHBORS,
    "detector_min_size": 0,  # 0 = no minimum face size

    # Classification model
    "model_path": "models/emotion_yolo11n_cls.onnx",
    "labels_path": "models/classes.json",
    "tensor_size": DEFAULT_TENSOR_SIZE,
    "execution_providers": ["CPUExecutionProvider"],
    "model_input_name": "",   # "" = first input of the session
    "model_output_name": "",  # "" = first output of the session

    # Webcam Settings
    "camera_index": 0,
    "camera_width": 640,
    "camera_height": 480,
    "camera_fps": 30,

    # Loop pacing (tk ``after`` interval, ~60 Hz display refresh)
    "refresh_interval_ms": 16,

    # Overlay
    "overlay_alpha": 0.6,

    # Debug and Logging Settings
    "debug": False,
    "log_level": "INFO",
    "log_dir": "logs",
    "enable_file_logging": False,
    "structured_logging": False,
}
