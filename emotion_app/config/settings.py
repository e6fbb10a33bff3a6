"""Configuration dataclass and loading utilities.

Provides a strongly-typed configuration object that is injected into the
startup sequence, the frame pipeline and the UI instead of a global
module-level dictionary.

Precedence (lowest to highest): ``DEFAULT_CONFIG``, ``config.json``,
``EMOTION_*`` environment variables.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional
import json, os, logging
from .defaults import DEFAULT_CONFIG
from .env_config import load_environment_overrides
from ..core.exceptions import ConfigError

logger = logging.getLogger(__name__)

@dataclass(slots=True)
class Config:
    # Detector
    cascade_path: str = DEFAULT_CONFIG["cascade_path"]
    detector_scale_factor: float = DEFAULT_CONFIG["detector_scale_factor"]
    detector_min_neighbors: int = DEFAULT_CONFIG["detector_min_neighbors"]
    detector_min_size: int = DEFAULT_CONFIG["detector_min_size"]

    # Model
    model_path: str = DEFAULT_CONFIG["model_path"]
    labels_path: str = DEFAULT_CONFIG["labels_path"]
    tensor_size: int = DEFAULT_CONFIG["tensor_size"]
    execution_providers: List[str] = field(
        default_factory=lambda: list(DEFAULT_CONFIG["execution_providers"]))
    model_input_name: str = DEFAULT_CONFIG["model_input_name"]
    model_output_name: str = DEFAULT_CONFIG["model_output_name"]

    # Webcam
    camera_index: int = DEFAULT_CONFIG["camera_index"]
    camera_width: int = DEFAULT_CONFIG["camera_width"]
    camera_height: int = DEFAULT_CONFIG["camera_height"]
    camera_fps: int = DEFAULT_CONFIG["camera_fps"]

    # Loop / overlay
    refresh_interval_ms: int = DEFAULT_CONFIG["refresh_interval_ms"]
    overlay_alpha: float = DEFAULT_CONFIG["overlay_alpha"]

    # Logging
    debug: bool = DEFAULT_CONFIG["debug"]
    log_level: str = DEFAULT_CONFIG["log_level"]
    log_dir: str = DEFAULT_CONFIG["log_dir"]
    enable_file_logging: bool = DEFAULT_CONFIG["enable_file_logging"]
    structured_logging: bool = DEFAULT_CONFIG["structured_logging"]

    # Arbitrary extra values retained for forward compatibility
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        validate_config(self)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        extra = d.pop("extra", {})
        d.update(extra)
        return d

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, self.extra.get(key, default))


def validate_config(cfg: Config) -> None:
    """Reject values the pipeline cannot run with.

    Raises:
        ConfigError: If a value is out of range
    """
    if int(cfg.tensor_size) < 1:
        raise ConfigError(f"tensor_size must be >= 1, got {cfg.tensor_size}")
    if float(cfg.detector_scale_factor) <= 1.0:
        raise ConfigError(
            f"detector_scale_factor must be > 1.0, got {cfg.detector_scale_factor}")
    if int(cfg.detector_min_neighbors) < 0:
        raise ConfigError(
            f"detector_min_neighbors must be >= 0, got {cfg.detector_min_neighbors}")
    if int(cfg.detector_min_size) < 0:
        raise ConfigError(f"detector_min_size must be >= 0, got {cfg.detector_min_size}")
    if not 0.0 <= float(cfg.overlay_alpha) <= 1.0:
        raise ConfigError(f"overlay_alpha must be within [0, 1], got {cfg.overlay_alpha}")
    if int(cfg.refresh_interval_ms) < 1:
        raise ConfigError(
            f"refresh_interval_ms must be >= 1, got {cfg.refresh_interval_ms}")
    if not cfg.execution_providers:
        raise ConfigError("execution_providers must name at least one provider")


def _read_config_file(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        logger.info(f"Configuration file '{path}' does not exist. Using defaults.")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded_data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON configuration file '{path}': {e}. Using defaults.")
        return {}
    except PermissionError:
        logger.error(f"Permission denied reading configuration file '{path}'. Using defaults.")
        return {}
    except (UnicodeDecodeError, OSError) as e:
        logger.error(f"Failed to read configuration file '{path}': {e}. Using defaults.")
        return {}

    if loaded_data is None:
        logger.warning(f"Configuration file '{path}' is empty, using defaults")
        return {}
    if not isinstance(loaded_data, dict):
        logger.error(f"Configuration file '{path}' does not contain a valid JSON object, using defaults")
        return {}

    logger.info(f"Successfully loaded configuration from '{path}'")
    return loaded_data


def load_config(path: str = "config.json",
                environ: Optional[Mapping[str, str]] = None) -> Config:
    """Load configuration from defaults, a JSON file and the environment.

    Args:
        path: Path to config.json file
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        Config: Loaded and validated configuration

    Raises:
        ConfigError: If the merged values are invalid
    """
    merged = {**DEFAULT_CONFIG, **_read_config_file(path)}
    merged.update(load_environment_overrides(environ))

    known = set(Config.__dataclass_fields__) - {"extra"}
    extra = {k: v for k, v in merged.items() if k not in known}
    if extra:
        logger.info(f"Found extra configuration keys: {list(extra.keys())}")

    try:
        return Config(**{k: merged[k] for k in known if k in merged}, extra=extra)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
