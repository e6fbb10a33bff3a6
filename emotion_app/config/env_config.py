"""Environment variable overrides for the configuration.

Variables use the ``EMOTION_`` prefix and are validated before being merged
into the configuration dictionary. Invalid values are logged and ignored so a
typo in the shell never prevents the application from starting.
"""
import os
import logging
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

ENV_PREFIX = "EMOTION_"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class EnvironmentError(Exception):
    """Custom exception for environment configuration errors."""
    pass


class EnvironmentValidator:
    """Validates environment variable values."""

    @classmethod
    def validate_numeric_range(cls, value: Union[str, int, float],
                              min_val: Optional[Union[int, float]] = None,
                              max_val: Optional[Union[int, float]] = None,
                              value_type: type = int) -> Union[int, float]:
        """Validate numeric value within specified range.

        Args:
            value: The value to validate
            min_val: Minimum allowed value
            max_val: Maximum allowed value
            value_type: Type to convert to (int or float)

        Returns:
            The converted value

        Raises:
            EnvironmentError: If value is invalid or out of range
        """
        try:
            converted = value_type(value)
        except (ValueError, TypeError):
            raise EnvironmentError(f"Invalid {value_type.__name__} value: {value}")

        if min_val is not None and converted < min_val:
            raise EnvironmentError(f"Value {converted} is below minimum {min_val}")
        if max_val is not None and converted > max_val:
            raise EnvironmentError(f"Value {converted} is above maximum {max_val}")

        return converted

    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise EnvironmentError(f"Invalid log level: {value}")
        return level

    @classmethod
    def validate_path(cls, value: str) -> str:
        if not value or not value.strip():
            raise EnvironmentError("Path cannot be empty")
        return os.path.normpath(value.strip())


# variable suffix -> (config key, validator)
_OVERRIDES = {
    "MODEL_PATH": ("model_path", EnvironmentValidator.validate_path),
    "LABELS_PATH": ("labels_path", EnvironmentValidator.validate_path),
    "CASCADE_PATH": ("cascade_path", EnvironmentValidator.validate_path),
    "CAMERA_INDEX": ("camera_index",
                     lambda v: EnvironmentValidator.validate_numeric_range(v, 0, 64, int)),
    "TENSOR_SIZE": ("tensor_size",
                    lambda v: EnvironmentValidator.validate_numeric_range(v, 1, 4096, int)),
    "LOG_LEVEL": ("log_level", EnvironmentValidator.validate_log_level),
}


def load_environment_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect validated configuration overrides from the environment.

    Args:
        environ: Mapping to read from, defaults to ``os.environ``

    Returns:
        dict: Config keys mapped to their validated override values
    """
    environ = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}

    for suffix, (key, validator) in _OVERRIDES.items():
        raw = environ.get(ENV_PREFIX + suffix)
        if raw is None:
            continue
        try:
            overrides[key] = validator(raw)
        except EnvironmentError as e:
            logger.warning(f"Ignoring {ENV_PREFIX}{suffix}: {e}")

    if overrides:
        logger.info(f"Applied environment overrides: {sorted(overrides)}")
    return overrides
