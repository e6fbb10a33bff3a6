"""Base backend interfaces for the detector and inference engine collaborators."""
from abc import ABC, abstractmethod
from typing import List, Dict, Any
import numpy as np
from ..core.entities import Region

class BaseFaceDetector(ABC):
    """Abstract face-region detector working on grayscale frames."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.is_loaded = False

    @abstractmethod
    def load(self, asset_bytes: bytes) -> bool:
        """Bind the detector to a serialized detector definition."""
        pass

    @abstractmethod
    def detect(self, gray: np.ndarray) -> List[Region]:
        """Return candidate face regions for a single-channel frame."""
        pass

    def is_model_loaded(self) -> bool:
        """Check if a detector definition is currently bound."""
        return self.is_loaded


class BaseInferenceBackend(ABC):
    """Abstract classification engine.

    Instances are single-call-at-a-time: callers must not overlap ``run``
    calls on the same instance.
    """

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.is_loaded = False
        self.model_info = {}

    @abstractmethod
    def load_model(self, model_path: str) -> bool:
        """Load a model artifact from path."""
        pass

    @abstractmethod
    def run(self, tensor: np.ndarray) -> np.ndarray:
        """Run one forward pass and return the raw score vector."""
        pass

    @property
    @abstractmethod
    def input_name(self) -> str:
        pass

    @property
    @abstractmethod
    def output_name(self) -> str:
        pass

    def get_model_info(self) -> Dict[str, Any]:
        """Get information about the loaded model."""
        if not self.is_loaded:
            return {'status': 'not_loaded'}
        return dict(self.model_info)

    def is_model_loaded(self) -> bool:
        return self.is_loaded

    def unload_model(self) -> None:
        """Unload the current model to free memory."""
        self.is_loaded = False
        self.model_info = {}
