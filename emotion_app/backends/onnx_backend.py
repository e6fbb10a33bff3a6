"""Classification backend using ONNX Runtime."""
import os
import logging
from typing import List, Dict, Any, Optional
import numpy as np
import onnxruntime as ort
from .base_backend import BaseInferenceBackend
from ..core.exceptions import InferenceError, ModelLoadError

logger = logging.getLogger(__name__)


class OnnxInferenceBackend(BaseInferenceBackend):
    """Runs an ONNX classification model through ``onnxruntime.InferenceSession``."""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self._session: Optional[ort.InferenceSession] = None
        self._input_name: str = config.get('model_input_name', '') or ''
        self._output_name: str = config.get('model_output_name', '') or ''
        self.providers: List[str] = list(
            config.get('execution_providers', None) or ['CPUExecutionProvider'])

    @property
    def input_name(self) -> str:
        return self._input_name

    @property
    def output_name(self) -> str:
        return self._output_name

    def load_model(self, model_path: str) -> bool:
        """Create the inference session for ``model_path``.

        Raises:
            ModelLoadError: If the file is missing or the runtime rejects it
        """
        if not os.path.isfile(model_path):
            raise ModelLoadError(f"Model file not found: {model_path}")

        available = ort.get_available_providers()
        providers = [p for p in self.providers if p in available]
        if not providers:
            logger.warning(f"None of {self.providers} available, using CPUExecutionProvider")
            providers = ['CPUExecutionProvider']

        try:
            session = ort.InferenceSession(model_path, providers=providers)
        except Exception as e:
            self.is_loaded = False
            raise ModelLoadError(f"Failed to load ONNX model {model_path}: {e}", e) from e

        inputs = session.get_inputs()
        outputs = session.get_outputs()
        if not inputs or not outputs:
            raise ModelLoadError(f"Model {model_path} has no input or output slot")

        self._session = session
        self._input_name = self._input_name or inputs[0].name
        self._output_name = self._output_name or outputs[0].name
        self.is_loaded = True
        self.model_info = {
            'backend': 'onnxruntime',
            'model_path': model_path,
            'providers': session.get_providers(),
            'input_name': self._input_name,
            'input_shape': list(inputs[0].shape),
            'output_name': self._output_name,
            'output_shape': list(outputs[0].shape),
        }
        logger.info(f"Model loaded: {model_path} (input={self._input_name} {inputs[0].shape}, "
                    f"output={self._output_name})")
        return True

    def run(self, tensor: np.ndarray) -> np.ndarray:
        """Run one forward pass and return the first output flattened."""
        if not self.is_loaded or self._session is None:
            raise InferenceError("No model loaded")

        try:
            outputs = self._session.run(
                [self._output_name],
                {self._input_name: np.ascontiguousarray(tensor, dtype=np.float32)},
            )
        except Exception as e:
            raise InferenceError(f"Inference failed: {e}") from e

        return np.asarray(outputs[0], dtype=np.float32).reshape(-1)

    def unload_model(self) -> None:
        self._session = None
        super().unload_model()
