"""One-time startup: detector asset, detector, inference model, class labels."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ..backends.base_backend import BaseFaceDetector, BaseInferenceBackend
from ..backends.cascade_backend import HaarCascadeDetector
from ..backends.onnx_backend import OnnxInferenceBackend
from ..config.settings import Config
from ..core.entities import ReadinessState
from ..core.exceptions import (
    AssetFetchError, DetectorBindError, InitializationError, LabelLoadError, ModelLoadError
)
from ..core.logging_config import with_correlation_id
from .asset_loader import fetch_asset_bytes, load_labels
from .emotion_state import EmotionStateStore

logger = logging.getLogger(__name__)

READY_STATUS = "Ready - press Start Camera"


@dataclass(frozen=True)
class PipelineContext:
    """Collaborators created once at startup and read-only afterwards."""
    detector: BaseFaceDetector
    engine: BaseInferenceBackend
    labels: Tuple[str, ...]


CompletionCallback = Callable[[Optional[PipelineContext], Optional[InitializationError]], None]


class InitializationSequencer:
    """Loads the detector, the model and the labels exactly once.

    Steps run in a fixed order and stop at the first failure, which moves the
    readiness state to FAILED and keeps the error for the status line. There
    is no retry: a failed start needs a restart of the application.
    """

    def __init__(self,
                 config: Config,
                 state_store: Optional[EmotionStateStore] = None,
                 detector_factory: Callable[[Config], BaseFaceDetector] = HaarCascadeDetector,
                 engine_factory: Callable[[Config], BaseInferenceBackend] = OnnxInferenceBackend,
                 asset_fetcher: Callable[[str], bytes] = fetch_asset_bytes,
                 label_loader: Callable[[str], list] = load_labels):
        self.config = config
        self.state_store = state_store
        self._detector_factory = detector_factory
        self._engine_factory = engine_factory
        self._asset_fetcher = asset_fetcher
        self._label_loader = label_loader

        self._run_lock = threading.Lock()
        self._state = ReadinessState.UNINITIALIZED
        self._context: Optional[PipelineContext] = None
        self._failure: Optional[InitializationError] = None

    @property
    def state(self) -> ReadinessState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ReadinessState.READY

    @property
    def context(self) -> Optional[PipelineContext]:
        """The loaded collaborators, or None until READY."""
        return self._context if self.is_ready else None

    @property
    def failure(self) -> Optional[InitializationError]:
        return self._failure

    @property
    def failure_reason(self) -> Optional[str]:
        return self._failure.describe() if self._failure else None

    @with_correlation_id("startup")
    def initialize(self) -> PipelineContext:
        """Run the startup steps, or return the context of an earlier run.

        Concurrent callers are serialized: a caller arriving while another
        run is LOADING waits and then sees that run's outcome.

        Raises:
            InitializationError: The step-specific error of the failed run
        """
        if self.is_ready:
            return self._context

        with self._run_lock:
            if self.is_ready:
                return self._context
            if self._state is ReadinessState.FAILED:
                raise self._failure

            self._state = ReadinessState.LOADING
            try:
                context = self._run_steps()
            except InitializationError as e:
                self._failure = e
                self._state = ReadinessState.FAILED
                logger.error(f"Startup failed at {e.step}: {e}")
                self._publish_status(f"Failed to start: {e.describe()}")
                raise

            self._context = context
            self._state = ReadinessState.READY
            logger.info(f"Startup complete: {len(context.labels)} classes")
            self._publish_status(READY_STATUS)
            return context

    def initialize_async(self, on_complete: Optional[CompletionCallback] = None) -> threading.Thread:
        """Run :meth:`initialize` on a daemon thread.

        ``on_complete`` is called from that thread with ``(context, None)``
        on success or ``(None, error)`` on failure.
        """
        def worker():
            context, error = None, None
            try:
                context = self.initialize()
            except InitializationError as e:
                error = e
            if on_complete:
                on_complete(context, error)

        thread = threading.Thread(target=worker, name="InitializationSequencer", daemon=True)
        thread.start()
        return thread

    def _run_steps(self) -> PipelineContext:
        self._publish_status("Loading face detector asset...")
        asset = self._step(AssetFetchError, self._asset_fetcher, self.config.cascade_path)

        self._publish_status("Loading face detector...")
        detector = self._step(DetectorBindError, self._detector_factory, self.config)
        if not self._step(DetectorBindError, detector.load, asset):
            raise DetectorBindError("Cascade definition could not be loaded by the detector")

        self._publish_status("Loading emotion model...")
        engine = self._step(ModelLoadError, self._engine_factory, self.config)
        if not self._step(ModelLoadError, engine.load_model, self.config.model_path):
            raise ModelLoadError(f"Model {self.config.model_path} could not be loaded")

        self._publish_status("Loading class labels...")
        labels = self._step(LabelLoadError, self._label_loader, self.config.labels_path)

        return PipelineContext(detector=detector, engine=engine, labels=tuple(labels))

    @staticmethod
    def _step(error_cls, fn, *args):
        """Call ``fn`` and map unexpected errors to the step's error type."""
        try:
            return fn(*args)
        except error_cls:
            raise
        except InitializationError as e:
            raise error_cls(str(e), e) from e
        except Exception as e:
            raise error_cls(f"{type(e).__name__}: {e}", e) from e

    def _publish_status(self, status: str) -> None:
        logger.info(status)
        if self.state_store is not None:
            self.state_store.set_status(status)
