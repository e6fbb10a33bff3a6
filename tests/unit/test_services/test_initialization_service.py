"""Unit tests for the startup sequence."""
import threading
from unittest.mock import Mock

import pytest

from conftest import FakeDetector, FakeEngine, EMOTION_LABELS
from emotion_app.core.entities import ReadinessState
from emotion_app.core.exceptions import (
    AssetFetchError, DetectorBindError, LabelLoadError, ModelLoadError
)
from emotion_app.services.emotion_state import EmotionStateStore
from emotion_app.services.initialization_service import READY_STATUS, InitializationSequencer


class Harness:
    """Builds a sequencer around counting fakes."""

    def __init__(self, config):
        self.detectors = []
        self.engines = []
        self.fetch = Mock(return_value=b"<cascade/>")
        self.labels = Mock(return_value=list(EMOTION_LABELS))
        self.store = EmotionStateStore()
        self.statuses = []
        self.store.add_listener(lambda s: self.statuses.append(s.status))
        self.sequencer = InitializationSequencer(
            config,
            state_store=self.store,
            detector_factory=self._make_detector,
            engine_factory=self._make_engine,
            asset_fetcher=self.fetch,
            label_loader=self.labels,
        )

    def _make_detector(self, config):
        detector = FakeDetector(config)
        self.detectors.append(detector)
        return detector

    def _make_engine(self, config):
        engine = FakeEngine(config)
        self.engines.append(engine)
        return engine


@pytest.fixture
def harness(config):
    return Harness(config)


class TestInitializationSequencer:
    """Ordered one-time startup."""

    def test_initial_state(self, harness):
        assert harness.sequencer.state is ReadinessState.UNINITIALIZED
        assert harness.sequencer.context is None

    def test_successful_startup(self, harness):
        context = harness.sequencer.initialize()

        assert harness.sequencer.state is ReadinessState.READY
        assert harness.sequencer.context is context
        assert context.labels == tuple(EMOTION_LABELS)
        assert context.detector.is_model_loaded()
        assert context.engine.is_model_loaded()
        assert harness.store.state.status == READY_STATUS

    def test_status_published_per_step(self, harness):
        harness.sequencer.initialize()

        assert harness.statuses == [
            "Loading face detector asset...",
            "Loading face detector...",
            "Loading emotion model...",
            "Loading class labels...",
            READY_STATUS,
        ]

    def test_second_call_does_not_reload(self, harness):
        first = harness.sequencer.initialize()
        second = harness.sequencer.initialize()

        assert first is second
        assert harness.fetch.call_count == 1
        assert harness.labels.call_count == 1
        assert len(harness.detectors) == 1
        assert harness.engines[0].load_calls == 1

    def test_asset_failure_names_step(self, harness):
        harness.fetch.side_effect = AssetFetchError("404")

        with pytest.raises(AssetFetchError):
            harness.sequencer.initialize()

        assert harness.sequencer.state is ReadinessState.FAILED
        assert harness.sequencer.failure_reason.startswith("asset fetch")
        assert harness.store.state.status.startswith("Failed to start: asset fetch")
        assert harness.detectors == []

    def test_unexpected_error_is_wrapped_with_step(self, harness):
        harness.labels.side_effect = RuntimeError("disk gone")

        with pytest.raises(LabelLoadError) as exc_info:
            harness.sequencer.initialize()

        assert "disk gone" in str(exc_info.value)
        assert exc_info.value.step == "label load"

    def test_detector_rejecting_asset(self, harness):
        harness.fetch.return_value = b""

        with pytest.raises(DetectorBindError):
            harness.sequencer.initialize()

        assert harness.engines == []

    def test_model_failure_stops_before_labels(self, config):
        harness = Harness(config)
        failing = FakeEngine(config)
        failing.load_model = Mock(side_effect=ModelLoadError("bad model"))
        harness.sequencer._engine_factory = lambda cfg: failing

        with pytest.raises(ModelLoadError):
            harness.sequencer.initialize()

        harness.labels.assert_not_called()
        assert harness.sequencer.context is None

    def test_failed_startup_is_not_retried(self, harness):
        harness.fetch.side_effect = AssetFetchError("offline")
        with pytest.raises(AssetFetchError):
            harness.sequencer.initialize()

        harness.fetch.side_effect = None
        with pytest.raises(AssetFetchError):
            harness.sequencer.initialize()

        assert harness.fetch.call_count == 1

    def test_concurrent_callers_share_one_run(self, harness):
        gate = threading.Event()
        original = harness.fetch.return_value

        def slow_fetch(location):
            gate.wait(timeout=2.0)
            return original

        harness.fetch.side_effect = slow_fetch
        results = []
        threads = [threading.Thread(target=lambda: results.append(harness.sequencer.initialize()))
                   for _ in range(4)]
        for thread in threads:
            thread.start()
        gate.set()
        for thread in threads:
            thread.join(timeout=5.0)

        assert len(results) == 4
        assert all(r is results[0] for r in results)
        assert harness.fetch.call_count == 1

    def test_initialize_async_reports_success(self, harness):
        done = threading.Event()
        outcome = {}

        def on_complete(context, error):
            outcome["context"], outcome["error"] = context, error
            done.set()

        harness.sequencer.initialize_async(on_complete).join(timeout=5.0)

        assert done.is_set()
        assert outcome["error"] is None
        assert outcome["context"] is harness.sequencer.context

    def test_initialize_async_reports_failure(self, harness):
        harness.labels.side_effect = LabelLoadError("no labels")
        outcome = {}

        harness.sequencer.initialize_async(
            lambda context, error: outcome.update(context=context, error=error)
        ).join(timeout=5.0)

        assert outcome["context"] is None
        assert isinstance(outcome["error"], LabelLoadError)
