"""Per-frame emotion pipeline orchestration.

One cycle: acquire frame -> detect -> annotate -> select -> preprocess ->
infer -> interpret -> overlay -> release -> reschedule.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from ..config.settings import Config
from ..core.constants import (
    CANDIDATE_BOX_COLOR, CANDIDATE_BOX_THICKNESS, LABEL_BOX_COLOR, LABEL_BOX_HEIGHT,
    LABEL_BOX_WIDTH, LABEL_TEXT_COLOR, LABEL_TEXT_OFFSET
)
from ..core.entities import ClassificationResult, CycleReport, Region
from ..core.exceptions import WebcamError
from ..core.logging_config import CorrelationContext
from ..ui.surface import PresentationSurface
from ..utils.image_utils import to_grayscale
from .emotion_state import EmotionStateStore
from .face_selector import select_face
from .initialization_service import PipelineContext
from .preprocessing import crop_region, preprocess_to_tensor
from .resources import TransientResources
from .scheduler import FrameScheduler
from .score_interpreter import interpret_scores
from .webcam_service import FrameSource

logger = logging.getLogger(__name__)

CycleListener = Callable[[CycleReport], None]


class FramePipeline:
    """Loop controller; the only stateful component of the pipeline.

    Each cycle runs to completion on the scheduler's thread before the next
    one is requested. Errors inside a cycle are logged and recorded in the
    cycle report; they never stop the loop.
    """

    def __init__(self,
                 context_provider: Callable[[], Optional[PipelineContext]],
                 frame_source: Optional[FrameSource],
                 surface: Optional[PresentationSurface],
                 config: Config,
                 state_store: Optional[EmotionStateStore] = None,
                 scheduler: Optional[FrameScheduler] = None):
        self.context_provider = context_provider
        self.frame_source = frame_source
        self.surface = surface
        self.cfg = config
        self.state_store = state_store or EmotionStateStore()
        self.scheduler = scheduler

        self.tensor_size = int(config.tensor_size)
        self.overlay_alpha = float(config.overlay_alpha)

        self._listeners: List[CycleListener] = []
        self._running = False
        self._in_cycle = False
        self._cycle_count = 0
        self._last_tick_time: Optional[float] = None
        self._fps = 0.0
        self.last_report: Optional[CycleReport] = None

    def add_listener(self, cb: CycleListener) -> None:
        self._listeners.append(cb)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def fps(self) -> float:
        return self._fps

    def start(self, scheduler: Optional[FrameScheduler] = None) -> None:
        if scheduler is not None:
            self.scheduler = scheduler
        if self.scheduler is None:
            raise ValueError("FramePipeline.start() needs a scheduler")
        if self._running:
            return
        self._running = True
        logger.info("Frame pipeline started")
        self._schedule()

    def stop(self) -> None:
        """Stop requesting cycles; a cycle in progress still completes."""
        if not self._running:
            return
        self._running = False
        if self.scheduler is not None:
            self.scheduler.cancel()
        logger.info(f"Frame pipeline stopped after {self._cycle_count} cycles")

    def _schedule(self) -> None:
        if not self._running:
            return
        self.scheduler.schedule(self._tick)

    def _tick(self) -> None:
        if not self._running:
            return
        try:
            self.run_cycle()
        finally:
            self._schedule()

    def _is_ready(self, context: Optional[PipelineContext]) -> bool:
        if context is None or self.frame_source is None or self.surface is None:
            return False
        return self.frame_source.is_frame_available()

    def run_cycle(self) -> CycleReport:
        """Execute exactly one cycle and return its report."""
        self._cycle_count += 1
        report = CycleReport(cycle_id=self._cycle_count)

        if self._in_cycle:
            logger.debug(f"Cycle {report.cycle_id} skipped: previous cycle still running")
            report.skipped = True
            return report

        context = self.context_provider()
        if not self._is_ready(context):
            report.skipped = True
            return report

        self._in_cycle = True
        start = time.perf_counter()
        with CorrelationContext(f"cycle-{report.cycle_id}"):
            resources = TransientResources()
            try:
                with resources:
                    self._process(context, resources, report)
            except Exception as e:
                report.error = f"{type(e).__name__}: {e}"
                logger.warning(f"Cycle {report.cycle_id} failed: {report.error}",
                               exc_info=bool(self.cfg.debug))
            finally:
                report.released = resources.released
                self._in_cycle = False

            try:
                self.surface.present()
            except Exception as e:
                logger.warning(f"Failed to present cycle {report.cycle_id}: {e}")

        report.latency_ms = (time.perf_counter() - start) * 1000.0
        report.fps = self._update_fps(start)
        self.last_report = report
        self._notify(report)
        return report

    def _process(self, context: PipelineContext, resources: TransientResources,
                 report: CycleReport) -> None:
        frame = self.frame_source.get_current_frame()
        if frame is None:
            raise WebcamError("Camera frame unavailable")
        resources.track(frame)

        working = resources.track(self.surface.begin_frame(frame))
        gray = resources.track(to_grayscale(working))
        candidates = resources.track(context.detector.detect(gray), release=list.clear)
        report.candidates = tuple(candidates)

        for region in candidates:
            self.surface.draw_rectangle(region, CANDIDATE_BOX_COLOR, CANDIDATE_BOX_THICKNESS)

        selected = select_face(candidates)
        report.selected = selected
        if selected is None:
            return

        crop = resources.track(crop_region(frame, selected))
        tensor = resources.track(preprocess_to_tensor(crop, self.tensor_size))
        scores = context.engine.run(tensor)
        result = interpret_scores(scores, context.labels)

        report.result = result
        self.state_store.set_emotion(result.label, result.confidence)
        self._draw_label(selected, result)

    def _draw_label(self, region: Region, result: ClassificationResult) -> None:
        top = max(0, region.y - LABEL_BOX_HEIGHT)
        self.surface.draw_filled_rectangle(region.x, top, LABEL_BOX_WIDTH, LABEL_BOX_HEIGHT,
                                           LABEL_BOX_COLOR, alpha=self.overlay_alpha)
        dx, dy = LABEL_TEXT_OFFSET
        self.surface.draw_text(result.format_overlay(),
                               (region.x + dx, max(LABEL_BOX_HEIGHT - dy, region.y - dy)),
                               LABEL_TEXT_COLOR)

    def _update_fps(self, tick_time: float) -> float:
        if self._last_tick_time is not None:
            elapsed = tick_time - self._last_tick_time
            if elapsed > 0:
                instant = 1.0 / elapsed
                self._fps = instant if self._fps == 0.0 else 0.9 * self._fps + 0.1 * instant
        self._last_tick_time = tick_time
        return self._fps

    def _notify(self, report: CycleReport) -> None:
        for cb in self._listeners:
            try:
                cb(report)
            except Exception as e:
                logger.error(f"Error in cycle listener: {e}")
