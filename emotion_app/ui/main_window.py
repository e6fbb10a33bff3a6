"""Main application window."""

import tkinter as tk
from tkinter import ttk, messagebox
import logging
from typing import Optional

from ..config.settings import Config
from ..core.entities import EmotionState
from ..core.exceptions import WebcamError
from ..services.emotion_state import EmotionStateStore
from ..services.frame_pipeline import FramePipeline
from ..services.initialization_service import InitializationSequencer
from ..services.scheduler import TkAfterScheduler
from ..services.webcam_service import WebcamService
from .components.emotion_panel import EmotionPanel
from .components.optimized_canvas import OptimizedCanvas
from .styles.themes import apply_theme
from .surface import FrameSurface

logger = logging.getLogger(__name__)


class MainWindow:
    """Main application window.

    Shows the annotated camera feed and the status, emotion and confidence
    cards. The camera only opens when the user presses Start Camera.
    """

    def __init__(self, root: tk.Tk, config: Config,
                 sequencer: InitializationSequencer,
                 state_store: EmotionStateStore):
        self.root = root
        self.config = config
        self.sequencer = sequencer
        self.state_store = state_store

        self.webcam_service: Optional[WebcamService] = None
        self.pipeline: Optional[FramePipeline] = None
        self.surface = FrameSurface()

        self._setup_window()
        self._build_ui()

        self.surface.set_present_callback(self.canvas.display_image)
        self.state_store.add_listener(self._on_state_changed)
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

    def _setup_window(self):
        self.root.title("Emotion Detector")
        self.root.geometry("900x760")
        self.root.minsize(640, 560)
        self.theme = apply_theme(self.root)

    def _build_ui(self):
        container = ttk.Frame(self.root, padding=16)
        container.pack(fill=tk.BOTH, expand=True)

        ttk.Label(container, text="Emotion Detector", style='Title.TLabel').pack()
        ttk.Label(container, text="Live facial emotion detection from your webcam",
                  style='Subtitle.TLabel').pack(pady=(0, 12))

        self.start_button = ttk.Button(container, text="Start Camera",
                                       style='Accent.TButton', command=self.start_camera)
        self.start_button.pack(pady=(0, 12))

        self.canvas = OptimizedCanvas(container, bg="#000000", highlightthickness=0,
                                      width=self.config.camera_width,
                                      height=self.config.camera_height)
        self.canvas.pack(fill=tk.BOTH, expand=True)

        self.panel = EmotionPanel(container)
        self.panel.pack(fill=tk.X, pady=(12, 0))
        self.panel.update_state(self.state_store.state)

    def _on_state_changed(self, state: EmotionState):
        # Listeners may fire on the initialization thread
        self.root.after(0, self.panel.update_state, state)

    def start_camera(self):
        """Open the webcam and start the frame loop."""
        if self.pipeline is not None and self.pipeline.is_running:
            return

        self.webcam_service = WebcamService.from_config(self.config)
        try:
            self.webcam_service.start_stream()
        except WebcamError as e:
            logger.error(f"Failed to start camera: {e}")
            self.state_store.set_status(f"Camera error: {e}")
            self.webcam_service = None
            messagebox.showerror("Camera", str(e))
            return

        self.pipeline = FramePipeline(
            context_provider=lambda: self.sequencer.context,
            frame_source=self.webcam_service,
            surface=self.surface,
            config=self.config,
            state_store=self.state_store,
        )
        self.pipeline.start(TkAfterScheduler(self.root, self.config.refresh_interval_ms))
        self.start_button.state(['disabled'])

        if not self.sequencer.is_ready:
            logger.info("Camera started before the models finished loading")
        else:
            self.state_store.set_status("Running")

    def on_initialized(self, context, error):
        """Completion callback of the background startup sequence."""
        if error is not None:
            logger.error(f"Models unavailable: {error.describe()}")
        elif self.pipeline is not None and self.pipeline.is_running:
            self.state_store.set_status("Running")

    def on_close(self):
        """Stop the loop, release the camera and close the window."""
        if self.pipeline is not None:
            self.pipeline.stop()
        if self.webcam_service is not None:
            self.webcam_service.stop_stream()
        self.state_store.remove_listener(self._on_state_changed)
        self.root.destroy()
