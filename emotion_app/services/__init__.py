"""Services package for the emotion pipeline."""

from .webcam_service import FrameSource, WebcamService
from .emotion_state import EmotionStateStore
from .face_selector import select_face
from .preprocessing import crop_region, preprocess_to_tensor
from .score_interpreter import interpret_scores, softmax
from .resources import TransientResources
from .scheduler import FrameScheduler, ManualScheduler, TkAfterScheduler
from .initialization_service import InitializationSequencer, PipelineContext
from .frame_pipeline import FramePipeline

__all__ = [
    "FrameSource", "WebcamService", "EmotionStateStore",
    "select_face", "crop_region", "preprocess_to_tensor",
    "interpret_scores", "softmax", "TransientResources",
    "FrameScheduler", "ManualScheduler", "TkAfterScheduler",
    "InitializationSequencer", "PipelineContext", "FramePipeline"
]
