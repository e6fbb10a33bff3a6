"""Custom exceptions for the application."""

class ApplicationError(Exception):
    """Base application error."""
    pass

class ConfigError(ApplicationError):
    """Configuration-related errors."""
    pass

class InitializationError(ApplicationError):
    """Base error for the one-time startup sequence.

    ``step`` names the startup step that failed so the status line can tell
    the user which asset could not be brought up.
    """

    step = "initialization"

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause

    def describe(self) -> str:
        return f"{self.step}: {self}"

class AssetFetchError(InitializationError):
    """Detector asset could not be read."""
    step = "asset fetch"

class DetectorBindError(InitializationError):
    """Detector asset could not be parsed or bound to a detector."""
    step = "detector bind"

class ModelLoadError(InitializationError):
    """Inference model could not be loaded."""
    step = "model load"

class LabelLoadError(InitializationError):
    """Class label list could not be loaded."""
    step = "label load"

class PipelineError(ApplicationError):
    """Base exception for per-cycle pipeline errors."""
    pass

class DetectionError(PipelineError):
    """Face detection errors."""
    pass

class InferenceError(PipelineError):
    """Inference engine call errors."""
    pass

class InterpretationError(PipelineError):
    """Malformed score vector errors."""
    pass

class ValidationError(ApplicationError):
    """Data validation errors."""
    pass

class PreprocessingError(ValidationError):
    """Invalid crop handed to the tensor preprocessor."""
    pass

class WebcamError(ApplicationError):
    """Webcam access errors."""
    pass
