from __future__ import annotations

INPUT_MISSING_MESSAGE = "Please upload a screenshot first."
ANALYSIS_FAILED_MESSAGE = "Failed to analyze image. Please try again."
ANALYSIS_BUSY_MESSAGE = "An analysis is already running. Please wait for it to finish."
UPLOAD_FAILED_MESSAGE = "Failed to read the image. Please try again."


class SignalError(Exception):
    """Base error; ``message`` is what the user gets to see."""

    default_message = ANALYSIS_FAILED_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InputMissing(SignalError):
    default_message = INPUT_MISSING_MESSAGE


class AnalysisFailed(SignalError):
    default_message = ANALYSIS_FAILED_MESSAGE


class SignalValidationError(AnalysisFailed):
    """Response text did not hold all the required signal fields."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__()


class AnalysisBusy(SignalError):
    default_message = ANALYSIS_BUSY_MESSAGE


class UploadFailed(SignalError):
    default_message = UPLOAD_FAILED_MESSAGE
