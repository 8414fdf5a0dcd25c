from typing import Optional


class EventFrameError(Exception):
    """Base class for errors raised by the event frame pipeline."""


class StageFatalError(EventFrameError):
    """Research or ideation failed; the whole run is aborted."""

    def __init__(self, stage: str, message: str):
        super().__init__(message)
        self.stage = stage
        self.message = message


class ConceptFailureError(EventFrameError):
    """A single frame could not be generated; the batch carries on."""

    def __init__(self, index: int, message: str):
        super().__init__(f"concept {index}: {message}")
        self.index = index
        self.message = message


class EditFailureError(EventFrameError):
    def __init__(self, frame_index: Optional[int], message: str):
        super().__init__(message)
        self.frame_index = frame_index
        self.message = message


class NoImageProducedError(EventFrameError):
    pass


class InvalidImagePayloadError(EventFrameError, ValueError):
    pass


class InvalidRunRequestError(EventFrameError, ValueError):
    pass
