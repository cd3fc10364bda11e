"""Errors raised by transcription stages."""


class TranscriptionError(Exception):
    """Base class for a stage failure that aborts one item."""

    pass


class FetchError(TranscriptionError):
    """Raised when the setsumei image cannot be downloaded or decoded."""

    pass


class OcrError(TranscriptionError):
    """Raised when the OCR service call fails."""

    pass


class NoTextDetectedError(OcrError):
    """Raised when OCR finds no text region in the image."""

    pass


class CompletionError(TranscriptionError):
    """Raised when the completion service returns an error or no content."""

    pass
