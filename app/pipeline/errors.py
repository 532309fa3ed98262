"""
Pipeline exceptions.
"""


class TranscriptionError(Exception):
    """Every transcription attempt failed."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class TranslationUnavailable(Exception):
    """The translation call failed; callers fall back to the source text."""


class AudioProcessingError(Exception):
    """Raised by the orchestrator after the cost record has been written."""

    def __init__(self, details: str):
        super().__init__(details)
        self.details = details
