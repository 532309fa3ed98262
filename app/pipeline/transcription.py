"""
Speech-to-text adapter with a Spanish-first language fallback.

The recorder is used by both Spanish and English speakers, so each memo is
first transcribed with the Spanish model.  If the text does not read as
Spanish the memo is transcribed again with the English model.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.pipeline.errors import TranscriptionError
from app.pipeline.language import is_spanish

logger = logging.getLogger(__name__)

# The discarded Spanish attempt is billed on top of the accepted English one
WASTED_ATTEMPT_MULTIPLIER = 2


@dataclass(frozen=True)
class TranscriptionOutcome:
    text: str
    is_spanish: bool
    attempts: int
    language_code: str
    cost_multiplier: int = 1


class Transcriber:
    def __init__(
        self,
        client: Any,
        model_id: str = "scribe_v1",
        spanish_code: str = "es",
        english_code: str = "en",
    ):
        self.client = client
        self.model_id = model_id
        self.spanish_code = spanish_code
        self.english_code = english_code

    def _convert(self, audio: bytes, language_code: str) -> str:
        result = self.client.speech_to_text.convert(
            file=audio,
            model_id=self.model_id,
            language_code=language_code,
            tag_audio_events=False,
            diarize=False,
        )
        return result.text or ""

    def transcribe(self, audio: bytes) -> TranscriptionOutcome:
        """Transcribe *audio*, counting every call made as an attempt.

        Raises ``TranscriptionError`` when no attempt produced text.
        """
        attempts = 1
        try:
            spanish_text = self._convert(audio, self.spanish_code)
        except Exception as exc:
            logger.warning("Spanish transcription failed, trying English: %s", exc)
            attempts += 1
            try:
                text = self._convert(audio, self.english_code)
            except Exception as fallback_exc:
                raise TranscriptionError(str(fallback_exc), attempts) from fallback_exc
            return TranscriptionOutcome(
                text=text,
                is_spanish=False,
                attempts=attempts,
                language_code=self.english_code,
            )

        if is_spanish(spanish_text):
            logger.info("Transcription accepted as Spanish (%d chars)", len(spanish_text))
            return TranscriptionOutcome(
                text=spanish_text,
                is_spanish=True,
                attempts=attempts,
                language_code=self.spanish_code,
            )

        logger.info("Spanish transcript does not read as Spanish, re-transcribing in English")
        attempts += 1
        try:
            text = self._convert(audio, self.english_code)
        except Exception as exc:
            raise TranscriptionError(str(exc), attempts) from exc
        return TranscriptionOutcome(
            text=text,
            is_spanish=False,
            attempts=attempts,
            language_code=self.english_code,
            cost_multiplier=WASTED_ATTEMPT_MULTIPLIER,
        )
