"""
Voice memo → purchase order pipeline.

Orchestrates: transcribe → (translate) → extract fields → memo log → persist.
Every run writes one cost record, whether it succeeds or fails. A successful
run commits it together with the purchase order.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from app.pipeline.costs import (
    CostRates,
    completion_cost,
    estimate_audio_duration_minutes,
    transcription_cost,
)
from app.pipeline.errors import (
    AudioProcessingError,
    TranscriptionError,
    TranslationUnavailable,
)
from app.pipeline.extraction import Extractor
from app.pipeline.memo_log import append_memo
from app.pipeline.transcription import Transcriber
from app.pipeline.translation import Translator
from app.repository import PurchaseOrderRepository
from app.schemas import CostTracker, PipelineResult

logger = logging.getLogger(__name__)


class UploadPipeline:
    def __init__(
        self,
        transcriber: Transcriber,
        translator: Translator,
        extractor: Extractor,
        memo_log_path: str = "memos.txt",
        rates: Optional[CostRates] = None,
    ):
        self.transcriber = transcriber
        self.translator = translator
        self.extractor = extractor
        self.memo_log_path = memo_log_path
        self.rates = rates or CostRates()

    def process(self, audio: bytes, repository: PurchaseOrderRepository) -> PipelineResult:
        """Run the full pipeline on one uploaded recording.

        Raises ``AudioProcessingError`` once the failure has been recorded.
        """
        costs = CostTracker(audio_size_bytes=len(audio))
        costs.estimated_duration_minutes = estimate_audio_duration_minutes(len(audio))
        costs.elevenlabs_cost = transcription_cost(costs.estimated_duration_minutes, self.rates)

        try:
            result = self._run(audio, costs, repository)
        except Exception as exc:
            logger.exception("Processing failed: %s", exc)
            costs.error = str(exc)
            if isinstance(exc, TranscriptionError):
                costs.transcription_attempts = exc.attempts
            costs.finalize()
            try:
                repository.create_cost_record(costs)
            except Exception as record_exc:
                logger.exception("Failed to record cost for failed upload: %s", record_exc)
            raise AudioProcessingError(str(exc)) from exc
        return result

    def _run(
        self, audio: bytes, costs: CostTracker, repository: PurchaseOrderRepository
    ) -> PipelineResult:
        logger.info("Pipeline start: transcribe (%d bytes)", len(audio))
        transcription = self.transcriber.transcribe(audio)
        costs.transcription_attempts = transcription.attempts
        costs.elevenlabs_cost *= transcription.cost_multiplier

        final_text = transcription.text
        was_translated = False
        if transcription.is_spanish and final_text.strip():
            logger.info("Pipeline: translate")
            costs.translation_used = True
            try:
                translation = self.translator.translate(final_text)
            except TranslationUnavailable as exc:
                logger.error("Translation failed, saving original Spanish text: %s", exc)
                costs.error = f"Translation failed: {exc}"
            else:
                final_text = translation.text
                was_translated = True
                costs.add_openai(
                    completion_cost(translation.input_tokens, translation.output_tokens, self.rates)
                )

        logger.info("Pipeline: extract fields")
        extraction = self.extractor.extract(final_text)
        costs.add_openai(completion_cost(extraction.tokens, extraction.tokens, self.rates))
        costs.finalize()

        append_memo(self.memo_log_path, final_text, datetime.now(timezone.utc))

        logger.info("Pipeline: persist")
        po_id = repository.save_upload(extraction.fields, final_text, costs)

        return PipelineResult(
            transcription=transcription.text,
            final_text=final_text,
            was_spanish=transcription.is_spanish,
            was_translated=was_translated,
            extracted=extraction.fields,
            purchase_order_id=po_id,
            costs=costs,
        )
