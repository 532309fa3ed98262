"""
Audio upload endpoint.

POST /upload  transcribe → translate → extract → store purchase order
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.clients import get_chat_client, get_speech_client
from app.config import settings
from app.database import get_db
from app.pipeline import UploadPipeline
from app.pipeline.costs import CostRates
from app.pipeline.errors import AudioProcessingError
from app.pipeline.extraction import Extractor
from app.pipeline.transcription import Transcriber
from app.pipeline.translation import Translator
from app.repository import PurchaseOrderRepository
from app.schemas import UploadError, UploadResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def get_pipeline(
    speech_client=Depends(get_speech_client),
    chat_client=Depends(get_chat_client),
) -> UploadPipeline:
    return UploadPipeline(
        transcriber=Transcriber(
            speech_client,
            model_id=settings.ELEVENLABS_MODEL_ID,
            spanish_code=settings.SPANISH_LANGUAGE_CODE,
            english_code=settings.ENGLISH_LANGUAGE_CODE,
        ),
        translator=Translator(chat_client, model=settings.OPENAI_MODEL),
        extractor=Extractor(chat_client, model=settings.OPENAI_MODEL),
        memo_log_path=settings.MEMO_LOG_PATH,
        rates=CostRates.from_settings(),
    )


@contextmanager
def stored_upload(upload: UploadFile) -> Iterator[str]:
    """Spool *upload* to ``UPLOAD_DIR`` and remove it on every exit path."""
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    fd, path = tempfile.mkstemp(dir=settings.UPLOAD_DIR)
    try:
        with os.fdopen(fd, "wb") as out:
            shutil.copyfileobj(upload.file, out)
        yield path
    finally:
        if os.path.exists(path):
            os.remove(path)


# ── POST /upload ─────────────────────────────────────────────────────────
@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={500: {"model": UploadError}},
)
def upload_audio(
    audio: UploadFile = File(...),
    db: Session = Depends(get_db),
    pipeline: UploadPipeline = Depends(get_pipeline),
):
    with stored_upload(audio) as path:
        with open(path, "rb") as fh:
            data = fh.read()
        logger.info("Upload: filename=%s  size=%d", audio.filename, len(data))

        try:
            result = pipeline.process(data, PurchaseOrderRepository(db))
        except AudioProcessingError as exc:
            return JSONResponse(
                status_code=500,
                content=UploadError(error="Audio processing failed", details=exc.details).model_dump(),
            )

    return UploadResponse.from_result(result)
