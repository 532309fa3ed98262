"""
External service clients, exposed as FastAPI dependencies.

Tests replace these through ``app.dependency_overrides``.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from elevenlabs.client import ElevenLabs
from openai import OpenAI

from app.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_speech_client() -> ElevenLabs:
    if not settings.ELEVEN_API_KEY:
        logger.warning("ELEVEN_API_KEY is not set; transcription calls will fail")
    kwargs = {}
    if settings.EXTERNAL_TIMEOUT_SECONDS is not None:
        kwargs["timeout"] = settings.EXTERNAL_TIMEOUT_SECONDS
    return ElevenLabs(api_key=settings.ELEVEN_API_KEY, **kwargs)


@lru_cache(maxsize=1)
def get_chat_client() -> OpenAI:
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; translation and extraction will fail")
    kwargs = {}
    if settings.EXTERNAL_TIMEOUT_SECONDS is not None:
        kwargs["timeout"] = settings.EXTERNAL_TIMEOUT_SECONDS
    # OpenAI() refuses an empty key at construction, so pass a placeholder
    return OpenAI(api_key=settings.OPENAI_API_KEY or "missing", **kwargs)
