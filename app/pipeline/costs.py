"""
Rough cost estimates for the external services.

Durations and token counts are approximations from byte size and character
count; the resulting figures are estimates, not billing data.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from app.config import settings

# Assumed bytes per second of uploaded audio
AUDIO_BYTES_PER_SECOND = 16000
MIN_DURATION_MINUTES = 0.1
CHARS_PER_TOKEN = 4


@dataclass(frozen=True)
class CostRates:
    elevenlabs_per_minute: float = 0.003
    openai_input_per_1k: float = 0.0015
    openai_output_per_1k: float = 0.002

    @classmethod
    def from_settings(cls) -> "CostRates":
        return cls(
            elevenlabs_per_minute=settings.ELEVENLABS_COST_PER_MINUTE,
            openai_input_per_1k=settings.OPENAI_INPUT_COST_PER_1K,
            openai_output_per_1k=settings.OPENAI_OUTPUT_COST_PER_1K,
        )


def estimate_audio_duration_minutes(size_bytes: int) -> float:
    seconds = size_bytes / AUDIO_BYTES_PER_SECOND
    return max(MIN_DURATION_MINUTES, seconds / 60)


def estimate_token_count(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def transcription_cost(duration_minutes: float, rates: CostRates) -> float:
    return duration_minutes * rates.elevenlabs_per_minute


def completion_cost(input_tokens: int, output_tokens: int, rates: CostRates) -> float:
    return (
        input_tokens / 1000 * rates.openai_input_per_1k
        + output_tokens / 1000 * rates.openai_output_per_1k
    )
