"""
Spanish → English translation through a chat completion.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.pipeline.costs import estimate_token_count
from app.pipeline.errors import TranslationUnavailable

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional translator. Translate the following Spanish text to English. "
    "Provide only the translation, no additional text or explanations."
)


@dataclass(frozen=True)
class TranslationOutcome:
    text: str
    input_tokens: int
    output_tokens: int


class Translator:
    def __init__(
        self,
        client: Any,
        model: str = "gpt-3.5-turbo",
        temperature: float = 0.1,
        max_tokens: int = 1000,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def translate(self, spanish_text: str) -> TranslationOutcome:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": spanish_text},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            translated = (response.choices[0].message.content or "").strip()
        except Exception as exc:
            logger.error("Translation failed: %s", exc)
            raise TranslationUnavailable("Translation service unavailable") from exc

        if not translated:
            raise TranslationUnavailable("Translation service returned no text")

        return TranslationOutcome(
            text=translated,
            input_tokens=estimate_token_count(spanish_text),
            output_tokens=estimate_token_count(translated),
        )
