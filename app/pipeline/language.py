"""
Word-list language heuristic.

Decides whether a transcription reads as Spanish by counting common Spanish
function words and looking for Spanish diacritics.  No model involved.
"""
from __future__ import annotations

import re

SPANISH_WORDS: frozenset[str] = frozenset({
    "el", "la", "los", "las", "un", "una", "y", "o", "pero", "si", "no",
    "con", "por", "para", "de", "del", "en", "que", "es", "son", "está",
    "están", "fue", "fueron", "ser", "estar", "tener", "hacer", "decir",
})

SPANISH_ACCENTS = re.compile(r"[áéíóúüñ]", re.IGNORECASE)

PUNCTUATION = ".,!?;:\"'()"
_STRIP_PUNCTUATION = str.maketrans("", "", PUNCTUATION)

MIN_SPANISH_RATIO = 0.3


def spanish_word_ratio(text: str) -> float:
    """Share of whitespace-separated tokens that are Spanish function words."""
    words = text.lower().split()
    if not words:
        return 0.0
    hits = sum(1 for w in words if w.translate(_STRIP_PUNCTUATION) in SPANISH_WORDS)
    return hits / len(words)


def is_spanish(text: str) -> bool:
    """Return True if *text* is primarily Spanish.

    Empty or whitespace-only text is never Spanish.
    """
    if not text or not text.strip():
        return False
    return spanish_word_ratio(text) > MIN_SPANISH_RATIO or bool(SPANISH_ACCENTS.search(text))
