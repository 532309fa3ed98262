"""
LLM-based purchase-order field extractor.

Asks a chat model for a strict JSON object with four keys.  Extraction is
best effort: an unusable answer or a failed call yields empty fields and is
never raised to the caller.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from app.pipeline.costs import estimate_token_count
from app.schemas import ExtractedFields

logger = logging.getLogger(__name__)

FIELD_NAMES = ("description", "unit_number", "customer", "vendor_supplier")

SYSTEM_PROMPT = """You are a data extraction specialist. Extract purchase order information from voice transcriptions.

Extract these 4 fields:
1. Description: What part/item is being picked up (e.g., "LA Pump", "Hose", "Bolts")
2. Unit Number: The equipment unit number (e.g., "4555", "3232", "24333")
3. Customer: The company/customer name (e.g., "Halliburton", "Nextier", "Liberty")
4. Vendor/Supplier: Where they're picking up the part (e.g., "Hydroquip", "Diamond Hydraulics", "Basin Supply")

Return ONLY a JSON object with these exact keys: "description", "unit_number", "customer", "vendor_supplier".
If any field cannot be determined, use null for that field.
Be concise - extract key terms, not full sentences.

Examples:
Input: "I need a P.O. for an LA Pump for the Halliburton Unit 4555, I will be heading to Hydroquip to pick up part"
Output: {"description": "LA Pump", "unit_number": "4555", "customer": "Halliburton", "vendor_supplier": "Hydroquip"}

Input: "I need a purchase order so I can buy a hose from diamond hydraulics. I am working on the Nextier Unit 3232"
Output: {"description": "Hose", "unit_number": "3232", "customer": "Nextier", "vendor_supplier": "Diamond Hydraulics"}"""

# ExtractionOutcome.status values
STATUS_OK = "ok"
STATUS_UNPARSABLE = "unparsable"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class ExtractionOutcome:
    status: str
    fields: ExtractedFields = field(default_factory=ExtractedFields)
    tokens: int = 0


def _as_text(value: Any) -> Optional[str]:
    if not value:
        return None
    return value if isinstance(value, str) else str(value)


def parse_fields(raw: str) -> Optional[ExtractedFields]:
    """Parse the model's answer; ``None`` if it is not a JSON object."""
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return ExtractedFields(**{name: _as_text(data.get(name)) for name in FIELD_NAMES})


class Extractor:
    def __init__(
        self,
        client: Any,
        model: str = "gpt-3.5-turbo",
        temperature: float = 0.1,
        max_tokens: int = 200,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def extract(self, text: str) -> ExtractionOutcome:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": text},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            raw = (response.choices[0].message.content or "").strip()
        except Exception as exc:
            logger.error("Data extraction failed: %s", exc)
            return ExtractionOutcome(status=STATUS_FAILED)

        # Tokens were spent whether or not the answer parses
        tokens = estimate_token_count(text + raw)
        fields = parse_fields(raw)
        if fields is None:
            logger.error("Failed to parse extraction JSON: %s", raw)
            return ExtractionOutcome(status=STATUS_UNPARSABLE, tokens=tokens)

        logger.info(
            "Extracted %d of %d fields",
            sum(1 for name in FIELD_NAMES if getattr(fields, name) is not None),
            len(FIELD_NAMES),
        )
        return ExtractionOutcome(status=STATUS_OK, fields=fields, tokens=tokens)
