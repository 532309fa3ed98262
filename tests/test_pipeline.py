"""
Unit tests for the upload pipeline: language heuristic, cost estimates,
transcription / translation / extraction adapters, memo log.
"""
import json
import math

import pytest

from app.pipeline.costs import (
    CostRates,
    completion_cost,
    estimate_audio_duration_minutes,
    estimate_token_count,
    transcription_cost,
)
from app.pipeline.errors import TranscriptionError, TranslationUnavailable
from app.pipeline.extraction import (
    STATUS_FAILED,
    STATUS_OK,
    STATUS_UNPARSABLE,
    Extractor,
    parse_fields,
)
from app.pipeline.language import is_spanish, spanish_word_ratio
from app.pipeline.memo_log import append_memo
from app.pipeline.transcription import Transcriber
from app.pipeline.translation import Translator

ENGLISH_MEMO = "I need a P.O. for an LA Pump for the Halliburton Unit 4555"
SPANISH_MEMO = "Necesito una orden de compra para la bomba del cliente Halliburton"


# =====================================================================
# Language heuristic
# =====================================================================
class TestLanguageHeuristic:
    def test_function_words(self):
        assert is_spanish("el perro y la casa de que")

    def test_spanish_memo(self):
        assert is_spanish(SPANISH_MEMO)

    def test_accent_anywhere(self):
        assert is_spanish("Please order the café supplies")

    def test_accent_case_insensitive(self):
        assert is_spanish("PIÑATA")

    def test_english_sentence(self):
        assert not is_spanish(ENGLISH_MEMO)

    def test_empty(self):
        assert not is_spanish("")
        assert not is_spanish("   \n\t")

    def test_ratio_must_exceed_threshold(self):
        # 3 of 10 words is exactly 0.3, which is not enough
        text = "el la de one two three four five six seven"
        assert spanish_word_ratio(text) == pytest.approx(0.3)
        assert not is_spanish(text)

    def test_punctuation_stripped(self):
        assert spanish_word_ratio('(el), la; "de"!') == 1.0


# =====================================================================
# Cost estimates (approximate by nature)
# =====================================================================
class TestCosts:
    @pytest.mark.parametrize("size", [0, 1, 16000, 95_999, 96_000, 10**9])
    def test_duration_floor(self, size):
        assert estimate_audio_duration_minutes(size) >= 0.1

    def test_duration_one_minute(self):
        assert estimate_audio_duration_minutes(16000 * 60) == pytest.approx(1.0)

    @pytest.mark.parametrize("text", ["", "abcd", "abcde", "x" * 401])
    def test_token_count(self, text):
        assert estimate_token_count(text) == math.ceil(len(text) / 4)

    def test_token_count_empty(self):
        assert estimate_token_count("") == 0

    def test_transcription_cost(self):
        assert transcription_cost(2.0, CostRates()) == pytest.approx(0.006)

    def test_completion_cost(self):
        rates = CostRates()
        assert completion_cost(1000, 1000, rates) == pytest.approx(0.0035)
        assert completion_cost(0, 0, rates) == 0


# =====================================================================
# Transcription adapter
# =====================================================================
class TestTranscriber:
    def test_spanish_accepted_first_try(self, speech):
        speech.responses = {"es": SPANISH_MEMO}
        outcome = Transcriber(speech).transcribe(b"audio")
        assert outcome.is_spanish
        assert outcome.text == SPANISH_MEMO
        assert outcome.attempts == 1
        assert outcome.cost_multiplier == 1
        assert speech.calls == ["es"]

    def test_non_spanish_retries_in_english(self, speech):
        speech.responses = {"es": "I need a pump", "en": ENGLISH_MEMO}
        outcome = Transcriber(speech).transcribe(b"audio")
        assert not outcome.is_spanish
        assert outcome.text == ENGLISH_MEMO
        assert outcome.attempts == 2
        # wasted Spanish attempt is billed twice
        assert outcome.cost_multiplier == 2
        assert outcome.language_code == "en"
        assert speech.calls == ["es", "en"]

    def test_spanish_call_fails_falls_back(self, speech):
        speech.responses = {"es": RuntimeError("boom"), "en": ENGLISH_MEMO}
        outcome = Transcriber(speech).transcribe(b"audio")
        assert not outcome.is_spanish
        assert outcome.text == ENGLISH_MEMO
        assert outcome.attempts == 2
        assert outcome.cost_multiplier == 1

    def test_both_attempts_fail(self, speech):
        speech.responses = {"es": RuntimeError("boom"), "en": RuntimeError("down")}
        with pytest.raises(TranscriptionError) as info:
            Transcriber(speech).transcribe(b"audio")
        assert info.value.attempts == 2
        assert "down" in str(info.value)

    def test_english_retry_failure_is_fatal(self, speech):
        speech.responses = {"es": "I need a pump", "en": RuntimeError("down")}
        with pytest.raises(TranscriptionError) as info:
            Transcriber(speech).transcribe(b"audio")
        assert info.value.attempts == 2
        assert speech.calls == ["es", "en"]

    def test_custom_language_codes(self, speech):
        speech.responses = {"es-MX": "hola que tal", "en-US": "hello"}
        outcome = Transcriber(speech, spanish_code="es-MX", english_code="en-US").transcribe(b"a")
        assert outcome.is_spanish
        assert speech.calls == ["es-MX"]


# =====================================================================
# Translation adapter
# =====================================================================
class TestTranslator:
    def test_translates(self, chat):
        chat.replies = ["  I need a purchase order for the pump.  "]
        outcome = Translator(chat).translate(SPANISH_MEMO)
        assert outcome.text == "I need a purchase order for the pump."
        assert outcome.input_tokens == estimate_token_count(SPANISH_MEMO)
        assert outcome.output_tokens == estimate_token_count(outcome.text)

        request = chat.requests[0]
        assert request["temperature"] == 0.1
        assert request["max_tokens"] == 1000
        assert request["messages"][0]["role"] == "system"
        assert request["messages"][1] == {"role": "user", "content": SPANISH_MEMO}

    def test_call_error(self, chat):
        chat.replies = [ConnectionError("network down")]
        with pytest.raises(TranslationUnavailable):
            Translator(chat).translate(SPANISH_MEMO)

    def test_empty_answer(self, chat):
        chat.replies = ["   "]
        with pytest.raises(TranslationUnavailable):
            Translator(chat).translate(SPANISH_MEMO)


# =====================================================================
# Extraction adapter
# =====================================================================
class TestExtractor:
    def test_valid_json(self, chat):
        raw = json.dumps({
            "description": "LA Pump",
            "unit_number": "4555",
            "customer": "Halliburton",
            "vendor_supplier": "Hydroquip",
        })
        chat.replies = [raw]
        outcome = Extractor(chat).extract(ENGLISH_MEMO)
        assert outcome.status == STATUS_OK
        assert outcome.fields.description == "LA Pump"
        assert outcome.fields.unit_number == "4555"
        assert outcome.fields.customer == "Halliburton"
        assert outcome.fields.vendor_supplier == "Hydroquip"
        assert outcome.tokens == estimate_token_count(ENGLISH_MEMO + raw)
        assert chat.requests[0]["max_tokens"] == 200

    def test_missing_and_falsy_keys(self):
        fields = parse_fields('{"description": "Hose", "customer": ""}')
        assert fields.description == "Hose"
        assert fields.customer is None
        assert fields.unit_number is None
        assert fields.vendor_supplier is None

    def test_number_becomes_text(self):
        assert parse_fields('{"unit_number": 3232}').unit_number == "3232"

    def test_malformed_json(self, chat):
        raw = "Sure! The description is a hose."
        chat.replies = [raw]
        outcome = Extractor(chat).extract(ENGLISH_MEMO)
        assert outcome.status == STATUS_UNPARSABLE
        assert outcome.fields.model_dump() == {
            "description": None,
            "unit_number": None,
            "customer": None,
            "vendor_supplier": None,
        }
        # the call still cost something
        assert outcome.tokens == estimate_token_count(ENGLISH_MEMO + raw)

    def test_json_that_is_not_an_object(self, chat):
        chat.replies = ['["LA Pump", "4555"]']
        outcome = Extractor(chat).extract(ENGLISH_MEMO)
        assert outcome.status == STATUS_UNPARSABLE
        assert outcome.fields.description is None

    def test_call_error(self, chat):
        chat.replies = [PermissionError("bad key")]
        outcome = Extractor(chat).extract(ENGLISH_MEMO)
        assert outcome.status == STATUS_FAILED
        assert outcome.tokens == 0
        assert outcome.fields.customer is None


# =====================================================================
# Memo log
# =====================================================================
class TestMemoLog:
    def test_appends_lines(self, tmp_path):
        path = tmp_path / "logs" / "memos.txt"
        append_memo(str(path), "first memo")
        append_memo(str(path), "second memo")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert lines[0].endswith(" | first memo")
        assert lines[1].endswith(" | second memo")
