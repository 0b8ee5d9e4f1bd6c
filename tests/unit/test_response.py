"""Unit tests for backend.double_check.response."""

import json
from unittest.mock import patch

import pytest

from backend.double_check import response as response_module
from backend.double_check.response import (
    DEFAULT_CONFIDENCE,
    parse_double_check_response,
    unwrap_verified,
)
from backend.exceptions import CorrectionParseError
from backend.models import FixFactsRow, GenericCorrection, OperationKind, RemoveTopic


class TestParseDoubleCheckResponse:
    """Tests for locating corrections and the verified artifact."""

    def test_topic_answer(self, topic_corrections):
        payload = {
            "corrections": topic_corrections,
            "verifiedTopics": [{"title": "B", "category": "M"}],
            "confidence": 0.95,
            "summary": "One duplicate removed",
        }
        result = parse_double_check_response(OperationKind.TOPIC_EXTRACTION, json.dumps(payload))

        assert result.operation == "topicExtraction"
        assert isinstance(result.corrections[0], RemoveTopic)
        assert json.loads(result.verified) == [{"title": "B", "category": "M"}]
        assert result.confidence == 0.95
        assert result.summary == "One duplicate removed"
        assert result.has_corrections

    def test_code_fence_is_stripped(self):
        content = '```json\n{"corrections": [], "verifiedDispositivo": "Julgo procedente"}\n```'
        result = parse_double_check_response("dispositivo", content)
        assert result.verified == "Julgo procedente"
        assert not result.has_corrections

    def test_verified_keys_by_kind(self):
        assert parse_double_check_response(
            "sentenceReview", {"verifiedReview": "Reviewed text"}
        ).verified == "Reviewed text"
        assert parse_double_check_response(
            "proofAnalysis", {"verifiedResult": "Analysis"}
        ).verified == "Analysis"

    def test_generic_key_fallback(self):
        result = parse_double_check_response("topicExtraction", {"verifiedResult": "[]"})
        assert result.verified == "[]"

    def test_missing_verified_uses_original(self):
        result = parse_double_check_response("quickPrompt", {"corrections": []}, original="ORIGINAL")
        assert result.verified == "ORIGINAL"
        assert parse_double_check_response("quickPrompt", {}).verified is None

    def test_structured_verified_is_serialized(self):
        facts = {"tabela": [{"tema": "Férias"}]}
        result = parse_double_check_response("factsComparison", {"verifiedResult": facts})
        assert result.verified == json.dumps(facts, ensure_ascii=False, indent=2)

    def test_confidence_defaults_and_clamps(self):
        assert parse_double_check_response("dispositivo", {}).confidence == DEFAULT_CONFIDENCE
        assert parse_double_check_response("dispositivo", {"confidence": "high"}).confidence == DEFAULT_CONFIDENCE
        assert parse_double_check_response("dispositivo", {"confidence": 1.7}).confidence == 1.0

    def test_text_correction_for_facts(self):
        result = parse_double_check_response(
            "factsComparison", {"corrections": ["Row about overtime is wrong"]}
        )
        correction = result.corrections[0]
        assert isinstance(correction, FixFactsRow)
        assert correction.tema == "Unknown"
        assert correction.field == "observacoes"
        assert correction.new_value == "Row about overtime is wrong"
        assert correction.reason == "Row about overtime is wrong"

    def test_text_correction_dropped_for_other_kinds(self):
        with patch.object(response_module, "logger") as mock_logger:
            result = parse_double_check_response("sentenceReview", {"corrections": ["Looks fine"]})
        assert result.corrections == []
        mock_logger.warning.assert_called_once()

    def test_wrong_shaped_correction_is_kept_untyped(self):
        result = parse_double_check_response("topicExtraction", {"corrections": [{"type": "merge", "topics": 1}]})
        assert type(result.corrections[0]) is GenericCorrection
        assert result.corrections[0].to_dict() == {"type": "merge", "topics": 1}

    def test_correction_without_type_raises(self):
        with pytest.raises(CorrectionParseError):
            parse_double_check_response("topicExtraction", {"corrections": [{"topic": "A"}]})

    def test_non_object_answer_raises(self):
        with pytest.raises(ValueError, match="JSON object"):
            parse_double_check_response("topicExtraction", "[1, 2]")

    def test_non_json_answer_raises(self):
        with pytest.raises(json.JSONDecodeError):
            parse_double_check_response("topicExtraction", "Sorry, I cannot help")


class TestUnwrapVerified:
    def test_unwraps_envelope(self):
        assert unwrap_verified('{"verifiedResult": "text"}') == "text"
        assert json.loads(unwrap_verified('{"verifiedResult": {"tabela": []}}')) == {"tabela": []}

    def test_leaves_other_values(self):
        assert unwrap_verified("plain text") == "plain text"
        assert unwrap_verified('{"tabela": []}') == '{"tabela": []}'
