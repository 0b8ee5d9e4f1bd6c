"""Unit tests for backend.double_check.reconciliation."""

import json
from unittest.mock import patch

import pytest

from backend.double_check import reconciliation
from backend.double_check.reconciliation import reconcile
from backend.models import OperationKind, parse_corrections

ALL_KINDS = list(OperationKind)


class TestBoundarySelections:
    """Empty and full selections never touch the artifacts."""

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_nothing_selected_returns_original(self, kind):
        corrections = [{"type": "x"}, {"type": "y"}]
        assert reconcile(kind, "ORIGINAL", "VERIFIED", [], corrections) == "ORIGINAL"

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_everything_selected_returns_verified(self, kind):
        corrections = [{"type": "x"}, {"type": "y"}]
        assert reconcile(kind, "ORIGINAL", "VERIFIED", corrections, corrections) == "VERIFIED"

    def test_no_corrections_at_all(self):
        assert reconcile("sentenceReview", "O", "V", [], []) == "O"

    def test_artifacts_are_not_parsed(self):
        """Malformed JSON is fine when no applier runs."""
        corrections = [{"type": "remove", "topic": "A"}]
        assert reconcile("topicExtraction", "{oops", "[not json", [], corrections) == "{oops"
        assert reconcile("topicExtraction", "{oops", "[not json", corrections, corrections) == "[not json"


class TestPartialStructured:
    """Partial selections on structured kinds are applied to the original."""

    def test_topic_removal_only(self, topics_original, topics_verified, topic_corrections):
        result = reconcile(
            OperationKind.TOPIC_EXTRACTION,
            topics_original,
            topics_verified,
            topic_corrections[:1],
            topic_corrections,
        )
        assert json.loads(result) == [{"title": "B", "category": "M"}]

    def test_topic_addition_only(self, topics_original, topics_verified, topic_corrections):
        result = reconcile(
            "topicExtraction",
            topics_original,
            topics_verified,
            topic_corrections[1:],
            topic_corrections,
        )
        assert json.loads(result) == [
            {"title": "A", "category": "M"},
            {"title": "B", "category": "M"},
            {"title": "Z", "category": "C"},
        ]

    def test_facts_partial(self, facts_original, facts_corrections):
        selected = facts_corrections[:2]
        result = json.loads(
            reconcile(OperationKind.FACTS_COMPARISON, facts_original, "{}", selected, facts_corrections)
        )
        assert [row["tema"] for row in result["tabela"]] == ["T", "Salário"]
        assert result["tabela"][0]["status"] == "incontroverso"
        assert result["fatosIncontroversos"] == ["F"]
        assert result["fatosControversos"] == ["Jornada"]

    def test_typed_corrections_accepted(self, facts_original, facts_corrections):
        typed = parse_corrections(OperationKind.FACTS_COMPARISON, facts_corrections)
        result = json.loads(reconcile("factsComparison", facts_original, "{}", typed[2:], typed))
        assert [row["tema"] for row in result["tabela"]] == ["T"]

    def test_result_uses_two_space_indent(self, topics_original, topic_corrections):
        result = reconcile("topicExtraction", topics_original, "[]", topic_corrections[:1], topic_corrections)
        assert result == json.dumps([{"title": "B", "category": "M"}], ensure_ascii=False, indent=2)

    def test_deterministic(self, facts_original, facts_corrections):
        args = ("factsComparison", facts_original, "{}", facts_corrections[:2], facts_corrections)
        assert reconcile(*args) == reconcile(*args)

    def test_partial_does_not_log(self, topics_original, topics_verified, topic_corrections):
        with patch.object(reconciliation, "logger") as mock_logger:
            reconcile("topicExtraction", topics_original, topics_verified, topic_corrections[:1], topic_corrections)
        mock_logger.warning.assert_not_called()


class TestPartialWithoutApplier:
    """Kinds without a structural applier fall back to the verified artifact."""

    @pytest.mark.parametrize("kind", ["dispositivo", "sentenceReview", "proofAnalysis", "quickPrompt"])
    def test_returns_verified_and_warns_once(self, kind, review_corrections):
        with patch.object(reconciliation, "logger") as mock_logger:
            result = reconcile(kind, "ORIGINAL", "VERIFIED", review_corrections[:1], review_corrections)

        assert result == "VERIFIED"
        mock_logger.warning.assert_called_once()
        message = mock_logger.warning.call_args[0][0]
        assert "1/3" in message
        assert f"'{kind}'" in message

    def test_unknown_kind_takes_fallback(self):
        corrections = [{"type": "add"}, {"type": "remove"}]
        with patch.object(reconciliation, "logger") as mock_logger:
            result = reconcile("summary", "ORIGINAL", "VERIFIED", corrections[:1], corrections)

        assert result == "VERIFIED"
        mock_logger.warning.assert_called_once()
        assert "'summary'" in mock_logger.warning.call_args[0][0]

    def test_boundaries_do_not_warn(self, review_corrections):
        with patch.object(reconciliation, "logger") as mock_logger:
            reconcile("sentenceReview", "O", "V", [], review_corrections)
            reconcile("sentenceReview", "O", "V", review_corrections, review_corrections)
        mock_logger.warning.assert_not_called()


class TestMalformedCorrections:
    """Malformed corrections in a partial selection are skipped, never raised."""

    def test_wrong_shaped_merge_is_skipped(self, topics_original):
        merge = {"type": "merge", "topics": [{"title": "A"}, {"title": "B"}], "into": "AB"}
        remove = {"type": "remove", "topic": "B"}
        corrections = [merge, remove, {"type": "add", "topic": {"title": "Z"}}]
        result = reconcile("topicExtraction", topics_original, "[]", [merge, remove], corrections)
        assert json.loads(result) == [{"title": "A", "category": "M"}]

    def test_wrong_shaped_fato_is_skipped(self, facts_original, facts_corrections):
        fato = {"type": "add_fato", "list": "fatosIncontroversos", "fato": {"text": "F"}}
        corrections = [fato, *facts_corrections]
        result = json.loads(
            reconcile("factsComparison", facts_original, "{}", [fato, facts_corrections[0]], corrections)
        )
        assert "fatosIncontroversos" not in result
        assert result["tabela"][0]["status"] == "incontroverso"

    def test_untyped_items_are_skipped(self, topics_original):
        corrections = [{"topic": "A"}, "remove A", {"type": "remove", "topic": "A"}]
        result = reconcile("topicExtraction", topics_original, "[]", corrections[:2], corrections)
        assert result == json.dumps(json.loads(topics_original), ensure_ascii=False, indent=2)
