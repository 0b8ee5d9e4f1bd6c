"""
Enum definitions for the double-check review system.
"""

from enum import Enum


class OperationKind(str, Enum):
    """Drafting operations whose output can go through a double-check pass."""
    TOPIC_EXTRACTION = "topicExtraction"
    DISPOSITIVO = "dispositivo"
    SENTENCE_REVIEW = "sentenceReview"
    FACTS_COMPARISON = "factsComparison"
    PROOF_ANALYSIS = "proofAnalysis"
    QUICK_PROMPT = "quickPrompt"


class TopicCorrectionType(str, Enum):
    """Corrections proposed for an extracted topic list."""
    REMOVE = "remove"
    ADD = "add"
    MERGE = "merge"
    RECLASSIFY = "reclassify"


class DispositivoCorrectionType(str, Enum):
    """Corrections proposed for the operative part of the decision."""
    ADD = "add"
    MODIFY = "modify"
    REMOVE = "remove"


class ReviewCorrectionType(str, Enum):
    """Corrections proposed for prose reviews (sentence, proof, quick prompt)."""
    FALSE_POSITIVE = "false_positive"
    MISSED = "missed"
    IMPROVE = "improve"


class FactsCorrectionType(str, Enum):
    """Corrections proposed for the facts comparison table."""
    ADD_ROW = "add_row"
    FIX_ROW = "fix_row"
    REMOVE_ROW = "remove_row"
    ADD_FATO = "add_fato"


# Kinds whose artifact is unstructured prose reviewed with the
# false_positive / missed / improve vocabulary
TEXT_FREE_KINDS = frozenset({
    OperationKind.SENTENCE_REVIEW,
    OperationKind.PROOF_ANALYSIS,
    OperationKind.QUICK_PROMPT,
})

# Kinds whose artifact is JSON and can be patched correction by correction
STRUCTURED_KINDS = frozenset({
    OperationKind.TOPIC_EXTRACTION,
    OperationKind.FACTS_COMPARISON,
})


def coerce_operation_kind(kind: "OperationKind | str") -> "OperationKind | str":
    """Return the OperationKind for a known value, or the raw string otherwise."""
    if isinstance(kind, OperationKind):
        return kind
    try:
        return OperationKind(kind)
    except ValueError:
        return kind


def kind_value(kind: "OperationKind | str") -> str:
    """Wire value of an operation kind (e.g. "topicExtraction")."""
    if isinstance(kind, OperationKind):
        return kind.value
    return str(kind)
