"""
Human-readable descriptions and icons for double-check corrections.

Both lookups are total: any operation kind, correction type or missing
field yields a usable string, never an exception.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from backend.exceptions import CorrectionParseError
from backend.models.correction import Correction, GenericCorrection, TopicRef, parse_correction
from backend.models.enums import OperationKind, TEXT_FREE_KINDS, coerce_operation_kind

DEFAULT_ICON = "📋"
DEFAULT_TOPIC_CATEGORY = "MÉRITO"
UNSPECIFIED_TEMA = "(unspecified topic)"

TOPIC_CORRECTION_ICONS = MappingProxyType({
    "remove": "❌",
    "add": "➕",
    "merge": "🔗",
    "reclassify": "🏷️",
})

DISPOSITIVO_CORRECTION_ICONS = MappingProxyType({
    "add": "➕",
    "modify": "✏️",
    "remove": "❌",
})

REVIEW_CORRECTION_ICONS = MappingProxyType({
    "false_positive": "⚠️",
    "missed": "🔍",
    "improve": "💡",
})

FACTS_CORRECTION_ICONS = MappingProxyType({
    "add_row": "➕",
    "fix_row": "✏️",
    "remove_row": "❌",
    "add_fato": "📝",
})

_ICONS_BY_KIND = MappingProxyType({
    OperationKind.TOPIC_EXTRACTION: TOPIC_CORRECTION_ICONS,
    OperationKind.DISPOSITIVO: DISPOSITIVO_CORRECTION_ICONS,
    OperationKind.SENTENCE_REVIEW: REVIEW_CORRECTION_ICONS,
    OperationKind.PROOF_ANALYSIS: REVIEW_CORRECTION_ICONS,
    OperationKind.QUICK_PROMPT: REVIEW_CORRECTION_ICONS,
    OperationKind.FACTS_COMPARISON: FACTS_CORRECTION_ICONS,
})

OPERATION_LABELS = MappingProxyType({
    OperationKind.TOPIC_EXTRACTION: "Topic Extraction",
    OperationKind.DISPOSITIVO: "Dispositivo",
    OperationKind.SENTENCE_REVIEW: "Sentence Review",
    OperationKind.FACTS_COMPARISON: "Facts Comparison",
    OperationKind.PROOF_ANALYSIS: "Proof Analysis",
    OperationKind.QUICK_PROMPT: "Quick Prompt",
})

# Facts table columns that have a display label
FACTS_FIELD_LABELS = MappingProxyType({
    "alegacaoReclamante": "claimant's allegation",
    "alegacaoReclamada": "defendant's allegation",
    "status": "status",
    "relevancia": "relevance",
    "observacoes": "notes",
})


def get_operation_label(kind: "OperationKind | str") -> str:
    """Display name of an operation kind; unknown kinds are returned as given."""
    kind = coerce_operation_kind(kind)
    if isinstance(kind, OperationKind):
        return OPERATION_LABELS[kind]
    return str(kind)


def get_correction_icon(kind: "OperationKind | str", correction_type: str) -> str:
    """Icon for a correction type within an operation kind."""
    icons = _ICONS_BY_KIND.get(coerce_operation_kind(kind))
    if icons is None:
        return DEFAULT_ICON
    return icons.get(correction_type, DEFAULT_ICON)


def resolve_topic_name(topic: "str | TopicRef | Mapping | None") -> str | None:
    """Name of a topic referenced by a correction, None when it cannot be resolved."""
    if isinstance(topic, str):
        return topic or None
    if isinstance(topic, TopicRef):
        return topic.title or None
    if isinstance(topic, Mapping):
        return topic.get("title") or None
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _describe_topic_correction(correction: Correction) -> str:
    topic = getattr(correction, "topic", None)

    if correction.type == "remove":
        return f'Remove topic "{resolve_topic_name(topic) or "topic"}"'

    if correction.type == "add":
        if isinstance(topic, TopicRef) and topic.title:
            return f'Add topic "{topic.title}" in {topic.category or DEFAULT_TOPIC_CATEGORY}'
        return "Add new topic"

    if correction.type == "merge":
        names = '" + "'.join(getattr(correction, "topics", None) or [])
        return f'Merge "{names}" → "{_text(getattr(correction, "into", None))}"'

    if correction.type == "reclassify":
        name = resolve_topic_name(topic) or "topic"
        return (
            f'Reclassify "{name}" from {_text(getattr(correction, "from_", None))} '
            f'to {_text(getattr(correction, "to", None))}'
        )

    return f"Correction: {correction.type}"


def _describe_dispositivo_correction(correction: Correction) -> str:
    item = _text(getattr(correction, "item", None))
    suggestion = _text(getattr(correction, "suggestion", None))

    if correction.type == "add":
        return f'Add: "{item}"'
    if correction.type == "modify":
        return f'Modify: "{item}" → "{suggestion}"'
    if correction.type == "remove":
        return f'Remove: "{item}"'
    return f"Correction: {correction.type}"


def _describe_review_correction(correction: Correction) -> str:
    item = _text(getattr(correction, "item", None))
    suggestion = _text(getattr(correction, "suggestion", None))

    if correction.type == "false_positive":
        return f'False positive: "{item}" is not a real issue'
    if correction.type == "missed":
        return f'Missed issue: "{item}"'
    if correction.type == "improve":
        return f'Improve: "{item}" → "{suggestion}"'
    return f"Correction: {correction.type}"


def _describe_facts_correction(correction: Correction) -> str:
    if correction.type == "add_row":
        row = getattr(correction, "row", None)
        tema = row.get("tema") if isinstance(row, dict) else None
        return f'Add row: "{tema or "New row"}"'

    if correction.type == "fix_row":
        tema = getattr(correction, "tema", None) or UNSPECIFIED_TEMA
        field = getattr(correction, "field", None)
        new_value = getattr(correction, "new_value", None)
        # Generic targets such as "tabela" get the simplified form
        if field not in FACTS_FIELD_LABELS or not new_value:
            return f'Fix "{tema}" - see reason for details'
        return f'Alter {FACTS_FIELD_LABELS[field]} in "{tema}": "{new_value}"'

    if correction.type == "remove_row":
        return f'Remove row: "{_text(getattr(correction, "tema", None))}"'

    if correction.type == "add_fato":
        bucket = (
            "incontroverso"
            if getattr(correction, "fact_list", None) == "fatosIncontroversos"
            else "controverso"
        )
        return f'Add {bucket} fact: "{_text(getattr(correction, "fato", None))}"'

    return f"Correction: {correction.type}"


def get_correction_description(
    kind: "OperationKind | str",
    correction: "Correction | Mapping[str, Any]",
) -> str:
    """
    Describe a correction for the reviewer.

    Args:
        kind: Operation the correction belongs to
        correction: Typed correction, or a raw mapping from the upstream

    Returns:
        One-line description; unknown kinds or types fall back to "Correction: <type>"
    """
    if not isinstance(correction, Correction):
        try:
            correction = parse_correction(kind, correction)
        except CorrectionParseError:
            raw_type = correction.get("type") if isinstance(correction, Mapping) else None
            return f"Correction: {raw_type}"
    if isinstance(correction, GenericCorrection):
        return f"Correction: {correction.type}"

    kind = coerce_operation_kind(kind)
    if kind == OperationKind.TOPIC_EXTRACTION:
        return _describe_topic_correction(correction)
    if kind == OperationKind.DISPOSITIVO:
        return _describe_dispositivo_correction(correction)
    if kind in TEXT_FREE_KINDS:
        return _describe_review_correction(correction)
    if kind == OperationKind.FACTS_COMPARISON:
        return _describe_facts_correction(correction)
    return f"Correction: {correction.type}"
