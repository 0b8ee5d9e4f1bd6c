"""
Patch appliers for structured double-check artifacts.

Each applier parses the original artifact JSON, folds the selected
corrections over it in selection order (each step sees the result of the
previous one) and serializes the result. A correction missing the fields
its branch needs, or kept untyped because its fields had the wrong shape,
is skipped.
"""

import copy
import json
from collections.abc import Callable, Iterator, Sequence
from typing import Any, Optional

from backend.exceptions import ArtifactShapeError, CorrectionParseError
from backend.models.correction import (
    AddFactsRow,
    AddFato,
    AddTopic,
    Correction,
    FixFactsRow,
    MergeTopics,
    ReclassifyTopic,
    RemoveFactsRow,
    RemoveTopic,
    TopicRef,
    parse_correction,
)
from backend.models.enums import OperationKind, coerce_operation_kind
from .descriptions import DEFAULT_TOPIC_CATEGORY, resolve_topic_name

Applier = Callable[[str, Sequence[Correction]], str]


def serialize_artifact(artifact: Any) -> str:
    """Serialize a structured artifact the way the drafting UI stores it."""
    return json.dumps(artifact, ensure_ascii=False, indent=2)


def _typed(kind: OperationKind, corrections: Sequence[Any]) -> Iterator[Correction]:
    """Typed corrections in order; items with no type or not an object are skipped."""
    for item in corrections:
        try:
            yield parse_correction(kind, item)
        except CorrectionParseError:
            continue


# ---------------------------------------------------------------------------
# topicExtraction
# ---------------------------------------------------------------------------
def _topic_list(artifact: Any) -> list:
    """The topic list inside an extraction artifact (bare list or {topics: [...]})."""
    if isinstance(artifact, list):
        return artifact
    if isinstance(artifact, dict) and isinstance(artifact.get("topics"), list):
        return artifact["topics"]
    raise ArtifactShapeError(
        "Topic extraction artifact must be a list of topics or an object with 'topics'"
    )


def _title_of(entry: Any) -> Optional[str]:
    return entry.get("title") if isinstance(entry, dict) else None


def _remove_topic(topics: list, correction: RemoveTopic) -> list:
    name = resolve_topic_name(correction.topic)
    if name is None:
        return topics
    return [t for t in topics if _title_of(t) != name]


def _add_topic(topics: list, correction: AddTopic) -> list:
    # A bare topic name carries no category, so only full objects are added
    if not isinstance(correction.topic, TopicRef) or not correction.topic.title:
        return topics
    return topics + [correction.topic.model_dump(exclude_none=True)]


def _merge_topics(topics: list, correction: MergeTopics) -> list:
    if not correction.topics or not correction.into:
        return topics

    merged = set(correction.topics)
    category = next(
        (t.get("category") for t in topics if _title_of(t) in merged and t.get("category")),
        DEFAULT_TOPIC_CATEGORY,
    )
    remaining = [t for t in topics if _title_of(t) not in merged]
    return remaining + [{"title": correction.into, "category": category}]


def _reclassify_topic(topics: list, correction: ReclassifyTopic) -> list:
    name = resolve_topic_name(correction.topic)
    if name is None or not correction.to:
        return topics
    for entry in topics:
        if _title_of(entry) == name:
            entry["category"] = correction.to
            break
    return topics


_TOPIC_STEPS: dict[type, Callable[[list, Any], list]] = {
    RemoveTopic: _remove_topic,
    AddTopic: _add_topic,
    MergeTopics: _merge_topics,
    ReclassifyTopic: _reclassify_topic,
}


def apply_topic_corrections(original: str, corrections: Sequence[Correction]) -> str:
    """
    Apply selected corrections to a topic extraction artifact.

    Args:
        original: JSON text of the topic list (or of {topics: [...], ...})
        corrections: Selected corrections, applied in order

    Returns:
        JSON text of the patched artifact, in the same shape as the original
    """
    artifact = json.loads(original)
    topics = copy.deepcopy(_topic_list(artifact))

    for correction in _typed(OperationKind.TOPIC_EXTRACTION, corrections):
        step = _TOPIC_STEPS.get(type(correction))
        if step is not None:
            topics = step(topics, correction)

    if isinstance(artifact, dict):
        artifact["topics"] = topics
        return serialize_artifact(artifact)
    return serialize_artifact(topics)


# ---------------------------------------------------------------------------
# factsComparison
# ---------------------------------------------------------------------------
def _fix_row(facts: dict, correction: FixFactsRow) -> None:
    tabela = facts.get("tabela")
    if not isinstance(tabela, list) or not correction.tema:
        return
    if not correction.field or not correction.new_value:
        return
    for row in tabela:
        if isinstance(row, dict) and row.get("tema") == correction.tema:
            row[correction.field] = correction.new_value
            return


def _add_row(facts: dict, correction: AddFactsRow) -> None:
    tabela = facts.get("tabela")
    if isinstance(tabela, list) and correction.row:
        tabela.append(copy.deepcopy(correction.row))


def _remove_row(facts: dict, correction: RemoveFactsRow) -> None:
    tabela = facts.get("tabela")
    if not isinstance(tabela, list) or not correction.tema:
        return
    facts["tabela"] = [
        row for row in tabela
        if not (isinstance(row, dict) and row.get("tema") == correction.tema)
    ]


def _add_fato(facts: dict, correction: AddFato) -> None:
    if not correction.fact_list or not correction.fato:
        return
    bucket = facts.setdefault(correction.fact_list, [])
    if not isinstance(bucket, list):
        raise ArtifactShapeError(
            f"Facts bucket '{correction.fact_list}' must be a list, got {type(bucket).__name__}"
        )
    bucket.append(correction.fato)


_FACTS_STEPS: dict[type, Callable[[dict, Any], None]] = {
    FixFactsRow: _fix_row,
    AddFactsRow: _add_row,
    RemoveFactsRow: _remove_row,
    AddFato: _add_fato,
}


def apply_facts_corrections(original: str, corrections: Sequence[Correction]) -> str:
    """
    Apply selected corrections to a facts comparison artifact.

    Args:
        original: JSON text of {tabela: [...], fatosIncontroversos: [...], ...}
        corrections: Selected corrections, applied in order

    Returns:
        JSON text of the patched facts object
    """
    facts = json.loads(original)
    if not isinstance(facts, dict):
        raise ArtifactShapeError("Facts comparison artifact must be a JSON object")

    for correction in _typed(OperationKind.FACTS_COMPARISON, corrections):
        step = _FACTS_STEPS.get(type(correction))
        if step is not None:
            step(facts, correction)

    return serialize_artifact(facts)


APPLIERS: dict[OperationKind, Applier] = {
    OperationKind.TOPIC_EXTRACTION: apply_topic_corrections,
    OperationKind.FACTS_COMPARISON: apply_facts_corrections,
}


def get_applier(kind: "OperationKind | str") -> Optional[Applier]:
    """Structural applier for an operation kind, None for prose kinds."""
    kind = coerce_operation_kind(kind)
    if not isinstance(kind, OperationKind):
        return None
    return APPLIERS.get(kind)
