"""
Pydantic models for double-check correction entities.

A correction is discriminated by its ``type`` together with the operation
kind it was produced for: ``add`` on a topic list and ``add`` on a
dispositivo are different variants. Every field besides ``type`` is
optional; an incomplete correction is valid and is skipped when applied.
A correction whose fields have the wrong shape is kept as a
GenericCorrection, so it is described generically and never applied.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from backend.exceptions import CorrectionParseError
from .enums import (
    DispositivoCorrectionType,
    FactsCorrectionType,
    OperationKind,
    ReviewCorrectionType,
    TopicCorrectionType,
)


class TopicRef(BaseModel):
    """A topic as referenced from a correction: ``{title, category}``."""
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    category: Optional[str] = None


class Correction(BaseModel):
    """A single proposed edit produced by the double-check pass."""
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    type: str
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        """Wire form of the correction: aliased names, unset fields omitted."""
        data = self.model_dump(by_alias=True, exclude_unset=True)
        data.pop("type", None)
        return {"type": self.type, **data}


class GenericCorrection(Correction):
    """
    Correction that matches no variant of its operation kind.

    Either the type is not defined for the kind, or the payload failed the
    variant's validation. Every upstream field is kept as-is.
    """
    reason: Any = None


# ---------------------------------------------------------------------------
# topicExtraction
# ---------------------------------------------------------------------------
class RemoveTopic(Correction):
    type: Literal["remove"] = "remove"
    topic: Union[str, TopicRef, None] = None


class AddTopic(Correction):
    type: Literal["add"] = "add"
    topic: Union[str, TopicRef, None] = None


class MergeTopics(Correction):
    type: Literal["merge"] = "merge"
    topics: Optional[list[str]] = None
    into: Optional[str] = None


class ReclassifyTopic(Correction):
    type: Literal["reclassify"] = "reclassify"
    topic: Union[str, TopicRef, None] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None


# ---------------------------------------------------------------------------
# dispositivo
# ---------------------------------------------------------------------------
class AddDispositivoItem(Correction):
    type: Literal["add"] = "add"
    item: Optional[str] = None


class ModifyDispositivoItem(Correction):
    type: Literal["modify"] = "modify"
    item: Optional[str] = None
    suggestion: Optional[str] = None


class RemoveDispositivoItem(Correction):
    type: Literal["remove"] = "remove"
    item: Optional[str] = None


# ---------------------------------------------------------------------------
# sentenceReview / proofAnalysis / quickPrompt
# ---------------------------------------------------------------------------
class FalsePositive(Correction):
    type: Literal["false_positive"] = "false_positive"
    item: Optional[str] = None


class MissedIssue(Correction):
    type: Literal["missed"] = "missed"
    item: Optional[str] = None


class ImproveSuggestion(Correction):
    type: Literal["improve"] = "improve"
    item: Optional[str] = None
    suggestion: Optional[str] = None


# ---------------------------------------------------------------------------
# factsComparison
# ---------------------------------------------------------------------------
class AddFactsRow(Correction):
    type: Literal["add_row"] = "add_row"
    row: Optional[dict[str, Any]] = None


class FixFactsRow(Correction):
    type: Literal["fix_row"] = "fix_row"
    tema: Optional[str] = None
    field: Optional[str] = None
    new_value: Optional[Any] = Field(default=None, alias="newValue")


class RemoveFactsRow(Correction):
    type: Literal["remove_row"] = "remove_row"
    tema: Optional[str] = None


class AddFato(Correction):
    type: Literal["add_fato"] = "add_fato"
    fact_list: Optional[str] = Field(default=None, alias="list")
    fato: Optional[str] = None


_REVIEW_VARIANTS = MappingProxyType({
    ReviewCorrectionType.FALSE_POSITIVE: FalsePositive,
    ReviewCorrectionType.MISSED: MissedIssue,
    ReviewCorrectionType.IMPROVE: ImproveSuggestion,
})

# Keyed by str-valued enums, so plain type strings look up the same entries
CORRECTION_VARIANTS: Mapping[OperationKind, Mapping[str, type[Correction]]] = MappingProxyType({
    OperationKind.TOPIC_EXTRACTION: MappingProxyType({
        TopicCorrectionType.REMOVE: RemoveTopic,
        TopicCorrectionType.ADD: AddTopic,
        TopicCorrectionType.MERGE: MergeTopics,
        TopicCorrectionType.RECLASSIFY: ReclassifyTopic,
    }),
    OperationKind.DISPOSITIVO: MappingProxyType({
        DispositivoCorrectionType.ADD: AddDispositivoItem,
        DispositivoCorrectionType.MODIFY: ModifyDispositivoItem,
        DispositivoCorrectionType.REMOVE: RemoveDispositivoItem,
    }),
    OperationKind.SENTENCE_REVIEW: _REVIEW_VARIANTS,
    OperationKind.PROOF_ANALYSIS: _REVIEW_VARIANTS,
    OperationKind.QUICK_PROMPT: _REVIEW_VARIANTS,
    OperationKind.FACTS_COMPARISON: MappingProxyType({
        FactsCorrectionType.ADD_ROW: AddFactsRow,
        FactsCorrectionType.FIX_ROW: FixFactsRow,
        FactsCorrectionType.REMOVE_ROW: RemoveFactsRow,
        FactsCorrectionType.ADD_FATO: AddFato,
    }),
})


def correction_model_for(kind: "OperationKind | str", correction_type: str) -> type[Correction]:
    """Return the model class for a (kind, type) pair, GenericCorrection if undefined."""
    try:
        variants = CORRECTION_VARIANTS[OperationKind(kind)]
    except ValueError:
        return GenericCorrection
    return variants.get(correction_type, GenericCorrection)


def parse_correction(kind: "OperationKind | str", data: "Correction | Mapping[str, Any]") -> Correction:
    """
    Build a typed correction for an operation kind.

    Args:
        kind: Operation the correction was produced for
        data: Raw correction mapping, or an already built Correction

    Returns:
        The Correction variant matching (kind, type), or a GenericCorrection
        holding the raw fields when they do not fit that variant

    Raises:
        CorrectionParseError: If the payload is not an object or has no type
    """
    if isinstance(data, Correction):
        if type(data) is correction_model_for(kind, data.type):
            return data
        # Built for another kind (or as a bare Correction): re-read its wire form
        data = data.to_dict()
    if not isinstance(data, Mapping):
        raise CorrectionParseError(
            f"Correction must be an object, got {type(data).__name__}"
        )

    correction_type = data.get("type")
    if not isinstance(correction_type, str) or not correction_type:
        raise CorrectionParseError("Correction is missing its 'type'")

    model = correction_model_for(kind, correction_type)
    try:
        return model.model_validate(dict(data))
    except ValidationError:
        # Wrong-shaped fields from the model: keep the item, but untyped
        return GenericCorrection.model_validate(dict(data))


def parse_corrections(
    kind: "OperationKind | str",
    items: Iterable["Correction | Mapping[str, Any]"],
) -> list[Correction]:
    """Build typed corrections for every item, preserving order."""
    return [parse_correction(kind, item) for item in items]
