# Backend models package

from .enums import (
    OperationKind,
    TopicCorrectionType,
    DispositivoCorrectionType,
    ReviewCorrectionType,
    FactsCorrectionType,
    TEXT_FREE_KINDS,
    STRUCTURED_KINDS,
    coerce_operation_kind,
    kind_value,
)
from .correction import (
    Correction,
    GenericCorrection,
    TopicRef,
    RemoveTopic,
    AddTopic,
    MergeTopics,
    ReclassifyTopic,
    AddDispositivoItem,
    ModifyDispositivoItem,
    RemoveDispositivoItem,
    FalsePositive,
    MissedIssue,
    ImproveSuggestion,
    AddFactsRow,
    FixFactsRow,
    RemoveFactsRow,
    AddFato,
    CORRECTION_VARIANTS,
    correction_model_for,
    parse_correction,
    parse_corrections,
)

__all__ = [
    # Enums
    "OperationKind",
    "TopicCorrectionType",
    "DispositivoCorrectionType",
    "ReviewCorrectionType",
    "FactsCorrectionType",
    "TEXT_FREE_KINDS",
    "STRUCTURED_KINDS",
    "coerce_operation_kind",
    "kind_value",
    # Corrections
    "Correction",
    "GenericCorrection",
    "TopicRef",
    "RemoveTopic",
    "AddTopic",
    "MergeTopics",
    "ReclassifyTopic",
    "AddDispositivoItem",
    "ModifyDispositivoItem",
    "RemoveDispositivoItem",
    "FalsePositive",
    "MissedIssue",
    "ImproveSuggestion",
    "AddFactsRow",
    "FixFactsRow",
    "RemoveFactsRow",
    "AddFato",
    "CORRECTION_VARIANTS",
    "correction_model_for",
    "parse_correction",
    "parse_corrections",
]
