# Double-check correction review package

from .descriptions import (
    OPERATION_LABELS,
    TOPIC_CORRECTION_ICONS,
    DISPOSITIVO_CORRECTION_ICONS,
    REVIEW_CORRECTION_ICONS,
    FACTS_CORRECTION_ICONS,
    get_correction_description,
    get_correction_icon,
    get_operation_label,
)
from .selection import SelectableCorrection, to_selectable, get_selected
from .appliers import apply_topic_corrections, apply_facts_corrections, get_applier
from .reconciliation import reconcile
from .response import DoubleCheckResponse, parse_double_check_response, unwrap_verified
from .review import CorrectionReview, ReviewOutcome
from .settings import DoubleCheckSettings, load_double_check_settings

__all__ = [
    "OPERATION_LABELS",
    "TOPIC_CORRECTION_ICONS",
    "DISPOSITIVO_CORRECTION_ICONS",
    "REVIEW_CORRECTION_ICONS",
    "FACTS_CORRECTION_ICONS",
    "get_correction_description",
    "get_correction_icon",
    "get_operation_label",
    "SelectableCorrection",
    "to_selectable",
    "get_selected",
    "apply_topic_corrections",
    "apply_facts_corrections",
    "get_applier",
    "reconcile",
    "DoubleCheckResponse",
    "parse_double_check_response",
    "unwrap_verified",
    "CorrectionReview",
    "ReviewOutcome",
    "DoubleCheckSettings",
    "load_double_check_settings",
]
