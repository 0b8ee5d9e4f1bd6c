"""
Reconciliation of a double-checked artifact with the reviewer's choices.

Given the original artifact, the fully verified artifact and the subset
of corrections the reviewer accepted, compute the artifact that is written
back into the decision:

    nothing accepted   -> original
    everything accepted -> verified
    partial selection  -> structural applier over the original, or the
                          verified artifact for kinds without an applier
"""

from collections.abc import Mapping, Sequence
from typing import Any

from backend.logging_config import get_logger
from backend.models.correction import Correction
from backend.models.enums import OperationKind, coerce_operation_kind, kind_value
from .appliers import get_applier

logger = get_logger(__name__)


def reconcile(
    kind: "OperationKind | str",
    original: str,
    verified: str,
    selected: Sequence["Correction | Mapping[str, Any]"],
    all_corrections: Sequence["Correction | Mapping[str, Any]"],
) -> str:
    """
    Compute the final artifact for a double-check review.

    Args:
        kind: Operation the artifact was produced by
        original: Artifact as first produced (JSON text for structured kinds)
        verified: Artifact as rewritten by the double-check pass
        selected: Corrections the reviewer accepted, in selection order
        all_corrections: Every correction proposed in this review

    Returns:
        Final artifact text, in the same serialization as original/verified

    Raises:
        json.JSONDecodeError: If a partial selection targets malformed JSON
        ArtifactShapeError: If the structured artifact has an unexpected shape
    """
    if len(selected) == 0:
        return original

    if len(selected) == len(all_corrections):
        return verified

    kind = coerce_operation_kind(kind)
    applier = get_applier(kind)
    if applier is None:
        logger.warning(
            f"Partial application ({len(selected)}/{len(all_corrections)}) is not "
            f"supported for '{kind_value(kind)}' - using verified result"
        )
        return verified

    return applier(original, selected)
