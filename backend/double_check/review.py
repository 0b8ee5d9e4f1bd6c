"""
Reviewer decision over one double-check event.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from backend.logging_config import get_logger
from backend.models.correction import Correction, parse_corrections
from backend.models.enums import OperationKind, coerce_operation_kind, kind_value
from .reconciliation import reconcile
from .response import DoubleCheckResponse
from .selection import SelectableCorrection, get_selected, to_selectable

logger = get_logger(__name__)


class ReviewOutcome(BaseModel):
    """What the reviewer decided and the artifact to write back."""
    operation: str
    selected: list[Correction] = Field(default_factory=list)
    final_result: str

    @property
    def applied_count(self) -> int:
        return len(self.selected)


class CorrectionReview:
    """
    In-memory review of the corrections proposed for one artifact.

    Holds the reviewer's accept/reject state until apply() or discard()
    produces a ReviewOutcome. Nothing is persisted.
    """

    def __init__(
        self,
        kind: "OperationKind | str",
        original: str,
        verified: str,
        corrections: Iterable["Correction | Mapping[str, Any]"],
        initial_selected: bool = True,
    ):
        self.kind = coerce_operation_kind(kind)
        self.original = original
        self.verified = verified
        self.corrections = parse_corrections(self.kind, corrections)
        self.items = to_selectable(self.kind, self.corrections, initial_selected)
        self._by_id = {item.id: item for item in self.items}

    @classmethod
    def from_response(
        cls,
        response: DoubleCheckResponse,
        original: str,
        initial_selected: bool = True,
    ) -> "CorrectionReview":
        """Start a review from a parsed double-check answer."""
        verified = response.verified if response.verified is not None else original
        return cls(
            response.operation,
            original,
            verified,
            response.corrections,
            initial_selected=initial_selected,
        )

    def get(self, correction_id: str) -> SelectableCorrection:
        """Item by id. Raises KeyError for an id not in this review."""
        try:
            return self._by_id[correction_id]
        except KeyError:
            raise KeyError(f"Correction {correction_id} not found in review") from None

    def toggle(self, correction_id: str) -> bool:
        return self.get(correction_id).toggle()

    def set_selected(self, correction_id: str, selected: bool) -> None:
        self.get(correction_id).selected = selected

    def select_all(self) -> None:
        for item in self.items:
            item.selected = True

    def deselect_all(self) -> None:
        for item in self.items:
            item.selected = False

    @property
    def selected_count(self) -> int:
        return sum(1 for item in self.items if item.selected)

    def apply(self) -> ReviewOutcome:
        """Reconcile the current selection into the final artifact."""
        selected = get_selected(self.items)
        final_result = reconcile(
            self.kind, self.original, self.verified, selected, self.corrections
        )
        logger.info(
            f"Double-check review for '{kind_value(self.kind)}': "
            f"{len(selected)}/{len(self.corrections)} corrections accepted"
        )
        return ReviewOutcome(
            operation=kind_value(self.kind),
            selected=selected,
            final_result=final_result,
        )

    def discard(self) -> ReviewOutcome:
        """Reject every correction and keep the original artifact."""
        logger.info(f"Double-check review for '{kind_value(self.kind)}': corrections discarded")
        return ReviewOutcome(
            operation=kind_value(self.kind),
            selected=[],
            final_result=self.original,
        )

    def to_dicts(self) -> list[dict]:
        """Flat items for a review UI."""
        return [item.to_dict() for item in self.items]

