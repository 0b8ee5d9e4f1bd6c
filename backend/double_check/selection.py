"""
Selectable corrections for the double-check review step.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from backend.models.correction import Correction, parse_correction, parse_corrections
from backend.models.enums import OperationKind, coerce_operation_kind, kind_value
from .descriptions import get_correction_description

# Keys added on top of a correction when it is offered for selection
SELECTION_KEYS = ("id", "selected", "description")


class SelectableCorrection(BaseModel):
    """A correction offered to the reviewer, with its acceptance state."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(frozen=True)
    correction: Correction = Field(frozen=True)
    description: str = Field(frozen=True)
    selected: bool = True

    @property
    def type(self) -> str:
        return self.correction.type

    def toggle(self) -> bool:
        """Flip the acceptance state and return the new value."""
        self.selected = not self.selected
        return self.selected

    def to_dict(self) -> dict:
        """Flat form for a review UI: correction fields plus id/selected/description."""
        return {
            **self.correction.to_dict(),
            "id": self.id,
            "selected": self.selected,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, kind: "OperationKind | str", data: Mapping[str, Any]) -> "SelectableCorrection":
        """Read back an item produced by to_dict()."""
        raw = {k: v for k, v in data.items() if k not in SELECTION_KEYS}
        correction = parse_correction(kind, raw)
        return cls(
            id=data["id"],
            correction=correction,
            description=data.get("description") or get_correction_description(kind, correction),
            selected=bool(data.get("selected", True)),
        )


def make_correction_id(kind: "OperationKind | str", index: int, correction_type: str) -> str:
    """Identifier of a correction within one review: <kind>-<index>-<type>."""
    return f"{kind_value(kind)}-{index}-{correction_type}"


def to_selectable(
    kind: "OperationKind | str",
    corrections: Iterable["Correction | Mapping[str, Any]"],
    initial_selected: bool = True,
) -> list[SelectableCorrection]:
    """
    Wrap corrections for review.

    Args:
        kind: Operation the corrections were produced for
        corrections: Typed corrections or raw mappings, in upstream order
        initial_selected: Acceptance state given to every item

    Returns:
        One SelectableCorrection per correction, ids assigned in input order
    """
    kind = coerce_operation_kind(kind)
    return [
        SelectableCorrection(
            id=make_correction_id(kind, index, correction.type),
            correction=correction,
            description=get_correction_description(kind, correction),
            selected=initial_selected,
        )
        for index, correction in enumerate(parse_corrections(kind, corrections))
    ]


def get_selected(items: Iterable[SelectableCorrection]) -> list[Correction]:
    """Accepted corrections, without selection metadata, in their relative order."""
    return [item.correction for item in items if item.selected]
