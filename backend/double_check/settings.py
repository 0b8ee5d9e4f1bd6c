"""
Double-check settings: which drafting operations get a verification pass.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from backend.models.enums import OperationKind, coerce_operation_kind


def _all_operations_off() -> dict[OperationKind, bool]:
    return {kind: False for kind in OperationKind}


class DoubleCheckSettings(BaseModel):
    """Global switch, verifying model and per-operation flags."""
    enabled: bool = False
    provider: str = "claude"
    model: str = ""
    operations: dict[OperationKind, bool] = Field(default_factory=_all_operations_off)

    @field_validator("operations", mode="before")
    @classmethod
    def _fill_missing_operations(cls, v: Any) -> Any:
        """Operations absent from the config are off."""
        if not isinstance(v, Mapping):
            return v
        filled: dict[Any, Any] = {kind.value: False for kind in OperationKind}
        for key, value in v.items():
            filled[key.value if isinstance(key, OperationKind) else key] = value
        return filled

    def is_enabled_for(self, kind: "OperationKind | str") -> bool:
        """True when double-check is on globally and for this operation."""
        kind = coerce_operation_kind(kind)
        if not self.enabled or not isinstance(kind, OperationKind):
            return False
        return self.operations.get(kind, False)

    def enabled_operations(self) -> list[OperationKind]:
        if not self.enabled:
            return []
        return [kind for kind in OperationKind if self.operations.get(kind, False)]


def load_double_check_settings(section: Optional[Mapping[str, Any]] = None) -> DoubleCheckSettings:
    """
    Build settings from the [double_check] table of drafting.toml.

    Args:
        section: Table to use instead of the loaded config file

    Raises:
        RuntimeError: If the config file has no [double_check] table
        pydantic.ValidationError: If a value has the wrong type or names an unknown operation
    """
    if section is None:
        from backend.config import get_table

        section = get_table("double_check")
    return DoubleCheckSettings.model_validate(dict(section))
