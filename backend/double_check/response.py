"""
Parsing of the double-check LLM response envelope.

The verification pass answers with a JSON object such as:

    {
        "corrections": [{"type": "remove", "topic": "...", "reason": "..."}],
        "verifiedTopics": [...],
        "confidence": 0.95,
        "summary": "..."
    }

Only the fields the review step needs are located here; the verified
artifact itself is passed through untouched.
"""

import json
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, Field

from backend.logging_config import get_logger
from backend.models.correction import Correction, FixFactsRow, parse_correction
from backend.models.enums import OperationKind, STRUCTURED_KINDS, coerce_operation_kind, kind_value
from .appliers import serialize_artifact

logger = get_logger(__name__)

DEFAULT_CONFIDENCE = 0.85

# Key holding the verified artifact, by operation kind
VERIFIED_KEYS = MappingProxyType({
    OperationKind.TOPIC_EXTRACTION: "verifiedTopics",
    OperationKind.DISPOSITIVO: "verifiedDispositivo",
    OperationKind.SENTENCE_REVIEW: "verifiedReview",
    OperationKind.FACTS_COMPARISON: "verifiedResult",
    OperationKind.PROOF_ANALYSIS: "verifiedResult",
    OperationKind.QUICK_PROMPT: "verifiedResult",
})
GENERIC_VERIFIED_KEY = "verifiedResult"

# Placeholder row identity for a facts correction that arrived as bare text
UNKNOWN_TEMA = "Unknown"


class DoubleCheckResponse(BaseModel):
    """Fields of a double-check answer needed to run a review."""
    operation: str
    corrections: list[Correction] = Field(default_factory=list)
    verified: Optional[str] = None
    confidence: float = Field(default=DEFAULT_CONFIDENCE, ge=0.0, le=1.0)
    summary: str = ""

    @property
    def has_corrections(self) -> bool:
        return len(self.corrections) > 0


def _strip_code_fence(content: str) -> str:
    """Remove a markdown code fence wrapped around a JSON answer."""
    content = content.strip()
    if content.startswith("```"):
        lines = [line for line in content.split("\n") if not line.strip().startswith("```")]
        content = "\n".join(lines).strip()
    return content


def _coerce_confidence(value: Any) -> float:
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    return min(max(confidence, 0.0), 1.0)


def _verified_text(kind: "OperationKind | str", payload: Mapping[str, Any]) -> Optional[str]:
    key = VERIFIED_KEYS.get(kind, GENERIC_VERIFIED_KEY)
    value = payload.get(key)
    if value is None and key != GENERIC_VERIFIED_KEY:
        value = payload.get(GENERIC_VERIFIED_KEY)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if kind in STRUCTURED_KINDS:
        return serialize_artifact(value)
    return str(value)


def _coerce_text_correction(kind: "OperationKind | str", text: str) -> Optional[Correction]:
    """Turn a correction that arrived as bare text into a typed one, when the kind allows."""
    if kind == OperationKind.FACTS_COMPARISON:
        return FixFactsRow(
            reason=text,
            tema=UNKNOWN_TEMA,
            field="observacoes",
            newValue=text,
        )
    logger.warning(f"Dropping text correction for '{kind_value(kind)}': {text[:80]}")
    return None


def parse_double_check_response(
    kind: "OperationKind | str",
    payload: "str | Mapping[str, Any]",
    original: Optional[str] = None,
) -> DoubleCheckResponse:
    """
    Locate corrections and the verified artifact in a double-check answer.

    Args:
        kind: Operation that was double-checked
        payload: Raw LLM answer (JSON text, optionally fenced) or decoded object
        original: Original artifact, used as the verified one when the answer has none

    Returns:
        DoubleCheckResponse with typed corrections

    Raises:
        json.JSONDecodeError: If payload is text that is not JSON
        CorrectionParseError: If a correction is neither text nor an object, or has no type
        ValueError: If the decoded payload is not a JSON object
    """
    kind = coerce_operation_kind(kind)
    if isinstance(payload, str):
        payload = json.loads(_strip_code_fence(payload))
    if not isinstance(payload, Mapping):
        raise ValueError(
            f"Double-check response must be a JSON object, got {type(payload).__name__}"
        )

    corrections: list[Correction] = []
    for raw in payload.get("corrections") or []:
        if isinstance(raw, str):
            correction = _coerce_text_correction(kind, raw)
            if correction is not None:
                corrections.append(correction)
            continue
        corrections.append(parse_correction(kind, raw))

    verified = _verified_text(kind, payload)
    if verified is None:
        verified = original

    return DoubleCheckResponse(
        operation=kind_value(kind),
        corrections=corrections,
        verified=verified,
        confidence=_coerce_confidence(payload.get("confidence", DEFAULT_CONFIDENCE)),
        summary=payload.get("summary") or "",
    )


def unwrap_verified(verified: str) -> str:
    """
    Drop a leftover {"verifiedResult": ...} envelope around a verified artifact.

    Returns the input unchanged when it is not such an envelope.
    """
    try:
        decoded = json.loads(verified)
    except json.JSONDecodeError:
        return verified
    if isinstance(decoded, dict) and GENERIC_VERIFIED_KEY in decoded:
        inner = decoded[GENERIC_VERIFIED_KEY]
        return inner if isinstance(inner, str) else serialize_artifact(inner)
    return verified
