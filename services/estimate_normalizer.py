"""
Normalization of raw model completions into MacroEstimate objects.

Models often wrap JSON in a markdown code fence even when told not to, so the
fence is removed before parsing. Only two opening forms are recognised:
a bare triple backtick and one tagged ``json``.
"""

import json
import math
from typing import Any

from app.exceptions import MalformedEstimateError
from domain.enums import MacroField
from domain.schemas.meal_schemas import MacroEstimate

FENCE = "```"
JSON_FENCE = "```json"


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ``` or ```json fence, if present."""
    cleaned = text.strip()
    for opener in (JSON_FENCE, FENCE):
        if cleaned.startswith(opener):
            cleaned = cleaned[len(opener):]
            if cleaned.endswith(FENCE):
                cleaned = cleaned[: -len(FENCE)]
            return cleaned.strip()
    return cleaned


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a quantity
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def normalize_estimate(raw: str) -> MacroEstimate:
    """
    Parse a completion into the five macro fields.

    Extra keys are ignored. Values are taken as-is (no clamping or rounding).

    Raises:
        MalformedEstimateError: text is not JSON, not an object, or a field is
            missing or non-numeric
    """
    text = strip_code_fence(raw)
    try:
        parsed = json.loads(text)
    except ValueError as e:
        raise MalformedEstimateError(
            f"AI returned invalid JSON: {e}", details={"completion": raw}
        ) from e

    if not isinstance(parsed, dict):
        raise MalformedEstimateError(
            "AI response is not a JSON object", details={"completion": raw}
        )

    missing = [f.value for f in MacroField if f.value not in parsed]
    if missing:
        raise MalformedEstimateError(
            f"AI response is missing fields: {', '.join(missing)}",
            details={"completion": raw},
        )

    invalid = [f.value for f in MacroField if not _is_number(parsed[f.value])]
    if invalid:
        raise MalformedEstimateError(
            f"AI response has non-numeric fields: {', '.join(invalid)}",
            details={"completion": raw},
        )

    return MacroEstimate(**{f.value: float(parsed[f.value]) for f in MacroField})
