"""
Response normalizer — provider text in, AnalysisRecord out.

Providers are asked for one JSON object but nothing guarantees they comply, so
this is the single place where "what the provider might omit" is turned into
"what every downstream component can assume is present". Everything below the
normalizer reads AnalysisRecord attributes directly, without fallbacks.
"""
from __future__ import annotations

import copy
import json
import logging
import re
from typing import Any

from errors import ResponseParseError
from models import (
    MEASUREMENT_KEYS,
    AnalysisRecord,
    BrandInfo,
    ConditionInfo,
    Measurements,
    PriceEstimate,
)

logger = logging.getLogger(__name__)

# Passed through as-is; absent or null values become "" (never invented).
REQUIRED_FIELDS = ("itemType", "brand", "size", "color", "material", "condition")

# Default-substitution table. Applied when a field is absent or falsy.
# "department" is special-cased: it inherits gender (which is defaulted first).
DEFAULTS: dict[str, Any] = {
    "gender":               "",
    "sizeType":             "",
    "style":                "",
    "pattern":              "",
    "sleeveLength":         "",
    "occasion":             "",
    "season":               "All Seasons",
    "theme":                "",
    "features":             [],
    "garmentCare":          "",
    "countryOfManufacture": "",
    "measurements":         {},
    "keyFeatures":          [],
}

_OPEN_FENCE  = re.compile(r"^```[\w-]*[ \t]*\n?")
_CLOSE_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(raw: str) -> str:
    """Remove a leading ```/```json fence and a trailing ``` fence, if present."""
    text = (raw or "").strip()
    if text.startswith("```"):
        text = _OPEN_FENCE.sub("", text, count=1)
        text = _CLOSE_FENCE.sub("", text, count=1)
    return text.strip()


def parse_json_object(raw: str) -> dict[str, Any]:
    """Fence-strip and parse; the result must be a single JSON object."""
    text = strip_code_fences(raw)
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        logger.warning("Non-JSON provider response: %s", (raw or "")[:300])
        raise ResponseParseError(f"JSON parse error: {exc}") from exc
    if not isinstance(data, dict):
        raise ResponseParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def apply_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of data with every optional field filled from DEFAULTS."""
    filled = dict(data)
    for key, default in DEFAULTS.items():
        if not filled.get(key):
            filled[key] = copy.deepcopy(default)
    if not filled.get("department"):
        filled["department"] = filled["gender"]
    return filled


def normalize(raw_text: str) -> AnalysisRecord:
    data = parse_json_object(raw_text)

    missing = [k for k in REQUIRED_FIELDS if data.get(k) is None]
    if missing:
        logger.warning("Provider response has no value for: %s", ", ".join(missing))

    data = apply_defaults(data)

    return AnalysisRecord(
        item_type              = _text(data.get("itemType")),
        brand                  = _brand(data.get("brand")),
        size                   = _text(data.get("size")),
        color                  = _text(data.get("color")),
        material               = _text(data.get("material")),
        condition              = _condition(data.get("condition")),
        gender                 = _text(data["gender"]),
        department             = _text(data["department"]),
        size_type              = _text(data["sizeType"]),
        style                  = _text(data["style"]),
        pattern                = _text(data["pattern"]),
        sleeve_length          = _text(data["sleeveLength"]),
        occasion               = _text(data["occasion"]),
        season                 = _text(data["season"]),
        theme                  = _text(data["theme"]),
        features               = _text_list(data["features"]),
        garment_care           = _text(data["garmentCare"]),
        country_of_manufacture = _text(data["countryOfManufacture"]),
        measurements           = _measurements(data["measurements"]),
        key_features           = _text_list(data["keyFeatures"]),
        estimated_price        = _estimate(data.get("estimatedPrice")),
    )


# ── Field coercion ────────────────────────────────────────────────────────────

def _text(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value)


def _text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [_text(v) for v in value if _text(v)]
    return []


def _float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _brand(value: Any) -> BrandInfo:
    if isinstance(value, dict):
        return BrandInfo(
            name=_text(value.get("name")),
            confidence=_float(value.get("confidence")),
            reasoning=_text(value.get("reasoning")),
        )
    return BrandInfo(name=_text(value))


def _condition(value: Any) -> ConditionInfo:
    if isinstance(value, dict):
        return ConditionInfo(
            score=value.get("score"),
            description=_text(value.get("description")),
            defects=_text_list(value.get("defects")),
        )
    if isinstance(value, (int, float)):
        return ConditionInfo(score=value)
    return ConditionInfo(score=None, description=_text(value))


def _measurements(value: Any) -> Measurements:
    if not isinstance(value, dict):
        return Measurements()
    return Measurements(**{k: _text(value.get(k)) for k in MEASUREMENT_KEYS})


def _estimate(value: Any) -> PriceEstimate | None:
    if not isinstance(value, dict):
        return None
    return PriceEstimate(
        min=value.get("min"),
        max=value.get("max"),
        reasoning=_text(value.get("reasoning")),
    )
