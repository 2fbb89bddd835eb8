"""
Condition grading — 1–10 condition score → marketplace condition level.

Each level carries the marketplace condition code used when a listing is
submitted and a price multiplier that positions the asking price inside the
price band (see pricing.suggest_price).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ConditionGrade:
    key: str
    label: str
    code: str               # marketplace condition id
    price_multiplier: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "key":             self.key,
            "label":           self.label,
            "code":            self.code,
            "priceMultiplier": self.price_multiplier,
        }


NEW              = ConditionGrade("NEW",              "New with tags",             "1000", 1.0)
NEW_WITHOUT_TAGS = ConditionGrade("NEW_WITHOUT_TAGS", "New without tags",          "1500", 0.9)
EXCELLENT        = ConditionGrade("EXCELLENT",        "Pre-owned - Excellent",     "3000", 0.75)
VERY_GOOD        = ConditionGrade("VERY_GOOD",        "Pre-owned - Very Good",     "3000", 0.6)
GOOD             = ConditionGrade("GOOD",             "Pre-owned - Good",          "3000", 0.45)
FAIR             = ConditionGrade("FAIR",             "Pre-owned - Fair",          "3000", 0.3)
POOR             = ConditionGrade("POOR",             "For parts or not working",  "7000", 0.15)

# (lowest score that still earns the grade, grade), highest first
_THRESHOLDS: tuple[tuple[float, ConditionGrade], ...] = (
    (10, NEW),
    (9,  NEW_WITHOUT_TAGS),
    (8,  EXCELLENT),
    (6,  VERY_GOOD),
    (4,  GOOD),
    (2,  FAIR),
)

_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def parse_score(score: Any) -> float | None:
    """Accept 7, 7.5, "7", "7/10"; a 0–100 percentage is rescaled. None if unusable."""
    if isinstance(score, bool):
        return None
    if isinstance(score, (int, float)):
        value = float(score)
    elif isinstance(score, str):
        match = _NUMBER.search(score)
        if not match:
            return None
        value = float(match.group())
    else:
        return None
    if 10 < value <= 100:
        value /= 10
    if value <= 0 or value > 10:
        return None
    return value


def grade_condition(score: Any) -> ConditionGrade:
    value = parse_score(score)
    if value is None:
        return VERY_GOOD
    for threshold, grade in _THRESHOLDS:
        if value >= threshold:
            return grade
    return POOR
