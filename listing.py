"""
Listing artifact generator — AnalysisRecord → title, SKU, description and
search keywords.

Everything here is a pure function of the record (plus the clock for the SKU
suffix); the record is read, never modified.
"""
from __future__ import annotations

import re
import time
from typing import Callable, Optional

from conditions import grade_condition
from models import AnalysisRecord, ListingArtifact

TITLE_MAX = 80
TITLE_FALLBACK = "Fashion Item"

# Sentinel values providers use instead of leaving a field empty
UNKNOWN_BRAND    = {"unknown", "unknown brand"}
SIZE_NOT_VISIBLE = {"not visible"}
NOT_SPECIFIED    = {"not specified", "not visible", "unknown", "unknown brand"}

SHIPPING_TEXT = (
    "SHIPPING:\n"
    "Dispatched within 1 working day of cleared payment.\n"
    "Carefully packed and sent with a tracked service."
)
RETURNS_TEXT = (
    "RETURNS:\n"
    "30-day returns accepted.\n"
    "Please return the item unworn and in the condition it was sent."
)

_NON_ALNUM = re.compile(r"[^A-Z0-9]")

# Search terms buyers use for each condition grade
CONDITION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "NEW":              ("BNWT", "Tags", "Unworn", "Brand New"),
    "NEW_WITHOUT_TAGS": ("Unworn", "Brand New", "No Tags"),
    "EXCELLENT":        ("Mint", "Pristine", "Like New", "Barely Worn"),
    "VERY_GOOD":        ("Great Condition", "Well Maintained", "Light Wear"),
    "GOOD":             ("Good Used", "Some Wear", "Pre-loved"),
    "FAIR":             ("Vintage", "Distressed", "Well Worn", "Signs of Wear"),
    "POOR":             ("Spares or Repair", "Project"),
}

KEYWORD_MIN_LENGTH = 3


def _is(value: Optional[str], sentinels: set[str]) -> bool:
    return (value or "").strip().lower() in sentinels


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip()) and not _is(value, NOT_SPECIFIED)


# ── Title ─────────────────────────────────────────────────────────────────────

def build_title(record: AnalysisRecord) -> str:
    brand = record.brand.name
    size = record.size
    parts = [
        "" if _is(brand, UNKNOWN_BRAND) else brand,
        record.department,
        record.item_type,
        record.style,
        record.color,
        f"Size {size.strip()}" if size and size.strip() and not _is(size, SIZE_NOT_VISIBLE) else "",
        "" if _is(record.material, {"not specified"}) else record.material,
        record.pattern,
    ]
    title = " ".join(p.strip() for p in parts if p and p.strip())
    if len(title) > TITLE_MAX:
        title = title[:TITLE_MAX - 3] + "..."
    return title or TITLE_FALLBACK


# ── Keywords ──────────────────────────────────────────────────────────────────

def _plural(word: str) -> str:
    lower = word.lower()
    if lower.endswith(("ss", "sh", "ch", "x")):
        return word + "es"
    return word if lower.endswith("s") else word + "s"


def build_keywords(record: AnalysisRecord) -> list[str]:
    """
    Search terms for the listing, most specific first: brand, item type and
    its plural, condition terms for the grade, colour, size and gender.

    Sentinel values are skipped, duplicates are dropped case-sensitively in
    first-seen order, and anything shorter than three characters is dropped.
    """
    brand = record.brand.name.strip()
    item_type = record.item_type.strip()
    color = record.color.strip()
    size = record.size.strip()
    gender = record.gender.strip()
    grade = record.condition_grade or grade_condition(record.condition.score)

    candidates: list[str] = []
    if brand and not _is(brand, UNKNOWN_BRAND):
        candidates += [brand, brand.lower()]
    if item_type:
        candidates += [item_type, _plural(item_type)]
    candidates += [k.lower() for k in CONDITION_KEYWORDS.get(grade.key, ())]
    if _present(color):
        candidates += [color, color.lower()]
    if size and not _is(size, SIZE_NOT_VISIBLE):
        candidates += [f"size {size}", size]
    if gender:
        candidates += [gender, _plural(gender)]

    keywords: list[str] = []
    for keyword in candidates:
        if len(keyword) >= KEYWORD_MIN_LENGTH and keyword not in keywords:
            keywords.append(keyword)
    return keywords


# ── SKU ───────────────────────────────────────────────────────────────────────

def _code(value: Optional[str], default: str) -> str:
    return _NON_ALNUM.sub("", (value or "").upper())[:3] or default


def build_sku(record: AnalysisRecord, clock: Callable[[], float] = time.time) -> str:
    """
    BRAND-TYPE-SIZE-NNNNNN, e.g. "ZAR-DRE-M-482913".

    The suffix is the last six digits of the millisecond clock: unlikely to
    collide at human listing rates, not a unique id.
    """
    brand = "" if _is(record.brand.name, UNKNOWN_BRAND) else record.brand.name
    size = "" if _is(record.size, SIZE_NOT_VISIBLE) else record.size
    suffix = round(clock() * 1000) % 1_000_000
    return "-".join([
        _code(brand, "UNK"),
        _code(record.item_type, "ITM"),
        _code(size, "NS"),
        f"{suffix:06d}",
    ])


# ── Description ───────────────────────────────────────────────────────────────

def _bullets(values: list[str]) -> list[str]:
    return [f"• {v}" for v in values if v and v.strip()]


def _condition_section(record: AnalysisRecord) -> list[str]:
    grade = record.condition_grade or grade_condition(record.condition.score)
    lines = ["CONDITION:", f"{grade.label}."]
    if record.condition.description:
        lines.append(record.condition.description)
    if record.condition.defects:
        lines.append(f"Please note: {', '.join(record.condition.defects)}.")
    return lines


def _details_section(record: AnalysisRecord) -> list[str]:
    rows = [
        ("Brand",                  record.brand.name),
        ("Size",                   record.size),
        ("Size Type",              record.size_type),
        ("Colour",                 record.color),
        ("Material",               record.material),
        ("Department",             record.department),
        ("Style",                  record.style),
        ("Pattern",                record.pattern),
        ("Sleeve Length",          record.sleeve_length),
        ("Occasion",               record.occasion),
        ("Season",                 record.season),
        ("Theme",                  record.theme),
        ("Country of Manufacture", record.country_of_manufacture),
        ("Care",                   record.garment_care),
    ]
    bullets = [f"• {label}: {value.strip()}" for label, value in rows if _present(value)]
    return ["DETAILS:", *bullets] if bullets else []


def _list_section(header: str, values: list[str]) -> list[str]:
    bullets = _bullets(values)
    return [f"{header}:", *bullets] if bullets else []


def _measurements_section(record: AnalysisRecord) -> list[str]:
    rows = [f"• {key.title()}: {value}" for key, value in record.measurements.items()]
    return ["MEASUREMENTS:", *rows] if rows else []


def build_description(record: AnalysisRecord) -> str:
    sections = [
        [build_title(record)],
        _condition_section(record),
        _details_section(record),
        _list_section("FEATURES", record.features),
        _measurements_section(record),
        _list_section("KEY FEATURES", record.key_features),
        [SHIPPING_TEXT],
        [RETURNS_TEXT],
    ]
    return "\n\n".join("\n".join(lines) for lines in sections if lines)


def generate(record: AnalysisRecord, clock: Callable[[], float] = time.time) -> ListingArtifact:
    return ListingArtifact(
        title=build_title(record),
        sku=build_sku(record, clock),
        description=build_description(record),
        keywords=tuple(build_keywords(record)),
    )
