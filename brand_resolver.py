"""
Brand resolver — fuzzy-match free text against the brand catalog.

Scoring (case-insensitive):
  0.95         canonical brand name found as a substring
  0.90         any alias found as a substring
  0.7 × share  token overlap: share of the brand's own name tokens present in
               the query, only counted when share ≥ 0.5, and only tried when
               the substring passes found nothing anywhere in the catalog

The catalog is walked in its declared order and the current best is replaced
only by a strictly higher score, so ties go to the earlier tier / entry.
Pure function over immutable data: safe to call from any number of tasks.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from brand_catalog import UNKNOWN_TIER, BrandCatalogEntry, iter_entries

logger = logging.getLogger(__name__)

CANONICAL_CONFIDENCE = 0.95
ALIAS_CONFIDENCE     = 0.90
TOKEN_WEIGHT         = 0.7
TOKEN_MIN_SHARE      = 0.5


@dataclass(frozen=True)
class BrandMatch:
    brand: Optional[str]
    tier: str
    confidence: float
    entry: Optional[BrandCatalogEntry] = None

    @property
    def matched(self) -> bool:
        return self.brand is not None

    def to_dict(self) -> dict:
        return {"brand": self.brand, "tier": self.tier, "confidence": self.confidence}


NO_MATCH = BrandMatch(brand=None, tier=UNKNOWN_TIER, confidence=0.0)


def _substring_pass(query: str) -> tuple[Optional[BrandCatalogEntry], float]:
    best, best_conf = None, 0.0
    for entry in iter_entries():
        if entry.name.upper() in query:
            conf = CANONICAL_CONFIDENCE
        elif any(alias in query for alias in entry.aliases):
            conf = ALIAS_CONFIDENCE
        else:
            continue
        if conf > best_conf:
            best, best_conf = entry, conf
    return best, best_conf


def _token_pass(query: str) -> tuple[Optional[BrandCatalogEntry], float]:
    query_tokens = set(query.split())
    best, best_conf = None, 0.0
    for entry in iter_entries():
        brand_tokens = entry.name.upper().split()
        share = sum(1 for t in brand_tokens if t in query_tokens) / len(brand_tokens)
        if share < TOKEN_MIN_SHARE:
            continue
        conf = TOKEN_WEIGHT * share
        if conf > best_conf:
            best, best_conf = entry, conf
    return best, best_conf


def resolve(free_text: Optional[str]) -> BrandMatch:
    """Return the best catalog match for free_text, or NO_MATCH."""
    if not free_text or not free_text.strip():
        return NO_MATCH

    query = free_text.upper()
    entry, conf = _substring_pass(query)
    if entry is None:
        entry, conf = _token_pass(query)
    if entry is None:
        logger.debug("No catalog brand for %r", free_text)
        return NO_MATCH

    logger.debug("Resolved %r → %s (%s, %.2f)", free_text, entry.name, entry.tier, conf)
    return BrandMatch(brand=entry.name, tier=entry.tier, confidence=round(conf, 4), entry=entry)
