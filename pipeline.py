"""
Pipeline — one garment's photos in, one result envelope out.

    ImageSet
      → providers.manager.analyse_images()   (primary, then fallback)
      → enrich()                              (brand tier, price band, grade)
      → listing.generate()                    (title, SKU, description)
      → {"success": True, "items": [...]}   or   {"success": False, "error": ...}

The caller only ever sees a fully enriched item or an error message.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Sequence

import listing
from brand_catalog import UNKNOWN_TIER
from brand_resolver import resolve
from conditions import grade_condition
from models import AnalysisFailure, AnalysisRecord, ImageSet
from pricing import item_category, price_band, suggest_price
from providers import manager
from providers.base import VisionProvider

logger = logging.getLogger(__name__)


def enrich(record: AnalysisRecord) -> AnalysisRecord:
    """Attach catalog brand, price band, condition grade and asking price to record."""
    brand = record.brand
    match = resolve(brand.name)
    if match.matched:
        brand.name = match.brand
        brand.tier = match.tier
        brand.match_confidence = match.confidence
        brand.price_multiplier = match.entry.price_multiplier
    else:
        brand.tier = UNKNOWN_TIER
        brand.match_confidence = 0.0
        brand.price_multiplier = 1.0

    record.price_band = price_band(brand.tier, item_category(record.item_type))
    record.condition_grade = grade_condition(record.condition.score)
    record.suggested_price = suggest_price(
        record.price_band,
        condition_multiplier=record.condition_grade.price_multiplier,
        price_multiplier=brand.price_multiplier,
    )
    logger.debug(
        "Enriched %r: brand=%s tier=%s band=%s-%s grade=%s price=%s",
        record.item_type, brand.name, brand.tier,
        record.price_band.min, record.price_band.max,
        record.condition_grade.key, record.suggested_price,
    )
    return record


def failure_envelope(error: str) -> dict[str, Any]:
    return {"success": False, "error": error, "items": []}


def success_envelope(record: AnalysisRecord, image_count: int) -> dict[str, Any]:
    artifact = listing.generate(record)
    item = {
        **record.to_dict(),
        **artifact.to_dict(),
        "imageCount":  image_count,
        "processedAt": datetime.now(timezone.utc).isoformat(),
    }
    return {"success": True, "items": [item]}


async def analyse_item(
    image_set: ImageSet,
    chain: Optional[Sequence[VisionProvider]] = None,
    timeout: Optional[float] = None,
) -> dict[str, Any]:
    """Run the whole pipeline for one physical item."""
    logger.info("Analysing item (%d photo(s))", len(image_set))
    result = await manager.analyse_images(image_set, chain=chain, timeout=timeout)
    if isinstance(result, AnalysisFailure):
        return failure_envelope(result.error)

    record = enrich(result)
    envelope = success_envelope(record, len(image_set))
    item = envelope["items"][0]
    logger.info("Listing ready: %s [%s] £%s", item["title"], item["sku"], item["suggestedPrice"])
    return envelope


async def analyse_batch(
    image_sets: Iterable[ImageSet],
    chain: Optional[Sequence[VisionProvider]] = None,
    timeout: Optional[float] = None,
) -> list[dict[str, Any]]:
    """One pipeline run per item, one after another, results in input order."""
    results: list[dict[str, Any]] = []
    for image_set in image_sets:
        results.append(await analyse_item(image_set, chain=chain, timeout=timeout))
    ok = sum(1 for r in results if r["success"])
    logger.info("Batch done: %d/%d item(s) listed", ok, len(results))
    return results
