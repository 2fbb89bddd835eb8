"""
models.py — the canonical home of every record the pipeline passes around.

  ImagePayload / ImageSet   what the caller submits (one physical item)
  AnalysisRecord            normalized provider output, enriched in place
  PriceBand                 pricing table cell
  ListingArtifact           title / SKU / description derived from a record
  AnalysisFailure           terminal failure returned by the provider manager

Python attributes are snake_case; to_dict() emits the camelCase names used in
the provider JSON schema and in the pipeline's output envelope.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator, Optional

if TYPE_CHECKING:
    from conditions import ConditionGrade


def detect_mime(data: bytes) -> str:
    """Sniff the image type from magic bytes (default jpeg)."""
    if data[:8] == b"\x89PNG\r\n\x1a\n":
        return "image/png"
    if data[:4] == b"GIF8":
        return "image/gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


# ── Input ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mime_type: str = "image/jpeg"

    @classmethod
    def from_bytes(cls, data: bytes) -> "ImagePayload":
        return cls(data=data, mime_type=detect_mime(data))

    @classmethod
    def from_path(cls, path: str | Path) -> "ImagePayload":
        return cls.from_bytes(Path(path).read_bytes())

    @property
    def b64(self) -> str:
        return base64.b64encode(self.data).decode()

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.b64}"


@dataclass(frozen=True)
class ImageSet:
    """Ordered, non-empty photos of one physical item. Immutable once built."""
    images: tuple[ImagePayload, ...]

    def __post_init__(self) -> None:
        # accept any sequence but always store a tuple
        object.__setattr__(self, "images", tuple(self.images))
        if not self.images:
            raise ValueError("ImageSet needs at least one image")

    @classmethod
    def from_bytes(cls, *blobs: bytes) -> "ImageSet":
        return cls(tuple(ImagePayload.from_bytes(b) for b in blobs))

    @classmethod
    def from_paths(cls, paths: list[str | Path]) -> "ImageSet":
        return cls(tuple(ImagePayload.from_path(p) for p in paths))

    def __len__(self) -> int:
        return len(self.images)

    def __iter__(self) -> Iterator[ImagePayload]:
        return iter(self.images)


# ── Analysis record ───────────────────────────────────────────────────────────

@dataclass
class BrandInfo:
    name: str
    confidence: float = 0.0     # provider's own confidence
    reasoning: str = ""

    # filled by pipeline.enrich()
    tier: str = "unknown"
    match_confidence: float = 0.0
    price_multiplier: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name":            self.name,
            "confidence":      self.confidence,
            "reasoning":       self.reasoning,
            "tier":            self.tier,
            "matchConfidence": self.match_confidence,
            "priceMultiplier": self.price_multiplier,
        }


@dataclass
class ConditionInfo:
    score: Any                  # 1–10 when the provider behaves
    description: str = ""
    defects: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "description": self.description, "defects": list(self.defects)}


MEASUREMENT_KEYS = ("chest", "length", "waist", "inseam")


@dataclass
class Measurements:
    chest: str = ""
    length: str = ""
    waist: str = ""
    inseam: str = ""

    def items(self) -> list[tuple[str, str]]:
        """Only the measurements that were actually taken, in fixed order."""
        return [(k, getattr(self, k)) for k in MEASUREMENT_KEYS if getattr(self, k)]

    def to_dict(self) -> dict[str, str]:
        return dict(self.items())


@dataclass
class PriceEstimate:
    min: Any
    max: Any
    reasoning: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"min": self.min, "max": self.max, "reasoning": self.reasoning}


@dataclass(frozen=True)
class PriceBand:
    min: int
    max: int

    def to_dict(self) -> dict[str, int]:
        return {"min": self.min, "max": self.max}


@dataclass
class AnalysisRecord:
    # required, passed through from the provider untouched
    item_type: str
    brand: BrandInfo
    size: str
    color: str
    material: str
    condition: ConditionInfo

    # optional, see normalizer.DEFAULTS for what fills them
    gender: str = ""
    department: str = ""
    size_type: str = ""
    style: str = ""
    pattern: str = ""
    sleeve_length: str = ""
    occasion: str = ""
    season: str = "All Seasons"
    theme: str = ""
    features: list[str] = field(default_factory=list)
    garment_care: str = ""
    country_of_manufacture: str = ""
    measurements: Measurements = field(default_factory=Measurements)
    key_features: list[str] = field(default_factory=list)
    estimated_price: Optional[PriceEstimate] = None

    # enrichment (pipeline.enrich)
    price_band: Optional[PriceBand] = None
    suggested_price: Optional[int] = None
    condition_grade: Optional["ConditionGrade"] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "itemType":             self.item_type,
            "brand":                self.brand.to_dict(),
            "size":                 self.size,
            "color":                self.color,
            "material":             self.material,
            "condition":            self.condition.to_dict(),
            "gender":               self.gender,
            "department":           self.department,
            "sizeType":             self.size_type,
            "style":                self.style,
            "pattern":              self.pattern,
            "sleeveLength":         self.sleeve_length,
            "occasion":             self.occasion,
            "season":               self.season,
            "theme":                self.theme,
            "features":             list(self.features),
            "garmentCare":          self.garment_care,
            "countryOfManufacture": self.country_of_manufacture,
            "measurements":         self.measurements.to_dict(),
            "keyFeatures":          list(self.key_features),
            "estimatedPrice":       self.estimated_price.to_dict() if self.estimated_price else None,
            "priceBand":            self.price_band.to_dict() if self.price_band else None,
            "suggestedPrice":       self.suggested_price,
            "conditionGrade":       self.condition_grade.to_dict() if self.condition_grade else None,
        }


# ── Outputs ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ListingArtifact:
    title: str
    sku: str
    description: str
    keywords: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title":       self.title,
            "sku":         self.sku,
            "description": self.description,
            "keywords":    list(self.keywords),
        }


@dataclass(frozen=True)
class AnalysisFailure:
    error: str
    attempts: tuple[str, ...] = ()
