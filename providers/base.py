"""
Shared prompt, response type and base class for all vision providers.

A provider's only job is transport: send the prompt and the ordered images,
hand back the raw text. Parsing and validation happen once, in normalizer.py,
so every provider is held to exactly the same schema.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

from errors import ProviderInvocationError
from models import ImageSet

logger = logging.getLogger(__name__)

# ── Prompt (shared across all providers) ──────────────────────────────────────

SYSTEM_PROMPT = """You are an expert fashion reseller and garment appraiser.
Analyse the garment photos and return ONLY a valid JSON object — no markdown, no prose.

JSON schema:
{
  "itemType":             "specific garment type, e.g. \\"Midi Wrap Dress\\" not \\"Dress\\"",
  "brand": {
    "name":               "brand exactly as printed on the label, or \\"Unknown\\"",
    "confidence":         0.0-1.0,
    "reasoning":          "what identifies the brand (label, logo, hardware)"
  },
  "size":                 "size as printed on the label, or \\"Not Visible\\"",
  "color":                "primary colour",
  "material":             "main fabric from the care label, or \\"Not Specified\\"",
  "condition": {
    "score":              1-10 (10 = new with tags),
    "description":        "one sentence on overall wear",
    "defects":            ["each visible flaw: stains, pilling, holes, fading"]
  },
  "gender":               "Womens | Mens | Unisex | Girls | Boys",
  "department":           "marketplace department, usually same as gender",
  "sizeType":             "Regular | Petite | Plus | Tall | Maternity",
  "style":                "e.g. Wrap, Bomber, Skinny, A-Line",
  "pattern":              "e.g. Solid, Floral, Striped, Check",
  "sleeveLength":         "e.g. Sleeveless, Short Sleeve, Long Sleeve",
  "occasion":             "e.g. Casual, Formal, Party, Workwear",
  "season":               "e.g. Summer, Winter, All Seasons",
  "theme":                "e.g. Vintage, Boho, Preppy",
  "features":             ["construction details: pockets, zip, lining"],
  "garmentCare":          "care instructions from the label",
  "countryOfManufacture": "from the label",
  "measurements":         {"chest": "", "length": "", "waist": "", "inseam": ""},
  "keyFeatures":          ["up to 5 selling points for the listing"],
  "estimatedPrice":       {"min": 0, "max": 0, "reasoning": "UK resale price in GBP"}
}

Rules:
- Use "" for anything unknown. Never use null.
- Be specific about item type; it drives the listing category.
- Read every label visible in any photo before deciding brand, size and material.
- Judge condition from the photos: look for pilling, stains, fading, holes, loose threads.
- Only fill measurements when a tape measure or ruler is visible.
"""


def build_user_prompt(image_count: int) -> str:
    if image_count == 1:
        return "Analyse this garment photo and return the JSON."
    return (
        f"These {image_count} photos all show the same single garment "
        "(front, back, labels, details). Analyse them together and return the JSON."
    )


@dataclass(frozen=True)
class Prompt:
    """The one prompt a pipeline run sends — identical for every provider it tries."""
    system: str
    user: str

    @classmethod
    def for_images(cls, images: ImageSet) -> "Prompt":
        return cls(system=SYSTEM_PROMPT, user=build_user_prompt(len(images)))


# ── Shared result type ─────────────────────────────────────────────────────────

@dataclass
class ProviderResponse:
    """Raw answer from a single vision provider call."""
    provider_name: str          # e.g. "openai/gpt-4o"
    model_id: str
    text: str
    latency_ms: int             # wall-clock time for this call
    input_tokens: int
    output_tokens: int
    cost_usd: float             # estimated cost

    @property
    def cost_str(self) -> str:
        if self.cost_usd < 0.001:
            return f"${self.cost_usd * 1000:.3f}m"   # show in milli-dollars
        return f"${self.cost_usd:.4f}"


# ── Abstract base ──────────────────────────────────────────────────────────────

class VisionProvider(ABC):
    """Base class all vision providers must implement."""

    name: str           # e.g. "openai"
    model_id: str       # e.g. "gpt-4o"
    cost_per_1k_input_tokens: float
    cost_per_1k_output_tokens: float
    # Extra per-image cost for vision (input image processing flat fee or per-tile)
    cost_per_image: float = 0.0
    max_tokens: int = 1500

    @abstractmethod
    async def _invoke(self, prompt: Prompt, images: ImageSet) -> tuple[str, int, int]:
        """Call the vendor API once. Returns (text, input_tokens, output_tokens)."""
        ...

    async def complete(self, prompt: Prompt, images: ImageSet) -> ProviderResponse:
        """
        One call, no retries. Any vendor/network failure surfaces as
        ProviderInvocationError; cancellation passes straight through.
        """
        t0 = time.monotonic()
        try:
            text, input_tokens, output_tokens = await self._invoke(prompt, images)
        except ProviderInvocationError:
            raise
        except Exception as exc:
            raise ProviderInvocationError(self.full_name, f"{type(exc).__name__}: {exc}") from exc

        return ProviderResponse(
            provider_name=self.full_name,
            model_id=self.model_id,
            text=text or "",
            latency_ms=int((time.monotonic() - t0) * 1000),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost_usd=self.estimate_cost(input_tokens, output_tokens, len(images)),
        )

    @property
    def full_name(self) -> str:
        return f"{self.name}/{self.model_id}"

    def estimate_cost(self, input_tokens: int, output_tokens: int, image_count: int = 1) -> float:
        return (
            self.cost_per_image * image_count
            + input_tokens / 1000 * self.cost_per_1k_input_tokens
            + output_tokens / 1000 * self.cost_per_1k_output_tokens
        )
