"""
Pricing engine — (tier, item type) → resale price band (GBP).

Lookup order:
  1. PRICE_BANDS[tier][item_type]
  2. PRICE_BANDS[tier]["default"]
  3. PRICE_BANDS["unknown"]["default"]   (fixed low-end band)

Bands are never pre-multiplied by a brand's price_multiplier; suggest_price()
is where a caller combines band, brand multiplier and condition into one figure.
"""
from __future__ import annotations

import logging
import re

from brand_catalog import UNKNOWN_TIER
from models import PriceBand

logger = logging.getLogger(__name__)

DEFAULT_KEY  = "default"

_B = PriceBand

PRICE_BANDS: dict[str, dict[str, PriceBand]] = {
    "luxury": {
        "bag":      _B(1500, 8000),
        "shoes":    _B(300, 1200),
        "trainers": _B(250, 900),
        "boots":    _B(400, 1500),
        "dress":    _B(400, 3000),
        "coat":     _B(800, 4000),
        "jacket":   _B(600, 3500),
        "jumper":   _B(250, 1200),
        "shirt":    _B(150, 700),
        "t-shirt":  _B(120, 500),
        "trousers": _B(200, 900),
        "jeans":    _B(150, 600),
        "skirt":    _B(200, 1200),
        "belt":     _B(150, 600),
        "scarf":    _B(150, 700),
        "default":  _B(200, 1500),
    },
    "designer": {
        "bag":      _B(150, 900),
        "shoes":    _B(80, 400),
        "trainers": _B(80, 350),
        "boots":    _B(100, 450),
        "dress":    _B(80, 600),
        "coat":     _B(150, 900),
        "jacket":   _B(100, 700),
        "jumper":   _B(50, 300),
        "shirt":    _B(40, 200),
        "t-shirt":  _B(30, 150),
        "trousers": _B(50, 250),
        "jeans":    _B(40, 200),
        "skirt":    _B(50, 300),
        "belt":     _B(40, 200),
        "scarf":    _B(40, 200),
        "default":  _B(40, 300),
    },
    "highStreet": {
        "bag":      _B(10, 60),
        "shoes":    _B(10, 50),
        "boots":    _B(15, 60),
        "dress":    _B(10, 45),
        "coat":     _B(20, 90),
        "jacket":   _B(15, 70),
        "jumper":   _B(8, 35),
        "shirt":    _B(6, 30),
        "t-shirt":  _B(4, 15),
        "jeans":    _B(8, 40),
        "trousers": _B(8, 35),
        "default":  _B(5, 35),
    },
    "sportswear": {
        "trainers": _B(25, 150),
        "shoes":    _B(20, 120),
        "jacket":   _B(25, 150),
        "coat":     _B(40, 200),
        "hoodie":   _B(15, 70),
        "jumper":   _B(12, 60),
        "t-shirt":  _B(8, 35),
        "shorts":   _B(8, 30),
        "trousers": _B(12, 50),
        "default":  _B(10, 60),
    },
    UNKNOWN_TIER: {
        "default":  _B(5, 25),
    },
}


def price_band(tier: str | None, item_type: str | None) -> PriceBand:
    """Band for (tier, item_type) with tier-default and global-default fallbacks."""
    table = PRICE_BANDS.get(tier or "") or PRICE_BANDS[UNKNOWN_TIER]
    key = (item_type or "").strip().lower()
    return table.get(key) or table[DEFAULT_KEY]


# ── Item type → table key ─────────────────────────────────────────────────────
# Only the last word of the item type is checked ("Dress Shirt" is a shirt,
# "Shirt Dress" is a dress, "Bag Charm" is neither). Stems match by prefix:
# "trainer" covers "trainers".

_ITEM_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("t-shirt", "t-shirt"), ("tee", "t-shirt"),
    ("sweatshirt", "jumper"), ("jumper", "jumper"), ("sweater", "jumper"),
    ("cardigan", "jumper"), ("knit", "jumper"), ("pullover", "jumper"),
    ("hoodie", "hoodie"), ("hoody", "hoodie"),
    ("shirt", "shirt"), ("blouse", "shirt"),
    ("dress", "dress"), ("gown", "dress"),
    ("coat", "coat"), ("parka", "coat"), ("trench", "coat"),
    ("jacket", "jacket"), ("blazer", "jacket"), ("gilet", "jacket"),
    ("jean", "jeans"), ("trouser", "trousers"), ("pant", "trousers"),
    ("chino", "trousers"), ("jogger", "trousers"), ("legging", "trousers"),
    ("skirt", "skirt"), ("shorts", "shorts"),
    ("trainer", "trainers"), ("sneaker", "trainers"),
    ("boot", "boots"),
    ("shoe", "shoes"), ("heel", "shoes"), ("loafer", "shoes"), ("sandal", "shoes"),
    ("pump", "shoes"), ("brogue", "shoes"),
    ("bag", "bag"), ("handbag", "bag"), ("tote", "bag"), ("clutch", "bag"),
    ("backpack", "bag"), ("purse", "bag"),
    ("belt", "belt"), ("scarf", "scarf"),
)

_WORD = re.compile(r"[a-z][a-z-]*")


def item_category(item_type: str | None) -> str:
    """Map a free-form item type ("Midi Wrap Dress") to a PRICE_BANDS key ("dress")."""
    text = (item_type or "").strip().lower()
    words = _WORD.findall(text)
    if words:
        for stem, key in _ITEM_KEYWORDS:
            if words[-1].startswith(stem):
                return key
    return text


def suggest_price(
    band: PriceBand,
    condition_multiplier: float = 1.0,
    price_multiplier: float = 1.0,
) -> int:
    """
    Single asking price inside band.

    The condition multiplier positions the price between band.min (worn out)
    and band.max (new with tags); the brand multiplier then scales it. The
    result is clamped back into the band and never drops below 1.
    """
    factor = max(0.0, min(1.0, condition_multiplier))
    base = band.min + (band.max - band.min) * factor
    price = round(base * price_multiplier)
    return max(1, band.min, min(band.max, price))
