"""
Brand catalog — curated fashion brands grouped by market tier.

The table is an explicitly ordered, immutable structure: a tuple of tiers
(luxury → designer → highStreet → sportswear), each holding a tuple of entries
in declaration order. brand_resolver walks it in exactly this order and keeps
the first candidate on ties, so moving an entry up or down the table changes
which brand wins an equal-confidence match.

Rules for editing:
  • a canonical name appears in one tier only (checked at import)
  • no canonical name may contain another canonical name
  • aliases are matched as plain substrings, so avoid short letter pairs
    ("LV", "SI", "UA") that occur inside ordinary words
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

TIER_ORDER: tuple[str, ...] = ("luxury", "designer", "highStreet", "sportswear")
UNKNOWN_TIER = "unknown"


@dataclass(frozen=True)
class BrandCatalogEntry:
    name: str                       # canonical display name, e.g. "Louis Vuitton"
    tier: str
    aliases: tuple[str, ...] = ()   # uppercase variants seen on labels
    categories: tuple[str, ...] = ()
    price_multiplier: float = 1.0


@dataclass(frozen=True)
class Tier:
    name: str
    entries: tuple[BrandCatalogEntry, ...]


def _tier(name: str, *rows: tuple) -> Tier:
    entries = tuple(
        BrandCatalogEntry(
            name=brand,
            tier=name,
            aliases=tuple(aliases),
            categories=tuple(categories),
            price_multiplier=multiplier,
        )
        for brand, aliases, categories, multiplier in rows
    )
    return Tier(name=name, entries=entries)


_ALL = ("clothing", "shoes", "bags", "accessories")

# ── Catalog ───────────────────────────────────────────────────────────────────
#   (canonical name, aliases, categories, price multiplier)

CATALOG: tuple[Tier, ...] = (
    _tier(
        "luxury",
        ("Gucci",           ["GUCCIO GUCCI", "GG MARMONT", "GUCCI ITALY"],        _ALL, 2.5),
        ("Louis Vuitton",   ["VUITTON", "LOUIS V", "LOUIS VUITTON PARIS"],       ("bags", "accessories", "shoes"), 2.5),
        ("Chanel",          ["COCO CHANEL", "GABRIELLE CHANEL"],                  _ALL, 2.5),
        ("Prada",           ["PRADA MILANO", "LINEA ROSSA"],                     _ALL, 2.3),
        ("Hermès",          ["HERMES"],                                           ("bags", "accessories"), 2.5),
        ("Dior",            ["CHRISTIAN DIOR", "DIOR HOMME"],                     _ALL, 2.4),
        ("Versace",         ["GIANNI VERSACE", "VERSUS"],                         ("clothing", "accessories"), 2.1),
        ("Burberry",        ["BURBERRYS", "BURBERRY LONDON", "BURBERRY BRIT"],    ("clothing", "accessories"), 2.0),
        ("Balenciaga",      ["BALENCIAGA PARIS"],                                 _ALL, 2.2),
        ("Saint Laurent",   ["YSL", "YVES SAINT LAURENT", "RIVE GAUCHE"],         _ALL, 2.3),
        ("Valentino",       ["GARAVANI"],                                         _ALL, 2.1),
        ("Givenchy",        ["GIVENCHY PARIS"],                                   _ALL, 2.0),
        ("Fendi",           ["FENDI ROMA", "ZUCCA"],                              ("bags", "clothing", "accessories"), 2.2),
        ("Bottega Veneta",  ["BOTTEGA"],                                          ("bags", "shoes", "accessories"), 2.3),
        ("Celine",          ["CÉLINE", "OLD CELINE"],                             _ALL, 2.2),
        ("Loewe",           ["LOEWE MADRID"],                                     ("bags", "clothing"), 2.1),
        ("Mulberry",        ["MULBERRY ENGLAND"],                                 ("bags", "accessories"), 2.0),
    ),
    _tier(
        "designer",
        ("Moschino",           ["LOVE MOSCHINO", "MOSCHINO COUTURE"],            ("clothing", "bags"), 1.6),
        ("Dolce & Gabbana",    ["D&G", "DOLCE&GABBANA", "DOLCE GABBANA"],        _ALL, 1.8),
        ("Armani",             ["GIORGIO ARMANI", "EMPORIO ARMANI", "ARMANI EXCHANGE"], ("clothing", "accessories"), 1.5),
        ("Marc Jacobs",        ["MARC BY MARC JACOBS"],                          ("bags", "clothing"), 1.5),
        ("Alexander McQueen",  ["MCQUEEN", "ALEXANDER MC QUEEN"],                _ALL, 1.8),
        ("Stella McCartney",   ["STELLA MC CARTNEY"],                            ("clothing", "bags"), 1.7),
        ("Kenzo",              ["KENZO PARIS", "KENZO TIGER"],                   ("clothing",), 1.4),
        ("Off-White",          ["OFFWHITE", "VIRGIL ABLOH"],                     ("clothing", "shoes"), 1.7),
        ("Balmain",            ["PIERRE BALMAIN"],                               ("clothing",), 1.7),
        ("Isabel Marant",      ["MARANT ETOILE", "MARANT ÉTOILE"],               ("clothing", "shoes"), 1.5),
        ("Acne Studios",       ["ACNE JEANS"],                                   ("clothing",), 1.4),
        ("Ganni",              ["GANNI COPENHAGEN"],                             ("clothing",), 1.3),
        ("Zimmermann",         ["ZIMMERMANN AUSTRALIA"],                         ("clothing",), 1.5),
        ("Michael Kors",       ["MICHAEL MICHAEL KORS", "KORS"],                 ("bags", "accessories", "clothing"), 1.3),
        ("Coach",              ["COACH NEW YORK", "COACH 1941"],                 ("bags", "accessories"), 1.4),
        ("Tory Burch",         ["TORY SPORT"],                                   ("bags", "shoes"), 1.3),
        ("Ralph Lauren",       ["POLO RALPH LAUREN", "LAUREN RALPH LAUREN"],     ("clothing",), 1.4),
        ("Hugo Boss",          ["BOSS ORANGE", "BOSS BLACK"],                    ("clothing",), 1.3),
        ("Ted Baker",          ["TED BAKER LONDON"],                             ("clothing", "accessories"), 1.2),
        ("Paul Smith",         ["PS PAUL SMITH"],                                ("clothing", "accessories"), 1.3),
        ("Vivienne Westwood",  ["WESTWOOD"],                                     ("clothing", "accessories"), 1.5),
        ("Calvin Klein",       ["CK CALVIN KLEIN", "CALVIN KLEIN JEANS"],        ("clothing",), 1.1),
        ("Tommy Hilfiger",     ["TOMMY JEANS", "HILFIGER"],                      ("clothing",), 1.1),
    ),
    _tier(
        "highStreet",
        ("Zara",               ["TRAFALUC", "ZARA BASIC", "ZARA WOMAN"],         ("clothing", "shoes"), 0.9),
        ("COS",                ["COLLECTION OF STYLE"],                          ("clothing",), 1.0),
        ("Massimo Dutti",      ["MASSIMO DUTTI MAN"],                            ("clothing", "shoes"), 1.0),
        ("& Other Stories",    ["OTHER STORIES", "&OTHERSTORIES"],               ("clothing",), 1.0),
        ("Arket",              ["ARKET COPENHAGEN"],                             ("clothing",), 1.0),
        ("Mango",              ["MNG"],                                          ("clothing",), 0.8),
        ("H&M",                ["H & M", "HENNES"],                              ("clothing",), 0.6),
        ("Uniqlo",             ["UNIQLO U"],                                     ("clothing",), 0.8),
        ("Topshop",            ["TOPMAN", "TOPSHOP UNIQUE"],                     ("clothing",), 0.7),
        ("Urban Outfitters",   ["URBAN RENEWAL"],                                ("clothing",), 0.8),
        ("Free People",        ["FREE PEOPLE MOVEMENT"],                         ("clothing",), 0.9),
        ("Reformation",        ["THE REFORMATION"],                              ("clothing",), 1.1),
        ("AllSaints",          ["ALL SAINTS"],                                   ("clothing", "shoes"), 1.2),
        ("Reiss",              ["REISS 1971"],                                   ("clothing",), 1.1),
        ("Whistles",           ["WHISTLES LONDON"],                              ("clothing",), 1.0),
        ("Next",               ["NEXT SIGNATURE"],                               ("clothing", "shoes"), 0.7),
        ("Marks & Spencer",    ["M&S", "M & S", "ST MICHAEL"],                   ("clothing",), 0.7),
        ("River Island",       ["RIVER ISLAND PLUS"],                            ("clothing",), 0.6),
        ("Primark",            ["PRIMARK CARES"],                                ("clothing",), 0.5),
        ("Levi's",             ["LEVIS", "LEVI STRAUSS"],                        ("clothing",), 1.0),
        ("Diesel",             ["DIESEL INDUSTRY"],                              ("clothing", "shoes"), 1.0),
        ("Wrangler",           ["WRANGLER JEANS"],                               ("clothing",), 0.8),
        ("G-Star",             ["G-STAR RAW", "GSTAR"],                          ("clothing",), 0.9),
        ("Superdry",           ["SUPERDRY JAPAN"],                               ("clothing",), 0.8),
        ("Barbour",            ["BARBOUR INTERNATIONAL"],                        ("clothing",), 1.2),
        ("Joules",             ["JOULES CLOTHING"],                              ("clothing",), 0.8),
        ("FatFace",            ["FAT FACE"],                                     ("clothing",), 0.7),
    ),
    _tier(
        "sportswear",
        ("Nike",               ["AIR JORDAN", "JORDAN", "NIKE SB", "NIKE ACG"],  ("clothing", "shoes"), 1.2),
        ("Adidas",             ["ADIDAS ORIGINALS", "YEEZY", "Y-3"],             ("clothing", "shoes"), 1.1),
        ("Puma",               ["PUMA SELECT"],                                  ("clothing", "shoes"), 0.9),
        ("Reebok",             ["REEBOK CLASSIC"],                               ("clothing", "shoes"), 0.9),
        ("New Balance",        ["NEW BALANCE ATHLETICS"],                        ("shoes", "clothing"), 1.1),
        ("Under Armour",       ["UNDER ARMOR"],                                  ("clothing", "shoes"), 1.0),
        ("Champion",           ["REVERSE WEAVE"],                                ("clothing",), 0.9),
        ("Fila",               ["FILA ITALIA"],                                  ("clothing", "shoes"), 0.8),
        ("The North Face",     ["NORTH FACE", "TNF"],                            ("clothing",), 1.3),
        ("Patagonia",          ["PATAGONIA OUTDOOR"],                            ("clothing",), 1.3),
        ("Columbia",           ["COLUMBIA SPORTSWEAR"],                          ("clothing",), 1.0),
        ("Supreme",            ["SUPREME NEW YORK"],                             ("clothing", "accessories"), 1.6),
        ("BAPE",               ["A BATHING APE", "AAPE"],                        ("clothing",), 1.5),
        ("Stone Island",       ["STONE ISLAND SHADOW"],                          ("clothing",), 1.6),
        ("Stussy",             ["STÜSSY"],                                       ("clothing",), 1.2),
        ("Lululemon",          ["LULULEMON ATHLETICA"],                          ("clothing",), 1.2),
    ),
)


def _validate(catalog: tuple[Tier, ...]) -> None:
    """Enforce the one-tier-per-canonical-name invariant and the declared tier order."""
    if tuple(t.name for t in catalog) != TIER_ORDER:
        raise ValueError(f"Catalog tiers must be declared in order {TIER_ORDER}")
    seen: dict[str, str] = {}
    for tier in catalog:
        for entry in tier.entries:
            key = entry.name.upper()
            if key in seen:
                raise ValueError(
                    f"Brand '{entry.name}' is canonical in both '{seen[key]}' and '{tier.name}'"
                )
            seen[key] = tier.name


_validate(CATALOG)

_BY_NAME: dict[str, BrandCatalogEntry] = {
    entry.name.upper(): entry for tier in CATALOG for entry in tier.entries
}


def iter_entries() -> Iterator[BrandCatalogEntry]:
    """Every entry, tiers in TIER_ORDER, entries in declaration order."""
    for tier in CATALOG:
        yield from tier.entries


def get_entry(name: Optional[str]) -> Optional[BrandCatalogEntry]:
    """Exact (case-insensitive) canonical-name lookup."""
    if not name:
        return None
    return _BY_NAME.get(name.strip().upper())


def entries_by_tier(tier: str) -> tuple[BrandCatalogEntry, ...]:
    for t in CATALOG:
        if t.name == tier:
            return t.entries
    return ()
