"""
Tests for pricing.py and conditions.py.

Covers:
  - price_band(): exact cell, tier default, unknown-tier default
  - item_category(): free item type → table key
  - suggest_price(): condition / brand multipliers, clamping
  - grade_condition(): thresholds, score parsing, fallback grade
"""
from __future__ import annotations

import pytest

import conditions
from conditions import grade_condition, parse_score
from models import PriceBand
from pricing import PRICE_BANDS, item_category, price_band, suggest_price


# ── price_band ────────────────────────────────────────────────────────────────

class TestPriceBand:
    def test_luxury_bag(self):
        assert price_band("luxury", "bag") == PriceBand(1500, 8000)

    def test_case_insensitive_item(self):
        assert price_band("luxury", "BAG") == PriceBand(1500, 8000)

    def test_unknown_item_uses_tier_default(self):
        assert price_band("designer", "kilt") == PRICE_BANDS["designer"]["default"]

    def test_unknown_tier_uses_global_default(self):
        assert price_band("unknown", "bag") == PriceBand(5, 25)
        assert price_band("couture", "dress") == PriceBand(5, 25)
        assert price_band(None, None) == PriceBand(5, 25)

    def test_every_tier_has_default(self):
        for tier, table in PRICE_BANDS.items():
            assert "default" in table, tier
            for band in table.values():
                assert 0 < band.min <= band.max


# ── item_category ─────────────────────────────────────────────────────────────

class TestItemCategory:
    @pytest.mark.parametrize("item_type,expected", [
        ("Midi Wrap Dress",     "dress"),
        ("Shirt Dress",         "dress"),
        ("Dress Shirt",         "shirt"),
        ("Graphic T-Shirt",     "t-shirt"),
        ("Leather Belt",        "belt"),
        ("Chelsea Boots",       "boots"),
        ("Running Trainers",    "trainers"),
        ("Slim Fit Jeans",      "jeans"),
        ("Wool Blend Coat",     "coat"),
        ("Cable Knit Cardigan", "jumper"),
        ("Leather Handbag",     "bag"),
        ("Zip Hoodie",          "hoodie"),
    ])
    def test_keywords(self, item_type, expected):
        assert item_category(item_type) == expected

    def test_unrecognised_passes_through_lowercased(self):
        assert item_category("Kilt") == "kilt"

    def test_empty(self):
        assert item_category(None) == ""

    def test_only_last_word_counts(self):
        assert item_category("Bag Charm") == "bag charm"
        assert item_category("Shoe Horn") == "shoe horn"

    def test_accessory_gets_tier_default_band(self):
        band = price_band("luxury", item_category("Bag Charm"))
        assert band == PRICE_BANDS["luxury"]["default"]


# ── suggest_price ─────────────────────────────────────────────────────────────

class TestSuggestPrice:
    def test_new_item_neutral_brand_gets_max(self):
        assert suggest_price(PriceBand(10, 50), condition_multiplier=1.0) == 50

    def test_condition_positions_inside_band(self):
        assert suggest_price(PriceBand(10, 50), condition_multiplier=0.5) == 30

    def test_brand_multiplier_scales(self):
        assert suggest_price(PriceBand(10, 50), 0.5, price_multiplier=1.2) == 36

    def test_clamped_to_band(self):
        band = PriceBand(10, 50)
        assert suggest_price(band, 1.0, price_multiplier=3.0) == 50
        assert suggest_price(band, 0.0, price_multiplier=0.1) == 10

    def test_band_not_mutated(self):
        band = PriceBand(1500, 8000)
        suggest_price(band, 0.6, 2.5)
        assert band == PriceBand(1500, 8000)


# ── Condition grading ─────────────────────────────────────────────────────────

class TestGradeCondition:
    @pytest.mark.parametrize("score,grade", [
        (10, conditions.NEW),
        (9,  conditions.NEW_WITHOUT_TAGS),
        (8,  conditions.EXCELLENT),
        (7,  conditions.VERY_GOOD),
        (6,  conditions.VERY_GOOD),
        (5,  conditions.GOOD),
        (4,  conditions.GOOD),
        (3,  conditions.FAIR),
        (2,  conditions.FAIR),
        (1,  conditions.POOR),
    ])
    def test_thresholds(self, score, grade):
        assert grade_condition(score) is grade

    @pytest.mark.parametrize("score", [None, "", "great", True, 0, -3, [8]])
    def test_unusable_score_grades_very_good(self, score):
        assert grade_condition(score) is conditions.VERY_GOOD

    def test_multipliers_fall_with_grade(self):
        grades = [g for _, g in conditions._THRESHOLDS] + [conditions.POOR]
        multipliers = [g.price_multiplier for g in grades]
        assert multipliers == sorted(multipliers, reverse=True)


class TestParseScore:
    def test_fraction_string(self):
        assert parse_score("7/10") == 7.0

    def test_decimal(self):
        assert parse_score("8.5") == 8.5

    def test_percentage_rescaled(self):
        assert parse_score(80) == 8.0

    def test_out_of_range(self):
        assert parse_score(250) is None
