"""
Shared pytest fixtures.

Every test gets a clean temporary DATA_DIR via the `tmp_data_dir` fixture so
the CLI's log file never lands in the real data/ directory, plus a couple of
canned provider responses used across the normalizer / pipeline tests.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# ── Make the project root importable without installing the package ────────────
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Smallest byte strings the mime sniffer recognises
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16
PNG_BYTES  = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture(autouse=True)
def tmp_data_dir(tmp_path, monkeypatch):
    """Redirect DATA_DIR to a fresh tmp directory for every test."""
    data = tmp_path / "data"
    data.mkdir()
    monkeypatch.setenv("DATA_DIR", str(data))

    import config
    monkeypatch.setattr(config, "DATA_DIR", data)
    yield data


@pytest.fixture
def full_response() -> dict:
    return {
        "itemType": "Midi Wrap Dress",
        "brand": {"name": "Zara", "confidence": 0.92, "reasoning": "Neck label reads ZARA WOMAN"},
        "size": "M",
        "color": "Blue",
        "material": "Viscose",
        "condition": {
            "score": 8,
            "description": "Light wear, no major flaws",
            "defects": ["slight pilling under arms"],
        },
        "gender": "Womens",
        "department": "Womens",
        "sizeType": "Regular",
        "style": "Wrap",
        "pattern": "Floral",
        "sleeveLength": "Short Sleeve",
        "occasion": "Casual",
        "season": "Summer",
        "theme": "Boho",
        "features": ["Tie waist", "V-neck"],
        "garmentCare": "Machine wash 30°C",
        "countryOfManufacture": "Turkey",
        "measurements": {"chest": "19 in", "length": "45 in", "waist": "", "inseam": ""},
        "keyFeatures": ["Flattering wrap fit", "Floral print"],
        "estimatedPrice": {"min": 12, "max": 20, "reasoning": "Zara dresses sell for £12-20"},
    }


@pytest.fixture
def minimal_response() -> dict:
    return {
        "itemType": "T-Shirt",
        "brand": "Unknown",
        "size": "Not Visible",
        "color": "White",
        "material": "Not Specified",
        "condition": {"score": 6},
        "gender": "Mens",
    }


@pytest.fixture
def full_response_text(full_response) -> str:
    return json.dumps(full_response)


@pytest.fixture
def image_set():
    from models import ImageSet
    return ImageSet.from_bytes(JPEG_BYTES, PNG_BYTES)
