"""
Central configuration — reads from .env file.

Everything here is a plain module attribute so that tests (and the CLI flags in
main.py) can override a value with monkeypatch / assignment and every reader of
config.X sees the change immediately.

No key is required at import time: the provider manager loads only the
providers whose keys are present and fails loudly when none are.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── AI Vision providers ────────────────────────────────────────────────────────
# Add keys for whichever providers you have access to.
OPENAI_API_KEY: str | None     = os.getenv("OPENAI_API_KEY")
ANTHROPIC_API_KEY: str | None  = os.getenv("ANTHROPIC_API_KEY")
GOOGLE_API_KEY: str | None     = os.getenv("GOOGLE_API_KEY")
OPENROUTER_API_KEY: str | None = os.getenv("OPENROUTER_API_KEY")

# Any OpenRouter-hosted multimodal model, e.g. "meta-llama/llama-3.2-90b-vision-instruct"
OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")

# ── Fallback chain ─────────────────────────────────────────────────────────────
# Comma-separated provider full names, tried in order. Each provider gets exactly
# one attempt; the next one is only called when the previous one failed.
#   PROVIDER_CHAIN=anthropic/claude-3-5-sonnet-20241022,openai/gpt-4o
PRIMARY_PROVIDER: str   = os.getenv("PRIMARY_PROVIDER", "anthropic/claude-3-5-sonnet-20241022")
SECONDARY_PROVIDER: str = os.getenv("SECONDARY_PROVIDER", "openai/gpt-4o")
PROVIDER_CHAIN: list[str] = [
    name.strip()
    for name in os.getenv("PROVIDER_CHAIN", f"{PRIMARY_PROVIDER},{SECONDARY_PROVIDER}").split(",")
    if name.strip()
]

# Upper bound for a single provider attempt (seconds). A timed-out attempt
# counts as a provider failure and moves on to the next provider.
PROVIDER_TIMEOUT_SECONDS: float = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "60"))

# The garment schema is long; 512 tokens truncates the JSON on detailed items.
MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "1500"))

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
DATA_DIR: Path = Path(os.getenv("DATA_DIR", "data"))
