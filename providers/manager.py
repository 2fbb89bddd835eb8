"""
Provider Manager — builds the enabled vision providers and runs the fallback chain.

The chain is an ordered list of providers (default: PRIMARY_PROVIDER then
SECONDARY_PROVIDER, or whatever PROVIDER_CHAIN lists). Each provider gets
exactly one attempt with the same prompt and the same images; the next one is
only called when the previous one failed. No retries, no backoff, no racing.

Per-model enable/disable via environment variables (all default to true):
  ENABLE_GPT_4O_MINI=true/false
  ENABLE_GPT_4O=true/false
  ENABLE_CLAUDE_3_HAIKU_20240307=true/false
  ENABLE_CLAUDE_3_5_SONNET_20241022=true/false
  ENABLE_GEMINI_1_5_FLASH=true/false
  ENABLE_GEMINI_2_0_FLASH=true/false
  ENABLE_GEMINI_1_5_PRO=true/false
  ENABLE_OPENROUTER=true/false
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional, Sequence

import config
from errors import AllProvidersExhaustedError, ProviderInvocationError, ResponseParseError
from models import AnalysisFailure, AnalysisRecord, ImageSet
from normalizer import normalize
from providers.base import Prompt, VisionProvider

logger = logging.getLogger(__name__)

# Module-level cache: reset to {} by tests (or after changing keys in config)
_providers: dict[str, VisionProvider] = {}


def _model_enabled(env_key: str, default: bool = True) -> bool:
    """
    Check whether a specific model is enabled via an environment variable.
    Default is True for most models; pass default=False to require explicit opt-in.
    """
    raw = os.getenv(env_key, "true" if default else "false")
    return raw.strip().lower() not in ("false", "0", "no")


def _build_providers() -> dict[str, VisionProvider]:
    """
    Instantiate every provider whose API key is set in config
    AND whose per-model toggle is enabled.
    Returns dict keyed by full_name.
    """
    providers: dict[str, VisionProvider] = {}

    # ── OpenAI ────────────────────────────────────────────────────────────────
    if config.OPENAI_API_KEY:
        from providers.openai_provider import OpenAIProvider
        for model, env_flag in [
            ("gpt-4o-mini", "ENABLE_GPT_4O_MINI"),
            ("gpt-4o",      "ENABLE_GPT_4O"),
        ]:
            if _model_enabled(env_flag):
                p = OpenAIProvider(config.OPENAI_API_KEY, model)
                providers[p.full_name] = p
                logger.info("Loaded provider: %s", p.full_name)
            else:
                logger.info("Skipped provider openai/%s (disabled by %s)", model, env_flag)

    # ── Anthropic ─────────────────────────────────────────────────────────────
    if config.ANTHROPIC_API_KEY:
        from providers.anthropic_provider import AnthropicProvider
        for model, env_flag in [
            ("claude-3-haiku-20240307",    "ENABLE_CLAUDE_3_HAIKU_20240307"),
            ("claude-3-5-sonnet-20241022", "ENABLE_CLAUDE_3_5_SONNET_20241022"),
        ]:
            if _model_enabled(env_flag):
                p = AnthropicProvider(config.ANTHROPIC_API_KEY, model)
                providers[p.full_name] = p
                logger.info("Loaded provider: %s", p.full_name)
            else:
                logger.info("Skipped provider anthropic/%s (disabled by %s)", model, env_flag)

    # ── Google ────────────────────────────────────────────────────────────────
    if config.GOOGLE_API_KEY:
        from providers.gemini_provider import GeminiProvider
        for model, env_flag in [
            ("gemini-1.5-flash", "ENABLE_GEMINI_1_5_FLASH"),
            ("gemini-2.0-flash", "ENABLE_GEMINI_2_0_FLASH"),
            ("gemini-1.5-pro",   "ENABLE_GEMINI_1_5_PRO"),
        ]:
            if _model_enabled(env_flag):
                p = GeminiProvider(config.GOOGLE_API_KEY, model)
                providers[p.full_name] = p
                logger.info("Loaded provider: %s", p.full_name)
            else:
                logger.info("Skipped provider google/%s (disabled by %s)", model, env_flag)

    # ── OpenRouter (any hosted multimodal model) ─────────────────────────────
    if config.OPENROUTER_API_KEY:
        from providers.openrouter_provider import OpenRouterProvider
        if _model_enabled("ENABLE_OPENROUTER"):
            p = OpenRouterProvider(config.OPENROUTER_API_KEY, config.OPENROUTER_MODEL)
            providers[p.full_name] = p
            logger.info("Loaded provider: %s", p.full_name)
        else:
            logger.info("Skipped provider openrouter/%s (disabled by ENABLE_OPENROUTER)",
                        config.OPENROUTER_MODEL)

    return providers


def get_providers() -> dict[str, VisionProvider]:
    global _providers
    if not _providers:
        _providers = _build_providers()
    return _providers


def build_chain(names: Optional[Sequence[str]] = None) -> list[VisionProvider]:
    """
    Resolve provider full names (default: config.PROVIDER_CHAIN) into the
    ordered fallback chain. Names with no loaded provider are skipped.
    """
    names = list(config.PROVIDER_CHAIN if names is None else names)
    providers = get_providers()

    chain: list[VisionProvider] = []
    for name in names:
        provider = providers.get(name)
        if provider is None:
            logger.warning("Provider %s is in the chain but not available — skipping", name)
            continue
        if provider not in chain:
            chain.append(provider)

    if not chain:
        available = ", ".join(providers) or "none"
        raise RuntimeError(
            "No vision providers available for the chain "
            f"({', '.join(names) or 'empty'}). Loaded: {available}.\n"
            "Set at least one of OPENAI_API_KEY, ANTHROPIC_API_KEY, GOOGLE_API_KEY, "
            "OPENROUTER_API_KEY and list it in PROVIDER_CHAIN."
        )
    return chain


# ── Core analysis function ────────────────────────────────────────────────────

async def _attempt(
    provider: VisionProvider,
    prompt: Prompt,
    image_set: ImageSet,
    timeout: float,
) -> AnalysisRecord:
    """One call to one provider, bounded by timeout, normalized."""
    try:
        response = await asyncio.wait_for(provider.complete(prompt, image_set), timeout)
    except asyncio.TimeoutError as exc:
        raise ProviderInvocationError(provider.full_name, f"timed out after {timeout:g}s") from exc
    except (ProviderInvocationError, ResponseParseError):
        raise
    except Exception as exc:
        raise ProviderInvocationError(provider.full_name, f"{type(exc).__name__}: {exc}") from exc

    record = normalize(response.text)
    logger.info(
        "[%s] OK — item=%r latency=%dms cost=%s",
        provider.full_name, record.item_type, response.latency_ms, response.cost_str,
    )
    return record


async def analyse_images(
    image_set: ImageSet,
    chain: Optional[Sequence[VisionProvider]] = None,
    timeout: Optional[float] = None,
) -> AnalysisRecord | AnalysisFailure:
    """
    Walk the chain until one provider returns a record that normalizes.

    Returns the first AnalysisRecord, or AnalysisFailure carrying the last
    provider's error once every provider has had its single attempt.
    Cancelling the calling task cancels the in-flight provider call.
    """
    if chain is None:
        try:
            chain = build_chain()
        except RuntimeError as exc:
            logger.error("%s", exc)
            chain = []
    if timeout is None:
        timeout = config.PROVIDER_TIMEOUT_SECONDS

    prompt = Prompt.for_images(image_set)
    attempts: list[str] = []
    last_error: Optional[Exception] = None

    for provider in chain:
        attempts.append(provider.full_name)
        try:
            return await _attempt(provider, prompt, image_set, timeout)
        except (ProviderInvocationError, ResponseParseError) as exc:
            logger.error("[%s] Failed: %s", provider.full_name, exc)
            last_error = exc

    exhausted = AllProvidersExhaustedError(attempts, last_error)
    logger.error("All vision providers failed (%s): %s", ", ".join(attempts) or "none", exhausted)
    return AnalysisFailure(error=str(exhausted), attempts=tuple(exhausted.attempts))
