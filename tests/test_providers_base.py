"""
Tests for providers/base.py and the vendor adapters.

Covers:
  - build_user_prompt / Prompt.for_images
  - ProviderResponse.cost_str formatting (milli-dollar vs dollar)
  - VisionProvider.complete(): error wrapping, cancellation passthrough, cost
  - OpenAI / Anthropic / Gemini / OpenRouter payloads: every image, in order
"""
from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import config
from errors import ProviderInvocationError
from models import ImageSet
from providers.anthropic_provider import AnthropicProvider
from providers.base import SYSTEM_PROMPT, Prompt, ProviderResponse, VisionProvider, build_user_prompt
from providers.openai_provider import OpenAIProvider
from providers.openrouter_provider import OpenRouterProvider


def make_response(**kwargs) -> ProviderResponse:
    defaults = dict(
        provider_name="test/model",
        model_id="model",
        text="{}",
        latency_ms=1200,
        input_tokens=800,
        output_tokens=150,
        cost_usd=0.005,
    )
    defaults.update(kwargs)
    return ProviderResponse(**defaults)


def openai_completion(text: str, prompt_tokens: int = 900, completion_tokens: int = 300):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


class EchoProvider(VisionProvider):
    """Concrete provider whose vendor call is an AsyncMock."""

    def __init__(self, invoke: AsyncMock):
        self.name = "echo"
        self.model_id = "v1"
        self.cost_per_1k_input_tokens = 0.001
        self.cost_per_1k_output_tokens = 0.002
        self.cost_per_image = 0.01
        self._invoke_mock = invoke

    async def _invoke(self, prompt, images):
        return await self._invoke_mock(prompt, images)


# ── Prompt ────────────────────────────────────────────────────────────────────

class TestPrompt:
    def test_schema_rules_present(self):
        assert '"itemType"' in SYSTEM_PROMPT
        assert "Never use null" in SYSTEM_PROMPT
        assert "Be specific about item type" in SYSTEM_PROMPT

    def test_single_photo_wording(self):
        assert "this garment photo" in build_user_prompt(1)

    def test_multi_photo_mentions_count(self):
        assert "3 photos" in build_user_prompt(3)

    def test_for_images(self, image_set):
        prompt = Prompt.for_images(image_set)
        assert prompt.system == SYSTEM_PROMPT
        assert prompt.user == build_user_prompt(2)


# ── cost_str ──────────────────────────────────────────────────────────────────

class TestCostStr:
    def test_sub_millidollar_shows_m_notation(self):
        r = make_response(cost_usd=0.0005)
        assert "m" in r.cost_str   # milli-dollar notation

    def test_over_millidollar_shows_dollar(self):
        r = make_response(cost_usd=0.01)
        assert r.cost_str == "$0.0100"


# ── complete() ────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
class TestComplete:
    async def test_returns_response_with_cost(self, image_set):
        provider = EchoProvider(AsyncMock(return_value=("{}", 1000, 500)))
        response = await provider.complete(Prompt.for_images(image_set), image_set)

        assert response.provider_name == "echo/v1"
        assert response.text == "{}"
        assert response.input_tokens == 1000
        # 2 images × 0.01 + 1k in × 0.001 + 0.5k out × 0.002
        assert response.cost_usd == pytest.approx(0.022)

    async def test_vendor_error_wrapped(self, image_set):
        boom = ConnectionError("connection reset")
        provider = EchoProvider(AsyncMock(side_effect=boom))

        with pytest.raises(ProviderInvocationError, match=r"\[echo/v1\].*connection reset") as exc_info:
            await provider.complete(Prompt.for_images(image_set), image_set)
        assert exc_info.value.__cause__ is boom
        assert exc_info.value.provider_name == "echo/v1"

    async def test_cancellation_not_swallowed(self, image_set):
        provider = EchoProvider(AsyncMock(side_effect=asyncio.CancelledError()))
        with pytest.raises(asyncio.CancelledError):
            await provider.complete(Prompt.for_images(image_set), image_set)

    async def test_none_text_becomes_empty(self, image_set):
        provider = EchoProvider(AsyncMock(return_value=(None, 1, 1)))
        response = await provider.complete(Prompt.for_images(image_set), image_set)
        assert response.text == ""


# ── Vendor adapters ───────────────────────────────────────────────────────────

@pytest.mark.asyncio
class TestOpenAIProvider:
    async def test_sends_every_image_in_order(self, image_set):
        provider = OpenAIProvider("sk-test", "gpt-4o")
        create = AsyncMock(return_value=openai_completion('{"itemType": "Coat"}'))
        provider._client = MagicMock()
        provider._client.chat.completions.create = create

        prompt = Prompt.for_images(image_set)
        response = await provider.complete(prompt, image_set)

        kwargs = create.call_args.kwargs
        system, user = kwargs["messages"]
        assert system == {"role": "system", "content": prompt.system}
        urls = [part["image_url"]["url"] for part in user["content"] if part["type"] == "image_url"]
        assert urls[0].startswith("data:image/jpeg;base64,")
        assert urls[1].startswith("data:image/png;base64,")
        assert user["content"][-1] == {"type": "text", "text": prompt.user}
        assert kwargs["max_tokens"] == config.MAX_OUTPUT_TOKENS
        assert response.text == '{"itemType": "Coat"}'
        assert response.output_tokens == 300

    async def test_sdk_error_wrapped(self, image_set):
        provider = OpenAIProvider("sk-test", "gpt-4o-mini")
        provider._client = MagicMock()
        provider._client.chat.completions.create = AsyncMock(side_effect=RuntimeError("503"))

        with pytest.raises(ProviderInvocationError, match="openai/gpt-4o-mini"):
            await provider.complete(Prompt.for_images(image_set), image_set)


@pytest.mark.asyncio
class TestAnthropicProvider:
    async def test_sends_every_image_with_mime_type(self, image_set):
        provider = AnthropicProvider("sk-ant-test")
        message = SimpleNamespace(
            content=[SimpleNamespace(type="text", text='{"itemType": "Skirt"}')],
            usage=SimpleNamespace(input_tokens=3300, output_tokens=420),
        )
        create = AsyncMock(return_value=message)
        provider._client = MagicMock()
        provider._client.messages.create = create

        prompt = Prompt.for_images(image_set)
        response = await provider.complete(prompt, image_set)

        kwargs = create.call_args.kwargs
        assert kwargs["system"] == prompt.system
        content = kwargs["messages"][0]["content"]
        media = [part["source"]["media_type"] for part in content if part["type"] == "image"]
        assert media == ["image/jpeg", "image/png"]
        assert content[-1]["text"] == prompt.user
        assert response.provider_name == "anthropic/claude-3-5-sonnet-20241022"
        assert response.text == '{"itemType": "Skirt"}'


@pytest.mark.asyncio
class TestGeminiProvider:
    async def test_parts_then_prompt(self, image_set):
        with patch("providers.gemini_provider.genai.Client") as client_cls:
            from providers.gemini_provider import GeminiProvider
            provider = GeminiProvider("g-test")

        generate = AsyncMock(return_value=SimpleNamespace(
            text='{"itemType": "Jumper"}',
            usage_metadata=SimpleNamespace(prompt_token_count=700, candidates_token_count=200),
        ))
        client_cls.return_value.aio.models.generate_content = generate

        prompt = Prompt.for_images(image_set)
        response = await provider.complete(prompt, image_set)

        contents = generate.call_args.kwargs["contents"]
        assert len(contents) == 3
        assert contents[-1] == prompt.user
        assert response.provider_name == "google/gemini-2.0-flash"
        assert response.input_tokens == 700


class TestOpenRouterProvider:
    def test_display_name_strips_vendor_prefix(self):
        provider = OpenRouterProvider("or-test", "meta-llama/llama-3.2-90b-vision-instruct")
        assert provider.full_name == "openrouter/llama-3.2-90b-vision-instruct"
        assert provider.model_id == "meta-llama/llama-3.2-90b-vision-instruct"
