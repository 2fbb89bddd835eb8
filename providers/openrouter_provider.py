"""
OpenRouter vision provider — access hundreds of AI models through one API.

OpenRouter (https://openrouter.ai) is an OpenAI-compatible gateway that provides
access to models from OpenAI, Anthropic, Google, Meta, Mistral, and many others.

Setup:
  1. Sign up at https://openrouter.ai and create an API key
  2. OPENROUTER_API_KEY=...            in .env
  3. OPENROUTER_MODEL=meta-llama/llama-3.2-90b-vision-instruct   (optional)
  4. Add "openrouter/<model tail>" to PROVIDER_CHAIN

OpenRouter model IDs look like: "openai/gpt-4o", "anthropic/claude-3-haiku",
"meta-llama/llama-3.2-90b-vision-instruct", etc.
"""
from __future__ import annotations

import logging
from typing import Optional

import openai

import config
from models import ImageSet
from providers.base import Prompt, VisionProvider
from providers.openai_provider import build_messages

logger = logging.getLogger(__name__)

_OR_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterProvider(VisionProvider):
    """Vision provider that uses any OpenRouter-hosted multimodal model."""

    def __init__(
        self,
        api_key: str,
        model: str,
        input_cost_per_1k: float = 0.005,
        output_cost_per_1k: float = 0.015,
        image_cost: float = 0.0,
        display_name: Optional[str] = None,
    ):
        self.name       = "openrouter"
        self.model_id   = model
        self.max_tokens = config.MAX_OUTPUT_TOKENS

        # Clean display name: strip the provider prefix for readability
        # "openai/gpt-4o" → "openrouter/gpt-4o"
        self._display_name = display_name or model.split("/")[-1]

        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=_OR_BASE_URL,
            default_headers={
                "HTTP-Referer": "https://garment-lister",
                "X-Title":      "Garment Lister",
            },
        )

        self.cost_per_1k_input_tokens  = input_cost_per_1k
        self.cost_per_1k_output_tokens = output_cost_per_1k
        self.cost_per_image            = image_cost

    @property
    def full_name(self) -> str:
        return f"openrouter/{self._display_name}"

    async def _invoke(self, prompt: Prompt, images: ImageSet) -> tuple[str, int, int]:
        response = await self._client.chat.completions.create(
            model=self.model_id,
            max_tokens=self.max_tokens,
            temperature=0,
            messages=build_messages(prompt, images),
        )

        raw           = response.choices[0].message.content or ""
        usage         = response.usage
        input_tokens  = usage.prompt_tokens     if usage else 800 * len(images)
        output_tokens = usage.completion_tokens if usage else 400
        return raw, input_tokens, output_tokens
