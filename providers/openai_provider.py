"""
OpenAI vision provider — supports gpt-4o and gpt-4o-mini.

Pricing (as of early 2025):
  gpt-4o:       $5.00 / 1M input tokens,  $15.00 / 1M output tokens
                + image tiles: each 512×512 tile = 170 tokens (~$0.00085/tile)
                A typical 1024×1024 garment photo ≈ 765 input tokens for vision
  gpt-4o-mini:  $0.15 / 1M input tokens,  $0.60 / 1M output tokens
                Image tiles same count but much cheaper per token
"""
from __future__ import annotations

import logging

from openai import AsyncOpenAI

import config
from models import ImageSet
from providers.base import Prompt, VisionProvider

logger = logging.getLogger(__name__)


def build_messages(prompt: Prompt, images: ImageSet) -> list[dict]:
    """Chat-completions payload: every photo in order, then the instruction text."""
    content: list[dict] = [
        {
            "type": "image_url",
            "image_url": {"url": image.data_url, "detail": "high"},
        }
        for image in images
    ]
    content.append({"type": "text", "text": prompt.user})
    return [
        {"role": "system", "content": prompt.system},
        {"role": "user",   "content": content},
    ]


class OpenAIProvider(VisionProvider):

    def __init__(self, api_key: str, model: str = "gpt-4o"):
        self.name = "openai"
        self.model_id = model
        self.max_tokens = config.MAX_OUTPUT_TOKENS
        self._client = AsyncOpenAI(api_key=api_key)

        # Pricing per 1k tokens
        _pricing = {
            "gpt-4o":      (0.005,  0.015),
            "gpt-4o-mini": (0.00015, 0.0006),
        }
        self.cost_per_1k_input_tokens, self.cost_per_1k_output_tokens = _pricing.get(
            model, (0.005, 0.015)
        )
        # High-detail image processing: ~765 tokens for a typical garment photo
        self.cost_per_image = 765 / 1000 * self.cost_per_1k_input_tokens

    async def _invoke(self, prompt: Prompt, images: ImageSet) -> tuple[str, int, int]:
        response = await self._client.chat.completions.create(
            model=self.model_id,
            max_tokens=self.max_tokens,
            temperature=0,
            messages=build_messages(prompt, images),
        )

        raw = response.choices[0].message.content or ""
        usage = response.usage
        input_tokens = usage.prompt_tokens if usage else 800 * len(images)
        output_tokens = usage.completion_tokens if usage else 400
        return raw, input_tokens, output_tokens
