"""
Anthropic vision provider — supports claude-3-5-sonnet and claude-3-haiku.

Pricing (as of early 2025):
  claude-3-5-sonnet-20241022: $3.00 / 1M input,  $15.00 / 1M output
                               Images: ~1600 tokens per standard image
  claude-3-haiku-20240307:    $0.25 / 1M input,  $1.25  / 1M output
                               Images: ~1600 tokens per standard image

Sonnet is the default primary: it reads small care-label print reliably,
which is where brand, size and material come from.
"""
from __future__ import annotations

import logging

import anthropic

import config
from models import ImageSet
from providers.base import Prompt, VisionProvider

logger = logging.getLogger(__name__)

_ANTHROPIC_IMAGE_TOKENS = 1600  # approximate tokens per image for Claude


class AnthropicProvider(VisionProvider):

    def __init__(self, api_key: str, model: str = "claude-3-5-sonnet-20241022"):
        self.name = "anthropic"
        self.model_id = model
        self.max_tokens = config.MAX_OUTPUT_TOKENS
        self._client = anthropic.AsyncAnthropic(api_key=api_key)

        _pricing = {
            "claude-3-5-sonnet-20241022": (0.003,  0.015),
            "claude-3-haiku-20240307":    (0.00025, 0.00125),
        }
        self.cost_per_1k_input_tokens, self.cost_per_1k_output_tokens = _pricing.get(
            model, (0.003, 0.015)
        )
        self.cost_per_image = _ANTHROPIC_IMAGE_TOKENS / 1000 * self.cost_per_1k_input_tokens

    async def _invoke(self, prompt: Prompt, images: ImageSet) -> tuple[str, int, int]:
        content: list[dict] = [
            {
                "type": "image",
                "source": {
                    "type":       "base64",
                    "media_type": image.mime_type,
                    "data":       image.b64,
                },
            }
            for image in images
        ]
        content.append({"type": "text", "text": prompt.user})

        message = await self._client.messages.create(
            model=self.model_id,
            max_tokens=self.max_tokens,
            system=prompt.system,
            messages=[{"role": "user", "content": content}],
        )

        raw = "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )
        return raw, message.usage.input_tokens, message.usage.output_tokens
