"""Anthropic Claude vision engine."""

import logging
from typing import Any

import anthropic
from PIL import Image

from thai_ocr.config import DEFAULT_LANGUAGES
from thai_ocr.engines.base import BaseEngine, encode_png_base64
from thai_ocr.errors import RecognitionError
from thai_ocr.prompt import THAI_DOCUMENT_PROMPT, build_instruction

log = logging.getLogger(__name__)

SYSTEM_PROMPT = THAI_DOCUMENT_PROMPT


class AnthropicEngine(BaseEngine):
    def __init__(self, api_key: str, model: str) -> None:
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model

    async def recognize(self, image: Image.Image, languages: str = DEFAULT_LANGUAGES) -> str:
        content: list[Any] = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": "image/png",
                    "data": encode_png_base64(image),
                },
            },
            {"type": "text", "text": build_instruction(languages)},
        ]

        log.debug("Sending %dx%d image to %s", image.width, image.height, self.model)
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=8192,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.APIError as e:
            raise RecognitionError(f"Anthropic request failed: {e}") from e

        if not response.content:
            return ""
        return response.content[0].text
