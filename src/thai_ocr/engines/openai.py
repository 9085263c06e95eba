"""OpenAI GPT-4o vision engine."""

import logging
from typing import Any

import openai
from PIL import Image

from thai_ocr.config import DEFAULT_LANGUAGES
from thai_ocr.engines.base import BaseEngine, encode_png_base64
from thai_ocr.errors import RecognitionError
from thai_ocr.prompt import THAI_DOCUMENT_PROMPT, build_instruction

log = logging.getLogger(__name__)

SYSTEM_PROMPT = THAI_DOCUMENT_PROMPT


class OpenAIEngine(BaseEngine):
    def __init__(self, api_key: str, model: str) -> None:
        self.client = openai.AsyncOpenAI(api_key=api_key)
        self.model = model

    async def recognize(self, image: Image.Image, languages: str = DEFAULT_LANGUAGES) -> str:
        content: list[Any] = [
            {
                "type": "image_url",
                "image_url": {
                    "url": f"data:image/png;base64,{encode_png_base64(image)}",
                    "detail": "high",
                },
            },
            {"type": "text", "text": build_instruction(languages)},
        ]

        log.debug("Sending %dx%d image to %s", image.width, image.height, self.model)
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=4096,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": content},
                ],
            )
        except openai.OpenAIError as e:
            raise RecognitionError(f"OpenAI request failed: {e}") from e

        return response.choices[0].message.content or ""
