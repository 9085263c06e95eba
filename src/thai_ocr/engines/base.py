"""Abstract base for recognition engines."""

import base64
import io
from abc import ABC, abstractmethod

from PIL import Image

from thai_ocr.config import DEFAULT_LANGUAGES


def encode_png_base64(image: Image.Image) -> str:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return base64.standard_b64encode(buf.getvalue()).decode("utf-8")


class BaseEngine(ABC):
    @abstractmethod
    async def recognize(self, image: Image.Image, languages: str = DEFAULT_LANGUAGES) -> str:
        """Return the text recognised in *image*.

        *languages* is a Tesseract-style language set such as ``tha+eng``.
        Implementations raise ``RecognitionError`` when recognition fails.
        """
        ...
