"""Tesseract engine via pytesseract."""

import asyncio
import logging
from typing import Optional

import pytesseract
from PIL import Image

from thai_ocr.config import DEFAULT_LANGUAGES
from thai_ocr.engines.base import BaseEngine
from thai_ocr.errors import RecognitionError

log = logging.getLogger(__name__)

# Page segmentation mode 3: fully automatic, no orientation detection.
DEFAULT_PSM = 3


class TesseractEngine(BaseEngine):
    def __init__(self, tessdata_dir: Optional[str] = None, psm: int = DEFAULT_PSM) -> None:
        self.tessdata_dir = tessdata_dir
        self.psm = psm

    @property
    def tesseract_config(self) -> str:
        # --oem 1: LSTM models only, the ones shipped for Thai.
        parts = [f"--psm {self.psm}", "--oem 1", "-c preserve_interword_spaces=1"]
        if self.tessdata_dir:
            parts.append(f'--tessdata-dir "{self.tessdata_dir}"')
        return " ".join(parts)

    async def recognize(self, image: Image.Image, languages: str = DEFAULT_LANGUAGES) -> str:
        log.debug("Running Tesseract (lang=%s, config=%s)", languages, self.tesseract_config)
        try:
            # image_to_string shells out to the tesseract binary and blocks.
            return await asyncio.to_thread(
                pytesseract.image_to_string,
                image,
                lang=languages,
                config=self.tesseract_config,
            )
        except pytesseract.TesseractNotFoundError as e:
            raise RecognitionError("Tesseract is not installed or not on PATH.") from e
        except pytesseract.TesseractError as e:
            raise RecognitionError(f"Tesseract failed: {e.message}") from e
