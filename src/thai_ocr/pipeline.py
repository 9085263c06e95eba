"""End-to-end OCR request: decode → preprocess → recognise → normalise."""

import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from thai_ocr.config import DEFAULT_LANGUAGES
from thai_ocr.engines.base import BaseEngine
from thai_ocr.postprocessing import normalize_thai_text
from thai_ocr.preprocessing import PreprocessingConfig, load_image, preprocess

log = logging.getLogger(__name__)


@dataclass
class OCRResult:
    text: str
    raw_text: str
    image: Image.Image  # the raster the engine actually saw


async def run_ocr(
    image_bytes: bytes,
    engine: BaseEngine,
    languages: str = DEFAULT_LANGUAGES,
    preprocessing: Optional[PreprocessingConfig] = None,
    preprocess_image: bool = True,
    normalize: bool = True,
) -> OCRResult:
    """Run one recognition request.

    ``DecodeError`` and ``RecognitionError`` propagate unchanged; turning them
    into user-facing messages is the caller's job.
    """
    image = load_image(image_bytes)
    log.info("Decoded %dx%d %s image", image.width, image.height, image.mode)

    if preprocess_image:
        image = preprocess(image, preprocessing)
        log.info("Preprocessed to %dx%d", image.width, image.height)

    raw_text = await engine.recognize(image, languages)
    log.info("Engine returned %d characters", len(raw_text))

    text = normalize_thai_text(raw_text) if normalize else raw_text
    return OCRResult(text=text, raw_text=raw_text, image=image)
