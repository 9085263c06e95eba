"""Image preprocessing to improve Thai/Latin OCR quality.

Photographed documents arrive in every size and lighting condition.  The
pipeline turns them into a predictable raster for the recognition engine.
Pillow handles decoding and resampling; numpy does the per-pixel arithmetic.

Pipeline
--------
1. Resize            — shrink to at most ``max_width`` pixels wide, keeping
                       the aspect ratio.  Never upscales.  Bilinear
                       resampling avoids aliasing on fine Thai diacritics.

2. Grayscale luma    — ``floor(0.299 R + 0.587 G + 0.114 B)`` (ITU-R BT.601),
                       written back into all three colour channels.  Alpha is
                       left untouched.

3. Contrast stretch  — linear remap of the observed luma range onto 0–255, so
                       the darkest pixel becomes black and the brightest white.
                       No cutoff: every pixel counts when finding min / max.

Intentionally omitted
---------------------
* Deskewing, denoising, binarisation — out of scope; Tesseract does its own
  thresholding and handles the stretched grayscale well.
"""

import io
import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from thai_ocr.errors import DecodeError

log = logging.getLogger(__name__)

DEFAULT_MAX_WIDTH = 1600

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


@dataclass(frozen=True)
class PreprocessingConfig:
    max_width: int = DEFAULT_MAX_WIDTH

    def __post_init__(self) -> None:
        if isinstance(self.max_width, bool) or not isinstance(self.max_width, int):
            raise ValueError(f"max_width must be an integer, got {self.max_width!r}")
        if self.max_width <= 0:
            raise ValueError(f"max_width must be positive, got {self.max_width}")


# ── Helpers ────────────────────────────────────────────────────────────────────


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info


def _to_8bit(img: Image.Image) -> Image.Image:
    """Scale 16-bit grayscale (modes ``I;16*`` and ``I``) down to 8-bit ``L``.

    Pillow's own conversion clips values above 255 instead of scaling them.
    """
    if not (img.mode == "I" or img.mode.startswith("I;16")):
        return img
    values = np.clip(np.array(img).astype(np.int64), 0, 65535)
    return Image.fromarray((values >> 8).astype(np.uint8))


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; pixel sizes round .5 upwards.
    return int(math.floor(value + 0.5))


def _resize(img: Image.Image, max_width: int) -> Image.Image:
    ratio = min(1.0, max_width / img.width)
    if ratio >= 1.0:
        return img
    size = (
        max(1, _round_half_up(img.width * ratio)),
        max(1, _round_half_up(img.height * ratio)),
    )
    log.debug("Resizing %dx%d -> %dx%d", img.width, img.height, *size)
    return img.resize(size, Image.Resampling.BILINEAR)


def _luminance(pixels: np.ndarray) -> np.ndarray:
    """Return the integer BT.601 luma of an (H, W, 3|4) uint8 array."""
    wr, wg, wb = LUMA_WEIGHTS
    r = pixels[..., 0].astype(np.float64)
    g = pixels[..., 1].astype(np.float64)
    b = pixels[..., 2].astype(np.float64)
    return np.floor(r * wr + g * wg + b * wb).astype(np.int32)


def _stretch(luma: np.ndarray) -> np.ndarray:
    """Linearly remap *luma* so its observed min / max become 0 / 255.

    A perfectly uniform image has nothing to stretch and keeps its value.
    """
    # Pass 1: observed range
    lo = int(luma.min())
    hi = int(luma.max())
    log.debug("Luma range before stretch: %d..%d", lo, hi)
    if hi == lo:
        return luma.astype(np.uint8)

    # Pass 2: remap.  rint rounds half to even, like an 8-bit clamped buffer.
    span = max(1, hi - lo)
    stretched = (luma - lo) * 255 / span
    return np.clip(np.rint(stretched), 0, 255).astype(np.uint8)


# ── Public API ─────────────────────────────────────────────────────────────────


def load_image(image_bytes: bytes) -> Image.Image:
    """Decode encoded image bytes into an upright RGB or RGBA image.

    Raises:
        DecodeError: if Pillow cannot identify or read the data.
    """
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e

    # Phone photos are often stored sideways with an EXIF orientation tag.
    img = _to_8bit(ImageOps.exif_transpose(img))
    return img.convert("RGBA" if _has_alpha(img) else "RGB")


def preprocess(image: Image.Image, config: Optional[PreprocessingConfig] = None) -> Image.Image:
    """Resize, convert to grayscale luma and contrast-stretch *image*.

    The input image is never modified; a new RGB (or RGBA, when the input has
    an alpha channel) image is returned with the luma replicated across the
    colour channels.

    Raises:
        DecodeError: if the image has zero width or height.
    """
    config = config or PreprocessingConfig()
    width, height = image.size
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image has invalid dimensions {width}x{height}")

    working = _to_8bit(image)
    working = working.convert("RGBA" if _has_alpha(working) else "RGB")
    working = _resize(working, config.max_width)

    pixels = np.array(working, dtype=np.uint8)
    luma = _stretch(_luminance(pixels))
    pixels[..., 0] = luma
    pixels[..., 1] = luma
    pixels[..., 2] = luma

    return Image.fromarray(pixels)


def to_png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def preprocess_for_ocr(image_bytes: bytes, config: Optional[PreprocessingConfig] = None) -> bytes:
    """Run the standard preprocessing pipeline and return the result as PNG bytes."""
    return to_png_bytes(preprocess(load_image(image_bytes), config))
