"""Shared fixtures for the test suite.

All fixtures here produce real files / real bytes so tests exercise actual
code paths rather than hand-crafted stubs.
"""

import io
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from click.testing import CliRunner
from PIL import Image


# ── CLI runner ─────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ── Image fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def png_bytes() -> bytes:
    """A real, valid 10×10 red PNG image as raw bytes."""
    buf = io.BytesIO()
    Image.new("RGB", (10, 10), color=(255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_file(tmp_path: Path, png_bytes: bytes) -> Path:
    """The PNG written to a temporary file on disk."""
    path = tmp_path / "test.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def wide_photo() -> Image.Image:
    """A 3200×2000 low-contrast RGB 'photo': dark ink band on grey paper."""
    img = Image.new("RGB", (3200, 2000), color=(180, 170, 160))
    img.paste((60, 50, 40), (400, 800, 2800, 1200))
    return img


# ── Engine fixtures ────────────────────────────────────────────────────────


RAW_THAI_OCR = "ที่   อยู่ :   กรุงเทพ\u200b\n\n\n\n"


@pytest.fixture
def raw_thai_ocr() -> str:
    """Typical Tesseract output for a Thai address line."""
    return RAW_THAI_OCR


@pytest.fixture
def mock_engine(raw_thai_ocr: str) -> MagicMock:
    engine = MagicMock()
    engine.recognize = AsyncMock(return_value=raw_thai_ocr)
    return engine
