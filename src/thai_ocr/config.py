"""Configuration loading from environment variables and CLI flags."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from thai_ocr.preprocessing import DEFAULT_MAX_WIDTH, PreprocessingConfig


class Engine(str, Enum):
    TESSERACT = "tesseract"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


# Tesseract language-set identifier: Thai + Latin (English)
DEFAULT_LANGUAGES = "tha+eng"

DEFAULT_MODELS = {
    Engine.ANTHROPIC: "claude-sonnet-4-6",
    Engine.OPENAI: "gpt-4o",
}

ENV_KEYS = {
    Engine.ANTHROPIC: "ANTHROPIC_API_KEY",
    Engine.OPENAI: "OPENAI_API_KEY",
}

LANG_ENV = "THAI_OCR_LANG"
MAX_WIDTH_ENV = "THAI_OCR_MAX_WIDTH"


def _max_width_from_env() -> int:
    raw = os.environ.get(MAX_WIDTH_ENV, "").strip()
    if not raw:
        return DEFAULT_MAX_WIDTH
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{MAX_WIDTH_ENV} must be an integer, got {raw!r}.") from None


@dataclass
class Config:
    engine: Engine
    languages: str = DEFAULT_LANGUAGES
    max_width: int = DEFAULT_MAX_WIDTH
    model: Optional[str] = None
    api_key: Optional[str] = None
    tessdata_dir: Optional[str] = None

    @property
    def preprocessing(self) -> PreprocessingConfig:
        return PreprocessingConfig(max_width=self.max_width)

    @classmethod
    def from_env(
        cls,
        engine: Engine,
        model_override: Optional[str] = None,
        api_key_override: Optional[str] = None,
        languages: Optional[str] = None,
        max_width: Optional[int] = None,
        tessdata_dir: Optional[str] = None,
    ) -> "Config":
        languages = languages or os.environ.get(LANG_ENV) or DEFAULT_LANGUAGES
        if max_width is None:
            max_width = _max_width_from_env()
        if max_width <= 0:
            raise RuntimeError(f"Maximum width must be positive, got {max_width}.")

        if engine == Engine.TESSERACT:
            return cls(
                engine=engine,
                languages=languages,
                max_width=max_width,
                tessdata_dir=tessdata_dir,
            )

        model = model_override or DEFAULT_MODELS[engine]
        api_key = api_key_override or os.environ.get(ENV_KEYS[engine], "")
        if not api_key:
            raise RuntimeError(
                f"No API key for {engine.value}. "
                f"Set {ENV_KEYS[engine]} in your environment or .env file."
            )
        return cls(
            engine=engine,
            languages=languages,
            max_width=max_width,
            model=model,
            api_key=api_key,
        )
