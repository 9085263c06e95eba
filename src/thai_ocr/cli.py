"""Main CLI entry point."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from thai_ocr.config import Config, Engine
from thai_ocr.engines.anthropic import AnthropicEngine
from thai_ocr.engines.base import BaseEngine
from thai_ocr.engines.openai import OpenAIEngine
from thai_ocr.engines.tesseract import TesseractEngine
from thai_ocr.errors import OCRError
from thai_ocr.pipeline import run_ocr
from thai_ocr.postprocessing import NO_TEXT_PLACEHOLDER

console = Console(stderr=True)
load_dotenv()

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp", ".tif", ".tiff"}


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--engine", "-e",
    type=click.Choice([e.value for e in Engine], case_sensitive=False),
    default=Engine.TESSERACT.value,
    show_default=True,
    help="Recognition engine to use.",
)
@click.option(
    "--lang", "-l", "languages",
    default=None,
    help="Language set in Tesseract notation. Defaults to $THAI_OCR_LANG or tha+eng.",
)
@click.option(
    "--model", "-m",
    default=None,
    help="Model name override for the LLM engines.",
)
@click.option(
    "--api-key",
    default=None,
    help="API key for the LLM engines (overrides environment variable).",
)
@click.option(
    "--max-width",
    type=click.IntRange(min=1),
    default=None,
    help="Shrink images wider than this before OCR. Defaults to $THAI_OCR_MAX_WIDTH or 1600.",
)
@click.option(
    "--tessdata-dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory holding Tesseract traineddata files.",
)
@click.option(
    "--preprocess/--no-preprocess",
    default=True,
    show_default=True,
    help="Resize, convert to grayscale and stretch contrast before OCR.",
)
@click.option(
    "--raw",
    is_flag=True,
    default=False,
    help="Print the engine output without Thai text clean-up.",
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path. Defaults to stdout.",
)
@click.option(
    "--save-preprocessed",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write the image sent to the engine to this PNG file.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging.")
@click.version_option()
def main(
    input_path, engine, languages, model, api_key, max_width, tessdata_dir,
    preprocess, raw, output, save_preprocessed, verbose,
):
    """OCR a photographed Thai/English document.

    INPUT_PATH can be a .png, .jpg, .jpeg, .webp, .gif, .bmp or .tiff file.
    Results are written to stdout unless --output is specified.
    """
    _configure_logging(verbose)

    try:
        config = Config.from_env(
            engine=Engine(engine.lower()),
            model_override=model,
            api_key_override=api_key,
            languages=languages,
            max_width=max_width,
            tessdata_dir=tessdata_dir,
        )
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    suffix = input_path.suffix.lower()
    if suffix not in IMAGE_EXTENSIONS:
        console.print(f"[red]Unsupported file type:[/red] {suffix}")
        sys.exit(1)

    engine_obj = _build_engine(config)

    try:
        with console.status(f"[cyan]Running OCR via {config.engine.value} ({config.languages})..."):
            result = asyncio.run(
                run_ocr(
                    input_path.read_bytes(),
                    engine_obj,
                    languages=config.languages,
                    preprocessing=config.preprocessing,
                    preprocess_image=preprocess,
                    normalize=not raw,
                )
            )
    except OCRError as e:
        console.print(f"[red]OCR failed:[/red] {e}")
        sys.exit(1)

    text = result.text or NO_TEXT_PLACEHOLDER

    try:
        if save_preprocessed:
            result.image.save(save_preprocessed, format="PNG")
            console.print(f"[dim]Preprocessed image written to {save_preprocessed}[/dim]")

        if output:
            output.write_text(text, encoding="utf-8")
            console.print(f"[green]Written to {output}[/green]")
        else:
            click.echo(text)
    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_engine(config: Config) -> BaseEngine:
    if config.engine == Engine.TESSERACT:
        return TesseractEngine(tessdata_dir=config.tessdata_dir)
    elif config.engine == Engine.ANTHROPIC:
        return AnthropicEngine(api_key=config.api_key, model=config.model)
    elif config.engine == Engine.OPENAI:
        return OpenAIEngine(api_key=config.api_key, model=config.model)
    else:
        raise ValueError(f"Unknown engine: {config.engine}")
