"""Post-processing for Thai/Latin OCR output.

Recognition engines trained on Thai routinely emit text that is correct
glyph-for-glyph but unpleasant to read: spaces between every Thai letter,
spaces before punctuation, invisible zero-width spaces, and long runs of
blank lines.  ``normalize_thai_text`` repairs these artifacts.

Rule order
----------
The rules run in a fixed order; later rules rely on earlier ones having
already collapsed spacing.

1. Thai de-spacing       ``ก า ข``        →  ``กาข``
2. Whitespace runs       ``a    b``       →  ``a  b``   (3+ → exactly two spaces)
3. Punctuation spacing   ``word  .``      →  ``word.``
4. Zero-width spaces     ``ab\\u200bcd``   →  ``abcd``
5. Trailing spaces       ``line   \\n``    →  ``line\\n``
6. Blank lines           ``\\n\\n\\n\\n``     →  ``\\n\\n``
7. Repetition marker     ``มาก ๆ``         →  ``มากๆ``
8. Trim

Removing a zero-width space can expose new matches for rules 1–3 (``ก \\u200b ข``),
so the whole sequence is repeated until the text stops changing.  Every rule
only ever shortens the text, which bounds the number of passes and makes the
result idempotent.
"""

import re
from typing import Callable, Optional

# Thai script block, including vowels, tone marks and ๆ
THAI = r"\u0e00-\u0e7f"
ZERO_WIDTH_SPACE = "\u200b"
THAI_REPETITION_MARK = "\u0e46"  # ๆ

# Shown by callers when normalisation leaves nothing behind ("no text found").
NO_TEXT_PLACEHOLDER = "(ไม่พบข้อความ)"


# ── Rules ──────────────────────────────────────────────────────────────────────

# Lookarounds leave both Thai glyphs unconsumed, so a chain such as
# "ก า ข ค" collapses in a single scan.
_THAI_GAP = re.compile(rf"(?<=[{THAI}])\s+(?=[{THAI}])")

# Horizontal whitespace only; line breaks are handled by the newline rules.
_WHITESPACE_RUN = re.compile(r"[^\S\r\n]{3,}")

_SPACE_BEFORE_PUNCT = re.compile(r"(?<=\S)\s+(?=[,.:;!?])")
_SPACES_AFTER_PUNCT = re.compile(r"(?<=[,.:;!?])[ \t]{2,}")
_TRAILING_SPACES = re.compile(r" +\n")
_BLANK_LINES = re.compile(r"\n{3,}")
# CRLF and bare CR line endings are folded to LF before the rules run.
_LINE_ENDING = re.compile(r"\r\n?")
_SPACE_BEFORE_REPETITION = re.compile(rf"\s+{THAI_REPETITION_MARK}")


def remove_thai_spacing(text: str) -> str:
    return _THAI_GAP.sub("", text)


def collapse_whitespace_runs(text: str) -> str:
    return _WHITESPACE_RUN.sub("  ", text)


def fix_punctuation_spacing(text: str) -> str:
    """Join punctuation to the preceding word and tighten the gap after it."""
    text = _SPACE_BEFORE_PUNCT.sub("", text)
    return _SPACES_AFTER_PUNCT.sub(" ", text)


def remove_zero_width_spaces(text: str) -> str:
    return text.replace(ZERO_WIDTH_SPACE, "")


def strip_trailing_spaces(text: str) -> str:
    return _TRAILING_SPACES.sub("\n", text)


def collapse_blank_lines(text: str) -> str:
    return _BLANK_LINES.sub("\n\n", text)


def join_repetition_mark(text: str) -> str:
    return _SPACE_BEFORE_REPETITION.sub(THAI_REPETITION_MARK, text)


NORMALIZATION_RULES: list[tuple[str, Callable[[str], str]]] = [
    ("thai_spacing", remove_thai_spacing),
    ("whitespace_runs", collapse_whitespace_runs),
    ("punctuation_spacing", fix_punctuation_spacing),
    ("zero_width_spaces", remove_zero_width_spaces),
    ("trailing_spaces", strip_trailing_spaces),
    ("blank_lines", collapse_blank_lines),
    ("repetition_mark", join_repetition_mark),
    ("trim", str.strip),
]


# ── Public API ─────────────────────────────────────────────────────────────────


def _apply_rules(text: str) -> str:
    for _, rule in NORMALIZATION_RULES:
        text = rule(text)
    return text


def normalize_thai_text(text: Optional[str]) -> str:
    """Clean raw OCR output into readable Thai/Latin prose.

    Empty or ``None`` input returns an empty string; substituting a
    "no text found" message is left to the caller (see ``NO_TEXT_PLACEHOLDER``).
    """
    if not text:
        return ""
    text = _LINE_ENDING.sub("\n", text)
    previous = None
    while text != previous:
        previous = text
        text = _apply_rules(text)
    return text
