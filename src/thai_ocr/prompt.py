"""Transcription prompt shared by the vision-LLM engines."""

LANGUAGE_NAMES = {
    "tha": "Thai",
    "eng": "English",
}

THAI_DOCUMENT_PROMPT = """\
You are an expert OCR engine for photographed documents written in Thai \
and Latin script.

Transcribe the text in the provided image exactly as it appears.

### Rules
- Output plain text only: no markdown, no code fences, no commentary.
- Keep Thai words joined. Do not insert spaces between Thai letters, \
vowels or tone marks; only keep spaces that separate phrases in the document.
- Keep the Thai repetition mark ๆ attached to the word before it.
- Preserve Latin words, numbers (Thai or Arabic digits) and punctuation \
as written.
- Keep the original line breaks. Separate paragraphs with one blank line.
- If the image contains no legible text, return an empty response.
"""


def describe_languages(languages: str) -> str:
    """Turn a Tesseract-style identifier such as ``tha+eng`` into prose."""
    names = [LANGUAGE_NAMES.get(code, code) for code in languages.split("+") if code]
    if not names:
        return "Thai"
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + " and " + names[-1]


def build_instruction(languages: str) -> str:
    return f"Transcribe all text above. Expected languages: {describe_languages(languages)}."
