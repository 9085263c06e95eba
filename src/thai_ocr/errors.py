"""Exception types raised by the OCR pipeline."""


class OCRError(Exception):
    """Base class for all pipeline errors."""


class DecodeError(OCRError):
    """The input image could not be decoded or has no pixels."""


class RecognitionError(OCRError):
    """The recognition engine failed to produce text."""
