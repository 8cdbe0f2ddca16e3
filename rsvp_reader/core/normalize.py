"""Text clean-up for extracted text before tokenization.

WHY: Text from PDF, OCR and web extraction arrives with typographic quotes,
zero-width characters, page numbers and other debris. Left in, these show
up as junk words in the middle of a reading session.

HOW: A set of small regex passes, each handling one class of artifact,
combined by normalize_text(). PDF and OCR passes are opt-in because they
are heuristics that can damage clean text.

RULES:
- Paragraph breaks (blank lines) survive normalization; the tokenizer
  relies on them.
- Nothing here raises; empty input returns "".
- normalize_text() is applied by extractors and the CLI, never implicitly
  by tokenize(), so dash pauses in clean text are preserved.
"""

import re

_SINGLE_QUOTES_RE = re.compile("[\u2018\u2019\u201a\u201b\u2032]")
_DOUBLE_QUOTES_RE = re.compile("[\u201c\u201d\u201e\u201f\u2033]")
_DASHES_RE = re.compile("[\u2013\u2014]")
_ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\ufeff]")

_PAGE_NUMBER_RE = re.compile(r"^\s*\d+\s*$", re.MULTILINE)
_PAGE_OF_RE = re.compile(r"^.{0,50}Page \d+ of \d+.{0,50}$", re.MULTILINE)
_SEPARATOR_RE = re.compile(r"-{5,}")
_BULLET_RE = re.compile("^[\u2022\u25e6\u25aa\u25b8\u25ba]\\s*", re.MULTILINE)


def normalize_quotes(text: str) -> str:
    """Convert typographic quotes and primes to ASCII quotes."""
    text = _SINGLE_QUOTES_RE.sub("'", text)
    return _DOUBLE_QUOTES_RE.sub('"', text)


def normalize_special_chars(text: str) -> str:
    """Flatten en/em dashes and ellipses, drop zero-width characters."""
    text = _DASHES_RE.sub("-", text)
    text = text.replace("…", "...")
    return _ZERO_WIDTH_RE.sub("", text)


def clean_pdf_artifacts(text: str) -> str:
    """Remove bare page numbers, "Page N of M" lines, rules and bullets."""
    text = _PAGE_NUMBER_RE.sub("", text)
    text = _PAGE_OF_RE.sub("", text)
    text = _SEPARATOR_RE.sub("", text)
    return _BULLET_RE.sub("", text)


def fix_ocr_errors(text: str) -> str:
    """Repair the most common OCR misreadings.

    A standalone "l" is almost always a misread "I", a standalone "rn" is
    a misread "m", and vertical bars are scanner noise.
    """
    text = re.sub(r"\bl\b", "I", text)
    text = re.sub(r"\brn\b", "m", text)
    return re.sub(r"[|¦]", "", text)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs while keeping paragraph breaks."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[^\S\n]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def normalize_text(text: str, is_ocr: bool = False, is_pdf: bool = False) -> str:
    """Run the full normalization pipeline.

    Args:
        text: Extracted text.
        is_ocr: Also apply OCR misreading fixes.
        is_pdf: Also strip PDF page furniture.

    Returns:
        Cleaned text with single spaces and blank-line paragraph breaks.
    """
    if not text:
        return ""

    result = normalize_quotes(text)
    result = normalize_special_chars(result)
    if is_pdf:
        result = clean_pdf_artifacts(result)
    if is_ocr:
        result = fix_ocr_errors(result)
    return normalize_whitespace(result)
