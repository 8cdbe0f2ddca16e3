"""Abstract text sources and the extraction result container.

WHY: Text reaches the reader from files (PDF, DOCX, EPUB, images via OCR,
plain text) and from web pages. Each source is a separate integration with
its own library, but the reader only ever needs plain text with blank-line
paragraph breaks. These base classes pin that contract down so the CLI
and GUI can treat every source the same way.

HOW: BaseTextExtractor turns a file path into an ExtractionResult.
BaseUrlExtractor turns a URL into (text, title). detect_source_type()
classifies a path by extension so callers can pick an extractor from the
registry in rsvp_reader.sources.

RULES:
- Extractors return plain text; paragraph breaks are blank lines
- Every failure surfaces as ExtractionError with a human-readable message
- Subclasses MUST implement ``name`` and ``extract()``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

PathLike = Union[str, Path]

# Extension -> source type
_EXTENSION_TYPES: Dict[str, str] = {
    ".pdf": "pdf",
    ".docx": "docx",
    ".epub": "epub",
    ".txt": "text",
    ".md": "text",
    ".png": "image",
    ".jpg": "image",
    ".jpeg": "image",
    ".gif": "image",
    ".webp": "image",
    ".bmp": "image",
}

SOURCE_TYPE_NAMES: Dict[str, str] = {
    "pdf": "PDF Document",
    "docx": "Word Document",
    "epub": "EPUB Book",
    "image": "Image (OCR)",
    "text": "Plain Text",
}


class ExtractionError(Exception):
    """Text could not be extracted from a source."""


@dataclass
class ExtractionResult:
    """Text extracted from one source.

    Attributes:
        text: Plain text, paragraphs separated by blank lines.
        source_type: One of the keys of SOURCE_TYPE_NAMES.
        source_name: File name or page title, for display.
        word_count: Number of words the tokenizer found in ``text``.
    """

    text: str
    source_type: str
    source_name: str
    word_count: int


def detect_source_type(path: PathLike) -> Optional[str]:
    """Classify ``path`` by extension, or return None if unsupported."""
    return _EXTENSION_TYPES.get(Path(path).suffix.lower())


class BaseTextExtractor(ABC):
    """Abstract base for file-to-text extractors.

    To add a new source format:
    1. Create a new file in sources/
    2. Subclass BaseTextExtractor
    3. Implement ``name`` and ``extract()``
    4. Register it in EXTRACTORS in sources/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source name, e.g. 'Plain Text'."""

    @abstractmethod
    def extract(self, path: PathLike) -> ExtractionResult:
        """Read ``path`` and return its text.

        Raises:
            ExtractionError: If the file cannot be read or parsed.
        """


class BaseUrlExtractor(ABC):
    """Abstract base for web article extractors."""

    @abstractmethod
    def extract(self, url: str) -> Tuple[str, str]:
        """Fetch ``url`` and return (article text, page title).

        Raises:
            ExtractionError: If the page cannot be fetched or has no article.
        """
