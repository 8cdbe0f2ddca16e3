"""Text source registry: where reading material comes from.

WHY: The CLI and GUI need a single lookup from a file to the extractor
that can read it. A central dict makes adding a format a one-line change:
create the extractor class, import it here, add one entry.

HOW: EXTRACTORS maps source-type keys (see base.detect_source_type) to
extractor *classes*. extract_file() detects the type, instantiates the
extractor, and runs it.

RULES:
- Only plain text has a built-in extractor; PDF, DOCX, EPUB and OCR need
  an external integration and raise ExtractionError until one is registered
- Every extractor listed here must be importable without side effects
"""

from __future__ import annotations

from typing import Dict, Type

from rsvp_reader.sources.base import (
    SOURCE_TYPE_NAMES,
    BaseTextExtractor,
    BaseUrlExtractor,
    ExtractionError,
    ExtractionResult,
    PathLike,
    detect_source_type,
)
from rsvp_reader.sources.text import PlainTextExtractor

EXTRACTORS: Dict[str, Type[BaseTextExtractor]] = {
    "text": PlainTextExtractor,
}


def extract_file(path: PathLike) -> ExtractionResult:
    """Extract text from ``path`` with the registered extractor for its type.

    Raises:
        ExtractionError: If the type is unknown, has no extractor, or the
            extractor fails.
    """
    source_type = detect_source_type(path)
    if source_type is None:
        raise ExtractionError("Unsupported file type: {}".format(path))

    extractor_cls = EXTRACTORS.get(source_type)
    if extractor_cls is None:
        raise ExtractionError(
            "{} files are not supported by this build".format(
                SOURCE_TYPE_NAMES[source_type]
            )
        )
    return extractor_cls().extract(path)


__all__ = [
    "BaseTextExtractor",
    "BaseUrlExtractor",
    "EXTRACTORS",
    "ExtractionError",
    "ExtractionResult",
    "detect_source_type",
    "extract_file",
]
