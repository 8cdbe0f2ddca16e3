"""Plain text file extractor (.txt, .md).

WHY: Plain text is the one source that needs no third-party parser, so it
ships built in and keeps the CLI and GUI useful on their own.

HOW: Reads the file as UTF-8 (undecodable bytes replaced), runs the
normalization pipeline, and counts words with the tokenizer.

RULES:
- Only extensions in SUPPORTED_TEXT_FORMATS are accepted
- Missing or unreadable files raise ExtractionError, never OSError
- An empty file is not an error; it yields empty text and 0 words
"""

from __future__ import annotations

import logging
from pathlib import Path

from rsvp_reader.config import SUPPORTED_TEXT_FORMATS
from rsvp_reader.core.normalize import normalize_text
from rsvp_reader.core.tokenizer import tokenize, word_count
from rsvp_reader.sources.base import (
    BaseTextExtractor,
    ExtractionError,
    ExtractionResult,
    PathLike,
)

logger = logging.getLogger(__name__)


class PlainTextExtractor(BaseTextExtractor):
    """Read .txt and .md files."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def extract(self, path: PathLike) -> ExtractionResult:
        file_path = Path(path)
        if file_path.suffix.lower() not in SUPPORTED_TEXT_FORMATS:
            raise ExtractionError(
                "Unsupported text file '{}'. Supported: {}".format(
                    file_path.name, ", ".join(sorted(SUPPORTED_TEXT_FORMATS))
                )
            )

        try:
            raw = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ExtractionError(
                "Could not read {}: {}".format(file_path, e)
            ) from e

        text = normalize_text(raw)
        words = word_count(tokenize(text))
        logger.info("Extracted %d words from %s", words, file_path.name)

        return ExtractionResult(
            text=text,
            source_type="text",
            source_name=file_path.name,
            word_count=words,
        )
