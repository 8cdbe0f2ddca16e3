"""Reading-preparation analysis payloads from an external text-analysis service.

WHY: An analysis service (an LLM behind an HTTP endpoint) can prime the
reader with a summary, key themes, a glossary, and a suggested pace. The
reader consumes only the JSON it returns; the payload must be checked
before any of it reaches the UI or the speed settings.

HOW: ANALYSIS_SCHEMA describes the payload; parse_analysis() validates it
with jsonschema and builds a TextAnalysis with defaults for missing
fields. apply_recommended_wpm() writes the suggestion into a SpeedConfig
through its normal validation. prepare_analysis_text() truncates long
texts before they are sent.

RULES:
- Payload keys are camelCase, as the service emits them
- Missing fields get defaults; wrongly typed fields raise AnalysisError
- recommendedWPM is an ordinary number: a non-positive value is rejected
  by SpeedConfig when applied, not clamped
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

import jsonschema

from rsvp_reader.config import ANALYSIS_MAX_CHARS, DEFAULT_RECOMMENDED_WPM
from rsvp_reader.core.models import SpeedConfig

logger = logging.getLogger(__name__)

DIFFICULTY_LEVELS = ("easy", "moderate", "challenging", "dense")

ANALYSIS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {"type": ["string", "null"]},
        "keyThemes": {
            "type": ["array", "null"],
            "items": {"type": "string"},
        },
        "glossary": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "required": ["term", "definition"],
                "properties": {
                    "term": {"type": "string"},
                    "definition": {"type": "string"},
                },
            },
        },
        "difficulty": {"enum": list(DIFFICULTY_LEVELS) + [None]},
        "difficultyExplanation": {"type": ["string", "null"]},
        "recommendedWPM": {"type": ["integer", "null"]},
    },
}

_TRUNCATION_MARKER = "...[truncated]"


class AnalysisError(ValueError):
    """The analysis payload is not valid JSON or does not match the schema."""


@dataclass
class GlossaryEntry:
    term: str
    definition: str


@dataclass
class TextAnalysis:
    """Preparation material for one text.

    Attributes:
        summary: Two or three sentences priming the reader.
        key_themes: Concepts the reader will meet.
        glossary: Unfamiliar terms with short definitions.
        difficulty: One of DIFFICULTY_LEVELS.
        difficulty_explanation: Why the text got that rating.
        recommended_wpm: Suggested target pace.
    """

    summary: str = "Summary not available"
    key_themes: List[str] = field(default_factory=list)
    glossary: List[GlossaryEntry] = field(default_factory=list)
    difficulty: str = "moderate"
    difficulty_explanation: str = ""
    recommended_wpm: int = DEFAULT_RECOMMENDED_WPM


def prepare_analysis_text(text: str, max_chars: int = ANALYSIS_MAX_CHARS) -> str:
    """Truncate ``text`` to ``max_chars`` characters, marking the cut."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + _TRUNCATION_MARKER


def parse_analysis(payload: Union[str, bytes, Dict[str, Any]]) -> TextAnalysis:
    """Validate an analysis payload and build a TextAnalysis.

    Args:
        payload: The service response, raw JSON or already decoded.

    Returns:
        TextAnalysis with defaults for absent or null fields.

    Raises:
        AnalysisError: If the payload is not JSON or fails schema validation.
    """
    if isinstance(payload, (str, bytes)):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise AnalysisError("Analysis response is not valid JSON: {}".format(e)) from e
    else:
        data = payload

    try:
        jsonschema.validate(instance=data, schema=ANALYSIS_SCHEMA)
    except jsonschema.ValidationError as e:
        raise AnalysisError("Invalid analysis response: {}".format(e.message)) from e

    defaults = TextAnalysis()
    glossary = [
        GlossaryEntry(term=entry["term"], definition=entry["definition"])
        for entry in data.get("glossary") or []
    ]
    recommended = data.get("recommendedWPM")
    if recommended is not None:
        # jsonschema counts 300.0 as an integer
        recommended = int(recommended)

    return TextAnalysis(
        summary=data.get("summary") or defaults.summary,
        key_themes=list(data.get("keyThemes") or []),
        glossary=glossary,
        difficulty=data.get("difficulty") or defaults.difficulty,
        difficulty_explanation=data.get("difficultyExplanation") or "",
        recommended_wpm=recommended if recommended is not None else defaults.recommended_wpm,
    )


def apply_recommended_wpm(config: SpeedConfig, analysis: TextAnalysis) -> None:
    """Use the analysis' suggested pace as the target WPM.

    Raises:
        ConfigError: If the suggestion is not a positive integer.
    """
    config.target_wpm = analysis.recommended_wpm
    logger.info("Target pace set to %d wpm from analysis", analysis.recommended_wpm)
