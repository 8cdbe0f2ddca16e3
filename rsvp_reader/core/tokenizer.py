"""Text tokenizer: raw text to an ordered list of timed display tokens.

WHY: RSVP shows one word at a time, so the whole reading experience rests
on how text is cut into words and how long each word stays on screen.
Sentence ends, clause breaks, long words and paragraph boundaries all need
extra time or comprehension collapses.

HOW: Four passes over the text:
  1. Normalise line endings and protect punctuation inside numbers and
     capital-letter abbreviations (1,234 / 3.14 / U.S) with private-use
     markers.
  2. Split into paragraphs on blank lines, then into words on whitespace.
  3. Restore the protected punctuation in each word.
  4. Annotate each word with its focus index, delay multiplier and
     sentence/paragraph flags.

RULES:
- Never raises: empty or whitespace-only text yields [].
- Output order is reading order (paragraph, then word) and is never changed.
- Delay rules run in a fixed order: trailing punctuation, length,
  hyphenation, then URL override. A URL is always exactly 3.0.
- The last word of each paragraph except the final one gets
  delay_multiplier >= 2.0 and is_end_of_paragraph=True. The final word of
  the text is never flagged as a paragraph end.
"""

from __future__ import annotations

import math
import re
from typing import List, Optional

from rsvp_reader.core.focus import focus_index
from rsvp_reader.core.models import ConfigError, Token

# Trailing-character pause classes
_SENTENCE_END = frozenset(".!?")
_CLAUSE_BREAK = frozenset(";:—–")
_COMMA = frozenset(",")

_SENTENCE_MULTIPLIER = 2.5
_CLAUSE_MULTIPLIER = 1.8
_COMMA_MULTIPLIER = 1.3
_VERY_LONG_WORD_MULTIPLIER = 1.3   # more than 12 codepoints
_LONG_WORD_MULTIPLIER = 1.15       # more than 8 codepoints
_HYPHENATED_MULTIPLIER = 1.15
_URL_MULTIPLIER = 3.0
_PARAGRAPH_END_MIN_MULTIPLIER = 2.0

_URL_RE = re.compile(r"https?://\S+", re.IGNORECASE)
_HYPHENATED_RE = re.compile(r"\w+(?:-\w+)+")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")

# Private-use codepoints: never whitespace, never present in real text
_COMMA_MARK = "\ue000"
_DECIMAL_MARK = "\ue001"
_ABBREV_MARK = "\ue002"

_DIGIT_COMMA_RE = re.compile(r"(\d),(\d)")
_DIGIT_DOT_RE = re.compile(r"(\d)\.(\d)")
_ABBREV_DOT_RE = re.compile(r"([A-Z])\.([A-Z])")


def _protect(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _DIGIT_COMMA_RE.sub(r"\1" + _COMMA_MARK + r"\2", text)
    text = _DIGIT_DOT_RE.sub(r"\1" + _DECIMAL_MARK + r"\2", text)
    text = _ABBREV_DOT_RE.sub(r"\1" + _ABBREV_MARK + r"\2", text)
    return text


def _restore(word: str) -> str:
    return (
        word.replace(_COMMA_MARK, ",")
        .replace(_DECIMAL_MARK, ".")
        .replace(_ABBREV_MARK, ".")
    )


def delay_multiplier(word: str) -> float:
    """Compute how much longer than a plain word ``word`` should be shown.

    WHY: Punctuation marks natural pauses in reading; long and compound
    words take longer to recognise; URLs are nearly unreadable at speed.

    HOW: Starts from a base chosen by the trailing character, scales it by
    word length and hyphenation, then lets the URL rule replace the result.

    RULES:
    - Trailing . ! ? -> 2.5; ; : — – -> 1.8; , -> 1.3; otherwise 1.0
    - More than 12 codepoints -> x1.3; otherwise more than 8 -> x1.15
    - Hyphen-joined compound (word-word[-word...]) -> x1.15
    - Whole word is http(s)://... -> exactly 3.0, regardless of the above
    """
    last_char = word[-1:]
    if last_char in _SENTENCE_END:
        multiplier = _SENTENCE_MULTIPLIER
    elif last_char in _CLAUSE_BREAK:
        multiplier = _CLAUSE_MULTIPLIER
    elif last_char in _COMMA:
        multiplier = _COMMA_MULTIPLIER
    else:
        multiplier = 1.0

    length = len(word)
    if length > 12:
        multiplier *= _VERY_LONG_WORD_MULTIPLIER
    elif length > 8:
        multiplier *= _LONG_WORD_MULTIPLIER

    if _HYPHENATED_RE.fullmatch(word):
        multiplier *= _HYPHENATED_MULTIPLIER

    if _URL_RE.fullmatch(word):
        multiplier = _URL_MULTIPLIER

    return multiplier


def tokenize(text: Optional[str]) -> List[Token]:
    """Tokenize text into display tokens with timing metadata.

    Args:
        text: Raw text, optionally with blank-line paragraph separators.

    Returns:
        Tokens in reading order; empty if the text has no words.
    """
    if not text or not text.strip():
        return []

    paragraphs = [
        p.strip() for p in _PARAGRAPH_SPLIT_RE.split(_protect(text))
    ]
    paragraphs = [p for p in paragraphs if p]

    tokens: List[Token] = []
    last_paragraph = len(paragraphs) - 1

    for p_idx, paragraph in enumerate(paragraphs):
        words = paragraph.split()
        last_word = len(words) - 1

        for w_idx, raw_word in enumerate(words):
            word = _restore(raw_word)
            is_paragraph_end = w_idx == last_word and p_idx != last_paragraph

            multiplier = delay_multiplier(word)
            if is_paragraph_end:
                multiplier = max(multiplier, _PARAGRAPH_END_MIN_MULTIPLIER)

            tokens.append(Token(
                word=word,
                focus_index=focus_index(word),
                delay_multiplier=multiplier,
                is_end_of_sentence=word[-1:] in _SENTENCE_END,
                is_end_of_paragraph=is_paragraph_end,
            ))

    return tokens


def word_count(tokens: List[Token]) -> int:
    """Number of words in a token sequence."""
    return len(tokens)


def estimate_reading_time(tokens: List[Token], wpm: int) -> int:
    """Estimate whole minutes needed to read ``tokens`` at a flat ``wpm``.

    The average delay multiplier slows the nominal pace down, so a text
    dense with punctuation takes longer than its word count suggests.
    Ramp-up is ignored; timing.total_duration_ms gives the exact figure.

    Raises:
        ConfigError: If ``wpm`` is not positive.
    """
    if wpm <= 0:
        raise ConfigError("wpm must be positive, got {}".format(wpm))
    if not tokens:
        return 0

    average_multiplier = sum(t.delay_multiplier for t in tokens) / len(tokens)
    effective = wpm / average_multiplier
    return math.ceil(len(tokens) / effective)

