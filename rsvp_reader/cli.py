"""Command-line interface and terminal player for RSVP Reader.

WHY: The quickest way to speed-read a text file is straight from the
terminal, without opening a window. The CLI also reports word counts and
reading-time estimates so users can plan a session.

HOW: Uses argparse to accept an input file (or "-" for stdin), a speed
preset with optional per-field overrides, and a start position. Text is
loaded through the source registry, tokenized by the controller, and
played with a BlockingScheduler that runs on the main thread. A
TerminalRenderer listener redraws one line per word, keeping the focus
character in a fixed column.

RULES:
- Positional argument: input file path, or "-" (default) for stdin
- --stats prints counts and estimates to stdout and exits without playing
- --analysis PAYLOAD.json applies the service's recommended pace before
  any --target-wpm override; --stats also prints its summary, themes and
  glossary
- --analysis-input prints the text as it is sent to the analysis service
- Status messages go to stderr; the word line goes to stdout
- Errors print "Error: ..." to stderr and exit 1
- Ctrl-C pauses playback and exits 130
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from rsvp_reader.config import load_speed_config
from rsvp_reader.core.focus import split_at_focus
from rsvp_reader.core.models import PlaybackState, SpeedConfig, Token
from rsvp_reader.core.normalize import normalize_text
from rsvp_reader.core.timing import SPEED_PRESETS, total_duration_ms
from rsvp_reader.core.tokenizer import estimate_reading_time, tokenize, word_count
from rsvp_reader.playback.controller import PlaybackController
from rsvp_reader.playback.scheduler import BlockingScheduler
from rsvp_reader.sources import ExtractionError, extract_file
from rsvp_reader.sources.analysis import (
    AnalysisError,
    TextAnalysis,
    apply_recommended_wpm,
    parse_analysis,
    prepare_analysis_text,
)

logger = logging.getLogger(__name__)

# Column (0-based) where the focus character is drawn
FOCUS_COLUMN = 10

_HIGHLIGHT = "\x1b[1;31m"
_RESET = "\x1b[0m"
_CLEAR_LINE = "\r\x1b[K"


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not interleave with the word line on stdout.
    """
    print(msg, file=sys.stderr, flush=True)


def format_word(token: Token, color: bool = True, column: int = FOCUS_COLUMN) -> str:
    """Lay out a word so its focus character lands in ``column``.

    WHY: Keeping the focus character still is what lets the eye stay put.
    The text before it is right-aligned against the column, the text after
    it runs to the right.

    Args:
        token: Token to draw.
        color: Wrap the focus character in ANSI bold red.
        column: Target column for the focus character.

    Returns:
        The padded word, without a trailing newline.
    """
    split = split_at_focus(token.word)
    padding = " " * max(0, column - len(split.before))
    focus = split.focus
    if color and focus:
        focus = "{}{}{}".format(_HIGHLIGHT, focus, _RESET)
    return "{}{}{}{}".format(padding, split.before, focus, split.after)


class TerminalRenderer:
    """PlaybackState listener that redraws a single terminal line.

    RULES:
    - Each state replaces the previous line (carriage return + clear)
    - The line shows the word, the effective pace, and percent complete
    - Nothing is drawn for an empty text
    """

    def __init__(self, stream: TextIO, total: int, color: bool = True) -> None:
        self._stream = stream
        self._total = total
        self._color = color

    def render(self, state: PlaybackState) -> str:
        if state.current_token is None:
            return ""
        word = format_word(state.current_token, color=self._color)
        return "{:<40} {:>4} wpm  {:>3}%  ({}/{})".format(
            word,
            state.current_wpm,
            round(state.progress * 100),
            state.current_index + 1,
            self._total,
        )

    def __call__(self, state: PlaybackState) -> None:
        line = self.render(state)
        if not line:
            return
        self._stream.write(_CLEAR_LINE + line)
        self._stream.flush()


def _read_input(input_path: str, normalize: bool) -> str:
    if input_path == "-":
        raw = sys.stdin.read()
        return normalize_text(raw) if normalize else raw
    return extract_file(input_path).text


def _load_analysis(path: Optional[str]) -> Optional[TextAnalysis]:
    if path is None:
        return None
    try:
        payload = Path(path).read_bytes()
    except OSError as e:
        raise AnalysisError("Could not read analysis file {}: {}".format(path, e)) from e
    return parse_analysis(payload)


def _build_config(
    args: argparse.Namespace, analysis: Optional[TextAnalysis] = None
) -> SpeedConfig:
    config = load_speed_config(args.preset)
    if analysis is not None:
        apply_recommended_wpm(config, analysis)
    overrides = {
        name: value
        for name, value in (
            ("start_wpm", args.start_wpm),
            ("target_wpm", args.target_wpm),
            ("ramp_up_words", args.ramp_up_words),
        )
        if value is not None
    }
    if overrides:
        config.replace(**overrides)
    return config


def _print_stats(tokens: List[Token], config: SpeedConfig) -> None:
    minutes = estimate_reading_time(tokens, config.target_wpm)
    seconds = total_duration_ms(tokens, config) / 1000.0
    print("Words: {}".format(word_count(tokens)))
    print("Estimated reading time: ~{} min at {} wpm".format(minutes, config.target_wpm))
    print("Playback duration with ramp-up: {:.1f} s".format(seconds))
    print("Sentences: {}".format(sum(1 for t in tokens if t.is_end_of_sentence)))
    print("Paragraphs: {}".format(sum(1 for t in tokens if t.is_end_of_paragraph) + 1))


def _print_analysis(analysis: TextAnalysis) -> None:
    print()
    print("Summary: {}".format(analysis.summary))
    difficulty = analysis.difficulty
    if analysis.difficulty_explanation:
        difficulty = "{} ({})".format(difficulty, analysis.difficulty_explanation)
    print("Difficulty: {}".format(difficulty))
    print("Recommended pace: {} wpm".format(analysis.recommended_wpm))
    if analysis.key_themes:
        print("Key themes: {}".format(", ".join(analysis.key_themes)))
    if analysis.glossary:
        print("Glossary:")
        for entry in analysis.glossary:
            print("  {}: {}".format(entry.term, entry.definition))


def _play(text: str, config: SpeedConfig, start_at: int, color: bool) -> int:
    scheduler = BlockingScheduler()
    controller = PlaybackController(text, config=config, scheduler=scheduler)
    renderer = TerminalRenderer(sys.stdout, controller.total, color=color)
    controller.add_listener(renderer)
    logger.debug("Terminal playback of %d words with %r", controller.total, config.as_dict())

    if start_at:
        controller.seek_to(start_at)

    _status("Reading {} words ({} -> {} wpm over {} words). Ctrl-C to stop.".format(
        controller.total, config.start_wpm, config.target_wpm, config.ramp_up_words
    ))
    controller.play()
    try:
        scheduler.run()
    except KeyboardInterrupt:
        controller.pause()
        sys.stdout.write("\n")
        _status("Stopped at word {} of {}.".format(
            controller.state.current_index + 1, controller.total
        ))
        return 130

    sys.stdout.write("\n")
    _status("Done.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable; tests can inspect the parser without playing anything.
    """
    parser = argparse.ArgumentParser(
        prog="rsvp_reader",
        description="Speed-read a text file one word at a time in the terminal.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        default="-",
        help="Text file to read (.txt, .md), or '-' for stdin (default).",
    )

    parser.add_argument(
        "--preset",
        default=None,
        choices=sorted(SPEED_PRESETS.keys()),
        help="Speed preset (default: RSVP_PRESET or 'normal').",
    )

    parser.add_argument(
        "--start-wpm",
        type=int,
        default=None,
        help="Override the starting pace of the ramp.",
    )

    parser.add_argument(
        "--target-wpm",
        type=int,
        default=None,
        help="Override the pace reached after the ramp.",
    )

    parser.add_argument(
        "--ramp-up-words",
        type=int,
        default=None,
        help="Override how many words the ramp lasts.",
    )

    parser.add_argument(
        "--start-at",
        type=int,
        default=0,
        help="Word index to start from (clamped to the text).",
    )

    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Clean up quotes, dashes and whitespace in stdin input.",
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print word count and reading-time estimates, then exit.",
    )

    parser.add_argument(
        "--analysis",
        metavar="PAYLOAD.json",
        default=None,
        help="Analysis service response; its recommended pace becomes the target.",
    )

    parser.add_argument(
        "--analysis-input",
        action="store_true",
        help="Print the text to send to the analysis service, then exit.",
    )

    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Do not highlight the focus character.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log playback transitions to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        analysis = _load_analysis(args.analysis)
        config = _build_config(args, analysis)
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    try:
        text = _read_input(args.input_file, args.normalize)
    except ExtractionError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    tokens = tokenize(text)
    if not tokens:
        print("Error: No words found in input", file=sys.stderr)
        sys.exit(1)

    if args.analysis_input:
        print(prepare_analysis_text(text))
        sys.exit(0)

    if args.stats:
        _print_stats(tokens, config)
        if analysis is not None:
            _print_analysis(analysis)
        sys.exit(0)

    if analysis is not None:
        _status("Summary: {}".format(analysis.summary))

    sys.exit(_play(text, config, args.start_at, args.color))


if __name__ == "__main__":
    main()
