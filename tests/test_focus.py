"""Tests for the focus-point calculator.

WHY: The focus character is what the reader's eye locks onto. If it
jumps to the wrong position, every word appears to wobble.

HOW: Checks the length table at every boundary, then the before/focus/after
split for ASCII, accented, CJK and emoji words.
"""

import pytest

from rsvp_reader.core.focus import focus_index, split_at_focus
from rsvp_reader.core.models import FocusSplit


class TestFocusIndex:
    """The length table: 0-1 -> 0, 2-5 -> 1, 6-9 -> 2, 10-13 -> 3, 14+ -> 4."""

    @pytest.mark.parametrize("length,expected", [
        (0, 0), (1, 0),
        (2, 1), (5, 1),
        (6, 2), (9, 2),
        (10, 3), (13, 3),
        (14, 4), (40, 4),
    ])
    def test_boundaries(self, length, expected):
        assert focus_index("x" * length) == expected

    def test_index_within_word(self):
        for length in range(1, 30):
            assert 0 <= focus_index("a" * length) <= length - 1

    def test_depends_only_on_length(self):
        assert focus_index("world") == focus_index("12345") == focus_index("!!!!!")

    def test_counts_codepoints(self):
        # 6 codepoints, 7+ bytes in UTF-8
        assert focus_index("cafés!") == 2


class TestSplitAtFocus:
    def test_simple_word(self):
        assert split_at_focus("reading") == FocusSplit("re", "a", "ding")

    def test_single_character(self):
        assert split_at_focus("I") == FocusSplit("", "I", "")

    def test_empty_word(self):
        assert split_at_focus("") == FocusSplit("", "", "")

    def test_parts_concatenate_to_word(self):
        for word in ["a", "to", "focus", "presentation", "incomprehensibilities"]:
            split = split_at_focus(word)
            assert split.before + split.focus + split.after == word
            assert len(split.focus) == 1

    def test_emoji_not_split(self):
        split = split_at_focus("\U0001f600\U0001f600\U0001f600")
        assert split.focus == "\U0001f600"
        assert split.before == "\U0001f600"

    def test_cjk(self):
        split = split_at_focus("你好世界")
        assert split == FocusSplit("你", "好", "世界")
