"""Tests for the timing model: ramp-up, per-token delays, presets.

WHY: Timing is the reader's whole experience of pace. Off-by-one ramp
errors or banker's rounding would make the speed readout disagree with
the actual delay.

HOW: Exercises effective_wpm along the default ramp, token_delay_ms at
known values, the presets table, and total_duration_ms on small inputs.
"""

import pytest

from rsvp_reader import core
from rsvp_reader.core.models import ConfigError, SpeedConfig, Token
from rsvp_reader.core.timing import (
    DEFAULT_PRESET,
    SPEED_PRESETS,
    effective_wpm,
    get_preset,
    token_delay_ms,
    total_duration_ms,
)


class TestEffectiveWpm:
    def test_start_of_ramp(self, speed_config):
        assert effective_wpm(0, speed_config) == 200

    def test_end_of_ramp(self, speed_config):
        assert effective_wpm(30, speed_config) == 350

    def test_midpoint(self, speed_config):
        assert effective_wpm(15, speed_config) == 275

    def test_after_ramp(self, speed_config):
        assert effective_wpm(1000, speed_config) == 350

    def test_monotonic_during_ramp(self, speed_config):
        values = [effective_wpm(i, speed_config) for i in range(31)]
        assert values == sorted(values)

    def test_rounds_half_up(self):
        # 200 + 1 * 1/2 = 200.5 -> 201 (round() would give 200)
        config = SpeedConfig(start_wpm=200, target_wpm=201, ramp_up_words=2)
        assert effective_wpm(1, config) == 201

    def test_ramp_down(self):
        config = SpeedConfig(start_wpm=400, target_wpm=200, ramp_up_words=4)
        assert [effective_wpm(i, config) for i in range(5)] == [400, 350, 300, 250, 200]

    def test_single_word_ramp(self):
        config = SpeedConfig(start_wpm=100, target_wpm=500, ramp_up_words=1)
        assert effective_wpm(0, config) == 100
        assert effective_wpm(1, config) == 500


class TestTokenDelay:
    def test_plain_word(self):
        assert token_delay_ms(Token(word="word", focus_index=1), 300) == 200

    def test_sentence_end(self):
        token = Token(word="end.", focus_index=1, delay_multiplier=2.5)
        assert token_delay_ms(token, 300) == 500

    def test_rounding(self):
        # 60000 / 350 = 171.43
        assert token_delay_ms(Token(word="word", focus_index=1), 350) == 171

    def test_rounds_half_up(self):
        # 60000 / 24000 = 2.5 -> 3 (round() would give 2)
        assert token_delay_ms(Token(word="a", focus_index=0), 24000) == 3

    @pytest.mark.parametrize("wpm", [0, -1, -300])
    def test_rejects_non_positive_wpm(self, wpm):
        with pytest.raises(ConfigError):
            token_delay_ms(Token(word="word", focus_index=1), wpm)


class TestPresets:
    def test_table(self):
        assert SPEED_PRESETS == {
            "slow": (150, 250, 40),
            "normal": (200, 350, 30),
            "fast": (300, 500, 25),
            "speed": (400, 700, 20),
        }

    def test_get_preset(self):
        config = get_preset("fast")
        assert config.as_dict() == {
            "start_wpm": 300,
            "target_wpm": 500,
            "ramp_up_words": 25,
        }

    def test_case_insensitive(self):
        assert get_preset("SLOW").start_wpm == 150

    def test_fresh_instance_each_call(self):
        first = get_preset("normal")
        first.target_wpm = 999
        assert get_preset("normal").target_wpm == 350

    def test_unknown_preset_raises(self):
        with pytest.raises(ValueError, match="Unknown preset 'warp'"):
            get_preset("warp")

    def test_default_preset_is_normal(self):
        assert DEFAULT_PRESET == "normal"

    def test_no_shared_default_config(self):
        assert not hasattr(core, "DEFAULT_CONFIG")
        get_preset(DEFAULT_PRESET).start_wpm = 1
        assert get_preset(DEFAULT_PRESET).start_wpm == 200


class TestTotalDuration:
    def test_empty(self, speed_config):
        assert total_duration_ms([], speed_config) == 0

    def test_includes_ramp(self):
        config = SpeedConfig(start_wpm=100, target_wpm=200, ramp_up_words=1)
        tokens = [Token(word="a", focus_index=0)] * 3
        # 600 at 100 wpm, then 300 + 300 at 200 wpm
        assert total_duration_ms(tokens, config) == 1200
