"""Tests for caption timecode parsing.

WHY: The timecode parser is the only piece of real logic between the
user's caption and the ffmpeg call. It must find the first start:end
pair, treat both numbers as seconds, and reject backwards ranges.

RULES:
- Both numbers are seconds ("0:40" → 0s..40s), never minutes:seconds
- No pair → None; invalid pair → TimecodeFormatError
"""

from __future__ import annotations

import pytest

from voicenote_converter.core.errors import ErrorKind, TimecodeFormatError
from voicenote_converter.core.timecodes import (
    TrimRange,
    extract_trim_range,
    parse_timecodes,
)


class TestParseTimecodesMatches:
    """Texts that contain a valid range."""

    def test_sentence_with_range(self):
        assert parse_timecodes("skip to 0:40 please") == TrimRange(start=0, end=40)

    def test_bare_range(self):
        assert parse_timecodes("10:25") == TrimRange(start=10, end=25)

    def test_whitespace_around_colon(self):
        assert parse_timecodes("12 : 345") == TrimRange(start=12, end=345)

    def test_four_digit_numbers(self):
        assert parse_timecodes("1000:9999") == TrimRange(start=1000, end=9999)

    def test_numbers_are_seconds_not_minutes(self):
        trim = parse_timecodes("1:30")
        assert trim.start == 1
        assert trim.end == 30
        assert trim.duration == 29

    def test_only_first_pair_is_used(self):
        assert parse_timecodes("5:10 and then 20:30") == TrimRange(start=5, end=10)

    def test_leading_zeros(self):
        assert parse_timecodes("00:05") == TrimRange(start=0, end=5)

    def test_range_at_end_of_text(self):
        assert parse_timecodes("cut it 3:9") == TrimRange(start=3, end=9)


class TestParseTimecodesNoMatch:
    """Texts without a qualifying pair return None."""

    @pytest.mark.parametrize("text", [None, "", "just a song", "track 12", "a:b", "10 - 20"])
    def test_returns_none(self, text):
        assert parse_timecodes(text) is None

    def test_five_digit_run_does_not_match(self):
        assert parse_timecodes("12345:6") is None

    def test_digit_run_on_right_does_not_match(self):
        assert parse_timecodes("1:23456") is None


class TestParseTimecodesInvalid:
    """Backwards or empty ranges raise TimecodeFormatError."""

    def test_end_before_start(self):
        with pytest.raises(TimecodeFormatError) as exc_info:
            parse_timecodes("40:10")
        assert exc_info.value.message == "end must exceed start"

    def test_end_equals_start(self):
        with pytest.raises(TimecodeFormatError):
            parse_timecodes("5:5")

    def test_error_kind_is_timecode_format(self):
        with pytest.raises(TimecodeFormatError) as exc_info:
            parse_timecodes("from 9:3")
        assert exc_info.value.kind is ErrorKind.TIMECODE_FORMAT


class TestTrimRange:
    def test_duration(self):
        assert TrimRange(start=5, end=12).duration == 7

    def test_open_ended_duration_is_none(self):
        assert TrimRange(start=5).duration is None


class TestExtractTrimRange:
    """Caption is preferred over message text."""

    def test_uses_caption(self):
        assert extract_trim_range("0:40", "5:10") == TrimRange(start=0, end=40)

    def test_falls_back_to_text(self):
        assert extract_trim_range(None, "5:10") == TrimRange(start=5, end=10)

    def test_empty_caption_falls_back_to_text(self):
        assert extract_trim_range("", "5:10") == TrimRange(start=5, end=10)

    def test_nothing_present(self):
        assert extract_trim_range(None, None) is None
