"""Tests for videotools.duration."""

import pytest

from videotools.duration import parse_duration


class TestParseDuration:
    """Tests for parse_duration."""

    def test_minutes_seconds(self):
        """Test mm:ss."""
        assert parse_duration("1:05") == 65

    def test_hours_minutes_seconds(self):
        """Test hh:mm:ss."""
        assert parse_duration("1:01:05") == 3665

    def test_seconds_only(self):
        """Test a bare number of seconds."""
        assert parse_duration("30") == 30

    def test_empty_is_zero(self):
        """Test an empty string."""
        assert parse_duration("") == 0

    def test_none_is_zero(self):
        """Test None."""
        assert parse_duration(None) == 0

    @pytest.mark.parametrize("h,m,s", [(0, 0, 0), (2, 0, 1), (0, 59, 59), (10, 5, 7)])
    def test_general_formula(self, h, m, s):
        """Test h:m:s always equals h*3600 + m*60 + s."""
        assert parse_duration(f"{h}:{m}:{s}") == h * 3600 + m * 60 + s

    def test_zero_padded(self):
        """Test leading zeros."""
        assert parse_duration("00:00:15") == 15

    def test_segments_beyond_hours_ignored(self):
        """Test only the last three segments count."""
        assert parse_duration("9:1:00:05") == 3605

    def test_non_numeric_segment_is_zero(self):
        """Test bad segments count as 0 instead of raising."""
        assert parse_duration("abc") == 0
        assert parse_duration("x:30") == 30
        assert parse_duration("1:zz:10") == 3610

    def test_leading_digits_are_used(self):
        """Test a segment reads its leading integer."""
        assert parse_duration("12abc") == 12
        assert parse_duration("1.5") == 1
        assert parse_duration(" 7") == 7

    def test_negative_segments_clamp_to_zero(self):
        """Test the result is never negative."""
        assert parse_duration("-5") == 0
        assert parse_duration("1:-30") == 60

    def test_missing_segments(self):
        """Test empty segments count as 0."""
        assert parse_duration(":") == 0
        assert parse_duration("2:") == 120
