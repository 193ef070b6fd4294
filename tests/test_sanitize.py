"""Tests for videotools.sanitize."""

import os

import pytest

from videotools.sanitize import (
    escape_concat_path,
    escape_filter_value,
    quote_command,
    require_file,
)


class TestEscapeFilterValue:
    """Tests for escape_filter_value."""

    def test_plain_values_unchanged(self):
        """Test numbers and overlay expressions pass through."""
        assert escape_filter_value(10) == "10"
        assert escape_filter_value(0.5) == "0.5"
        assert escape_filter_value("main_w-overlay_w-10") == "main_w-overlay_w-10"
        assert escape_filter_value("(main_w-overlay_w)/2") == "(main_w-overlay_w)/2"

    def test_empty(self):
        """Test an empty value stays empty."""
        assert escape_filter_value("") == ""

    def test_comma_escaped_for_graph(self):
        """Test a comma cannot split the filter chain."""
        assert escape_filter_value("min(100,iw)") == "min(100\\,iw)"

    def test_colon_escaped_twice(self):
        """Test a colon survives both unescaping passes."""
        assert escape_filter_value("a:b") == "a\\\\:b"

    def test_graph_delimiters_escaped(self):
        """Test semicolons and brackets are escaped."""
        result = escape_filter_value("x;[0:v]drawtext")
        assert "\\;" in result
        assert "\\[" in result
        assert "\\]" in result

    def test_quote_escaped(self):
        """Test no bare single quote remains."""
        result = escape_filter_value("it's")
        assert "'" not in result.replace("\\'", "")

    def test_injection_cannot_open_new_filter(self):
        """Test no unescaped comma or semicolon may remain."""
        payload = "10,drawtext=text=PWNED;[1:v]null"
        result = escape_filter_value(payload)
        i = 0
        while i < len(result):
            if result[i] == "\\":
                i += 2
                continue
            assert result[i] not in ",;[]"
            i += 1


class TestEscapeConcatPath:
    """Tests for escape_concat_path."""

    def test_plain_path(self):
        """Test a plain path is single-quoted."""
        assert escape_concat_path("/tmp/a.mp4") == "'/tmp/a.mp4'"

    def test_single_quote(self):
        """Test an embedded quote is closed, escaped and reopened."""
        assert escape_concat_path("/tmp/it's.mp4") == "'/tmp/it'\\''s.mp4'"


class TestQuoteCommand:
    """Tests for quote_command."""

    def test_spaces_and_metacharacters_quoted(self):
        """Test shell metacharacters are quoted in the rendering."""
        cmd = quote_command(["ffmpeg", "-i", "my file; rm -rf ~.mp4"])
        assert cmd == "ffmpeg -i 'my file; rm -rf ~.mp4'"


class TestRequireFile:
    """Tests for require_file."""

    def test_existing_file(self, tmp_path):
        """Test an existing file is returned as a Path."""
        path = tmp_path / "a.mp4"
        path.write_bytes(b"x")
        assert require_file(str(path)) == path

    def test_missing_file_raises(self, tmp_path):
        """Test the label appears in the error."""
        with pytest.raises(FileNotFoundError, match="Watermark file does not exist"):
            require_file(tmp_path / "nope.png", "Watermark file")

    def test_directory_raises(self, tmp_path):
        """Test a directory is not accepted as a file."""
        with pytest.raises(FileNotFoundError):
            require_file(os.fspath(tmp_path))
