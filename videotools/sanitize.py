"""Escaping utilities for values embedded in FFMPEG arguments.

Paths and parameters never go through a shell: commands are argument
vectors.  What still needs escaping is text that ends up *inside* an
FFMPEG mini-language, i.e. filter-graph option values and concat demuxer
list files.
"""

import shlex
from pathlib import Path


def _escape_chars(text: str, chars: str) -> str:
    # Backslashes first (before adding more)
    text = text.replace("\\", "\\\\")
    for ch in chars:
        if ch in text:
            text = text.replace(ch, "\\" + ch)
    return text


def escape_filter_value(value) -> str:
    """Escape a value for use as a filter option inside a filter graph.

    FFMPEG unescapes filter text twice: once when splitting the graph
    (``, ; [ ]`` delimit filters and links) and once when splitting the
    filter's options (``:`` delimits options).  The value is escaped for
    the option level first and the graph level second, so it cannot open
    a new option, filter, or graph link.

    Args:
        value: The raw value. Non-string values are converted with ``str``.

    Returns:
        Escaped text safe for use as an FFMPEG filter option value.
    """
    text = str(value)
    if not text:
        return text
    text = _escape_chars(text, "':")
    return _escape_chars(text, "',;[]")


def escape_concat_path(path: str | Path) -> str:
    """Quote a path for one ``file`` line of a concat demuxer list.

    The concat list uses shell-like single quoting, so an embedded quote is
    written as ``'\\''`` (close, escaped quote, reopen).
    """
    return "'" + str(path).replace("'", "'\\''") + "'"


def quote_command(args: list[str]) -> str:
    """Render an argument vector as a copy-pasteable shell string."""
    return " ".join(shlex.quote(str(arg)) for arg in args)


def require_file(path: str | Path, label: str = "Input file") -> Path:
    """Return ``path`` as a Path, raising if it is not an existing file.

    Raises:
        FileNotFoundError: If the path is missing or is not a regular file.
    """
    resolved = Path(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"{label} does not exist: {resolved}")
    return resolved
