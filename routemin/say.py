"""Plain-text logging to a stream, and error-number descriptions."""

from __future__ import annotations

import os
import sys
from typing import NoReturn, TextIO

SAY_BUF_LEN_MAX = 16 * 1024


def strerror(errnum: int) -> str:
    """Describe an error number."""
    try:
        return os.strerror(errnum)
    except (ValueError, OverflowError):
        return f"Unknown error {errnum:03d}"


def _basename(filename: str) -> str:
    """Part after the last slash, unless the slash ends the string."""
    result = filename
    for pos, char in enumerate(filename):
        if char == "/" and pos + 1 < len(filename):
            result = filename[pos + 1:]
    return result


def format_plain(filename: str | None, line: int, error: str | None, message: str) -> str:
    """Format one log line: optional location, message, optional error."""
    parts = []
    if filename:
        parts.append(f" {_basename(filename)}:{line}")
    parts.append(message)
    if error is not None:
        parts.append(f": {error}")
    parts.append("\n")
    return "".join(parts)


def say(
    error: str | None,
    message: str,
    filename: str | None = None,
    line: int = 0,
    stream: TextIO | None = None,
) -> str:
    """Write a log line to ``stream`` (stderr by default) and return what was written."""
    entry = format_plain(filename, line, error, message)[: SAY_BUF_LEN_MAX - 1]
    out = sys.stderr if stream is None else stream
    if entry:
        out.write(entry)
        out.flush()
    return entry


def syserror(
    message: str,
    errnum: int,
    filename: str | None = None,
    line: int = 0,
    stream: TextIO | None = None,
) -> str:
    """Log ``message`` followed by the description of ``errnum``."""
    return say(strerror(errnum), message, filename, line, stream)


def panic(message: str, status: int = 1) -> NoReturn:
    """Log ``message`` to stderr and exit with ``status``."""
    say(None, message)
    raise SystemExit(status)