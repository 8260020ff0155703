"""Line matcher: pull one non-negative integer out of a log line."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .errors import PatternCompileError
from .models import ExtractedValue

MAX_VALUE = 2**64 - 1
_MAX_DIGITS = len(str(MAX_VALUE))

_DIGITS_RE = re.compile(r"[0-9]+")


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a user pattern, wrapping regex errors."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternCompileError(f"Invalid pattern {pattern!r}: {e}") from e


def parse_number(text: str) -> int | None:
    """Parse an unsigned 64-bit integer; None for anything else."""
    if not _DIGITS_RE.fullmatch(text):
        return None
    digits = text.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return None
    value = int(digits)
    if value > MAX_VALUE:
        return None
    return value


def match_line(regex: re.Pattern[str], line_no: int, line: str) -> ExtractedValue:
    """Apply the pattern to one line.

    Only the first match is considered. With capture groups, group 1 supplies
    the number and any further groups are ignored; without groups the whole
    match is used. Malformed captures are treated as a non-match.
    """
    m = regex.search(line)
    if m is None:
        return ExtractedValue(line_no=line_no, line=line)

    group = 1 if regex.groups else 0
    start, end = m.span(group)
    if start < 0:
        # group 1 did not take part in the match
        return ExtractedValue(line_no=line_no, line=line)

    value = parse_number(line[start:end])
    if value is None:
        return ExtractedValue(line_no=line_no, line=line)
    return ExtractedValue(line_no=line_no, line=line, value=value, span=(start, end))


def extract_values(regex: re.Pattern[str], lines: Iterable[str]) -> list[ExtractedValue]:
    """Match every line, preserving input order (line numbers are 1-based)."""
    return [match_line(regex, line_no, line) for line_no, line in enumerate(lines, start=1)]
