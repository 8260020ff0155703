"""Fatal error kinds raised before any output is produced."""

from __future__ import annotations


class PatternCompileError(ValueError):
    """The supplied pattern is not a valid regular expression."""


class InputAcquisitionError(OSError):
    """The input source could not be opened or read."""
