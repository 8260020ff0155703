"""Percentile-banded highlighting for numbers captured from log lines."""

from __future__ import annotations

__version__ = "0.1.0"
