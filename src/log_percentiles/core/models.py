"""Core data models for percentile classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Classification(str, Enum):
    """Percentile band assigned to one matched number."""

    UNCLASSIFIED = "unclassified"
    BELOW_P50 = "below_p50"
    P50 = "p50"
    P90 = "p90"
    P99 = "p99"


class EmphasisMode(str, Enum):
    """How matched substrings are styled."""

    PERCENTILE = "percentile"
    HIGHLIGHT = "highlight"
    BOLD = "bold"


class SortOrder(str, Enum):
    """Output ordering by captured number."""

    NONE = "none"
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class ExtractedValue:
    """One input line plus the number captured from it (if any)."""

    line_no: int
    line: str
    value: int | None = None
    span: tuple[int, int] | None = None  # [start, end) of the captured text

    @property
    def matched(self) -> bool:
        return self.value is not None


@dataclass(frozen=True, slots=True)
class PercentileBoundaries:
    """Nearest-rank p50/p90/p99 thresholds for one run."""

    p50: int
    p90: int
    p99: int


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Immutable configuration for one invocation."""

    pattern: str
    emphasis: EmphasisMode = EmphasisMode.PERCENTILE
    sorting: SortOrder = SortOrder.NONE
    matching_only: bool = False
    color: bool = True

    def __post_init__(self) -> None:
        if self.matching_only and self.sorting != SortOrder.NONE:
            raise ValueError("matching-only cannot be combined with sorting")

    @property
    def needs_boundaries(self) -> bool:
        return self.emphasis == EmphasisMode.PERCENTILE

    @property
    def drops_unmatched(self) -> bool:
        return self.matching_only or self.sorting != SortOrder.NONE
