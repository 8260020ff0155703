"""Nearest-rank percentile boundaries and band classification."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import Classification, PercentileBoundaries
from .report import RunSummary


def _rank(sorted_values: Sequence[int], p: int) -> int:
    """Value at index floor(p/100 * (n - 1)), in integer arithmetic."""
    return sorted_values[(p * (len(sorted_values) - 1)) // 100]


def compute_boundaries(numbers: Iterable[int]) -> PercentileBoundaries | None:
    """Compute p50/p90/p99 over the full multiset; None when it is empty.

    Duplicates are kept, so a value that recurs often pulls the thresholds
    towards itself.
    """
    values = sorted(numbers)
    if not values:
        return None
    return PercentileBoundaries(
        p50=_rank(values, 50),
        p90=_rank(values, 90),
        p99=_rank(values, 99),
    )


def classify(value: int | None, boundaries: PercentileBoundaries | None) -> Classification:
    """Place a number into its band, checking the highest band first."""
    if value is None or boundaries is None:
        return Classification.UNCLASSIFIED
    if value >= boundaries.p99:
        return Classification.P99
    if value >= boundaries.p90:
        return Classification.P90
    if value >= boundaries.p50:
        return Classification.P50
    return Classification.BELOW_P50


def summarize(numbers: Iterable[int]) -> RunSummary | None:
    """Sample count, range and boundaries; None for zero samples."""
    values = sorted(numbers)
    if not values:
        return None
    return RunSummary(
        count=len(values),
        min=values[0],
        max=values[-1],
        p50=_rank(values, 50),
        p90=_rank(values, 90),
        p99=_rank(values, 99),
    )
