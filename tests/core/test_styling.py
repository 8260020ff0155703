from __future__ import annotations

import pytest
from colorama import Fore, Style

from log_percentiles.core.models import Classification, EmphasisMode
from log_percentiles.core.styling import render, style_for


def test_render_wraps_only_the_span() -> None:
    out = render("Took 950ms", (5, 8), Classification.P99, EmphasisMode.PERCENTILE)
    assert out == f"Took {Style.BRIGHT}{Fore.RED}950{Style.RESET_ALL}ms"


def test_render_below_p50_is_plain() -> None:
    assert render("Took 5ms", (5, 6), Classification.BELOW_P50, EmphasisMode.PERCENTILE) == "Took 5ms"


def test_render_unclassified_percentile_is_plain() -> None:
    assert render("Took 5ms", (5, 6), Classification.UNCLASSIFIED, EmphasisMode.PERCENTILE) == "Took 5ms"


def test_band_styles_are_distinct() -> None:
    styles = {style_for(c, EmphasisMode.PERCENTILE) for c in (Classification.P50, Classification.P90, Classification.P99)}
    assert len(styles) == 3
    assert "" not in styles


@pytest.mark.parametrize(
    ("mode", "marker"),
    [(EmphasisMode.HIGHLIGHT, Fore.YELLOW), (EmphasisMode.BOLD, Style.BRIGHT)],
)
@pytest.mark.parametrize("band", list(Classification))
def test_flat_modes_ignore_classification(mode: EmphasisMode, marker: str, band: Classification) -> None:
    assert render("x 12 y", (2, 4), band, mode) == f"x {marker}12{Style.RESET_ALL} y"


@pytest.mark.parametrize("mode", list(EmphasisMode))
def test_render_without_span_passes_through(mode: EmphasisMode) -> None:
    assert render("Not a result", None, Classification.UNCLASSIFIED, mode) == "Not a result"


def test_render_color_disabled() -> None:
    assert render("Took 950ms", (5, 8), Classification.P99, EmphasisMode.PERCENTILE, color=False) == "Took 950ms"


def test_render_span_at_line_end_resets() -> None:
    out = render("n=7", (2, 3), Classification.P50, EmphasisMode.PERCENTILE)
    assert out.endswith(Style.RESET_ALL)
    assert out.startswith("n=")
