"""Emphasis styler: wrap the captured substring in ANSI markers."""

from __future__ import annotations

from colorama import Fore, Style

from .models import Classification, EmphasisMode

RESET = Style.RESET_ALL

BAND_STYLES: dict[Classification, str] = {
    Classification.P50: Fore.GREEN,
    Classification.P90: Style.BRIGHT + Fore.YELLOW,
    Classification.P99: Style.BRIGHT + Fore.RED,
}
HIGHLIGHT_STYLE = Fore.YELLOW
BOLD_STYLE = Style.BRIGHT


def style_for(classification: Classification, mode: EmphasisMode) -> str:
    """Return the opening marker for a span, or "" for no emphasis.

    Highlight and bold modes ignore the classification entirely.
    """
    if mode == EmphasisMode.HIGHLIGHT:
        return HIGHLIGHT_STYLE
    if mode == EmphasisMode.BOLD:
        return BOLD_STYLE
    return BAND_STYLES.get(classification, "")


def render(
    line: str,
    span: tuple[int, int] | None,
    classification: Classification,
    mode: EmphasisMode,
    *,
    color: bool = True,
) -> str:
    """Render a line with only the captured span styled.

    Lines without a span pass through untouched regardless of mode.
    """
    if span is None or not color:
        return line
    marker = style_for(classification, mode)
    if not marker:
        return line
    start, end = span
    return f"{line[:start]}{marker}{line[start:end]}{RESET}{line[end:]}"
