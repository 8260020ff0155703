"""Pipeline orchestration: load, match, classify, select, render, emit.

Percentile bands need the whole distribution, so every line is loaded and
matched before anything is rendered.
"""

from __future__ import annotations

import gzip
import io
import logging
import re
import sys
import zlib
from collections.abc import Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

import aiofiles
from aiofiles.threadpool import wrap

from .errors import InputAcquisitionError
from .matching import compile_pattern, extract_values
from .models import Classification, ExtractedValue, PercentileBoundaries, RunConfig, SortOrder
from .percentiles import classify, compute_boundaries, summarize
from .report import BoundariesModel, PercentileReport, ReportLine, RunSummary
from .styling import render

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """A retained line with its band and rendered output."""

    extracted: ExtractedValue
    classification: Classification
    rendered: str


@dataclass(frozen=True, slots=True)
class PipelineResult:
    lines: list[ClassifiedLine]
    boundaries: PercentileBoundaries | None
    summary: RunSummary | None
    matched: int

    @property
    def output(self) -> list[str]:
        return [c.rendered for c in self.lines]


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


async def _read_stream(stream: TextIO) -> list[str]:
    af = wrap(stream)
    return [line.rstrip("\r\n") async for line in af]


async def load_lines(
    source: str | Path | None,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
    stream: TextIO | None = None,
) -> list[str]:
    """Read the whole input into memory, one entry per line.

    With no source, ``stream`` (or standard input) is read to completion.
    Only line terminators are stripped.
    """
    if source is None:
        if stream is not None:
            return await _read_stream(stream)
        stdin = io.TextIOWrapper(sys.stdin.buffer, encoding=encoding, errors=decode_errors)
        try:
            return await _read_stream(stdin)
        finally:
            stdin.detach()

    path = Path(source)
    if not path.is_file():
        raise InputAcquisitionError(f"Input file not found: {path}")
    try:
        async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as f:
            return [line.rstrip("\r\n") async for line in f]
    except (OSError, EOFError, zlib.error) as e:
        raise InputAcquisitionError(f"Cannot read {path}: {e}") from e


def select(values: Sequence[ExtractedValue], config: RunConfig) -> list[ExtractedValue]:
    """Apply matching-only or sorting; the default keeps every line in order."""
    if not config.drops_unmatched:
        return list(values)

    kept = [v for v in values if v.matched]
    if config.sorting == SortOrder.NONE:
        return kept
    # sorted() is stable for reverse=True as well
    return sorted(kept, key=lambda v: v.value, reverse=config.sorting == SortOrder.DESC)


def process(
    lines: Sequence[str],
    config: RunConfig,
    *,
    regex: re.Pattern[str] | None = None,
) -> PipelineResult:
    """Run every stage after loading over an in-memory list of lines."""
    regex = regex or compile_pattern(config.pattern)

    values = extract_values(regex, lines)
    numbers = [v.value for v in values if v.matched]
    logger.debug("Matched %d of %d lines", len(numbers), len(values))

    boundaries = compute_boundaries(numbers) if config.needs_boundaries else None
    if boundaries is not None:
        logger.debug("Boundaries p50=%d p90=%d p99=%d", boundaries.p50, boundaries.p90, boundaries.p99)

    out: list[ClassifiedLine] = []
    for v in select(values, config):
        band = classify(v.value, boundaries)
        rendered = render(v.line, v.span, band, config.emphasis, color=config.color)
        out.append(ClassifiedLine(extracted=v, classification=band, rendered=rendered))

    return PipelineResult(
        lines=out,
        boundaries=boundaries,
        summary=summarize(numbers),
        matched=len(numbers),
    )


def emit(result: PipelineResult, out: TextIO) -> None:
    """Write each rendered line, newline-terminated."""
    for line in result.output:
        out.write(line + "\n")


async def run(
    config: RunConfig,
    *,
    input_path: str | Path | None = None,
    stream: TextIO | None = None,
    out: TextIO | None = None,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> PipelineResult:
    """Compile the pattern, load the input, then process and emit.

    The pattern is compiled before any input is read so an invalid pattern
    fails without touching the source.
    """
    regex = compile_pattern(config.pattern)
    lines = await load_lines(input_path, encoding=encoding, decode_errors=decode_errors, stream=stream)
    logger.debug("Loaded %d lines from %s", len(lines), input_path or "<stdin>")

    result = process(lines, config, regex=regex)
    emit(result, out or sys.stdout)
    return result


def build_report(result: PipelineResult, *, limit: int | None = None) -> PercentileReport:
    """Convert a pipeline result into the JSON-serializable report."""
    retained = result.lines if limit is None else result.lines[:limit]
    boundaries = None
    if result.boundaries is not None:
        b = result.boundaries
        boundaries = BoundariesModel(p50=b.p50, p90=b.p90, p99=b.p99)

    return PercentileReport(
        count=len(result.lines),
        matched=result.matched,
        boundaries=boundaries,
        summary=result.summary,
        lines=[
            ReportLine(
                line_no=c.extracted.line_no,
                text=c.extracted.line,
                value=c.extracted.value,
                classification=c.classification,
                span=c.extracted.span,
            )
            for c in retained
        ],
    )
