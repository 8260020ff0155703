"""Structured report models (JSON-serializable via pydantic)."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .models import Classification


class RunSummary(BaseModel):
    count: int = Field(ge=0, description="Number of matched samples.")
    min: int = Field(ge=0, description="Smallest captured number.")
    max: int = Field(ge=0, description="Largest captured number.")
    p50: int = Field(ge=0, description="Nearest-rank 50th percentile.")
    p90: int = Field(ge=0, description="Nearest-rank 90th percentile.")
    p99: int = Field(ge=0, description="Nearest-rank 99th percentile.")


class BoundariesModel(BaseModel):
    p50: int
    p90: int
    p99: int


class ReportLine(BaseModel):
    line_no: int = Field(ge=1, description="1-based line number in the input.")
    text: str = Field(description="Unstyled line content.")
    value: int | None = Field(default=None, description="Captured number, if any.")
    classification: Classification = Classification.UNCLASSIFIED
    span: tuple[int, int] | None = Field(
        default=None, description="[start, end) of the captured text within the line."
    )


class PercentileReport(BaseModel):
    count: int = Field(ge=0, description="Number of lines retained for output.")
    matched: int = Field(ge=0, description="Number of lines that produced a number.")
    boundaries: BoundariesModel | None = None
    summary: RunSummary | None = None
    lines: list[ReportLine] = Field(default_factory=list)
