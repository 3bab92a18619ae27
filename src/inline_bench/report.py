from __future__ import annotations

import io
import json

from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from .config import BenchmarkConfig
from .strategies import StrategyName


class Measurement(BaseModel):
    strategy: StrategyName
    input_size: int = Field(..., ge=1)
    elapsed_ns: int = Field(..., ge=0)
    sum: int


class Summary(BaseModel):
    strategy: StrategyName
    runs: int = Field(..., ge=1)
    mean_ns: float = Field(..., ge=0.0)
    min_ns: int = Field(..., ge=0)
    max_ns: int = Field(..., ge=0)
    median_ns: float = Field(..., ge=0.0)
    sum: int


class Report(BaseModel):
    generated_at: str
    config: BenchmarkConfig
    summaries: list[Summary]
    verified_sum: int
    notes: list[str] = Field(default_factory=list)


def format_duration(ns: float) -> str:
    if ns < 1_000:
        return f"{ns:.0f} ns"
    if ns < 1_000_000:
        return f"{ns / 1_000:.2f} µs"
    return f"{ns / 1_000_000:.2f} ms"


def render_table(report: Report) -> str:
    table = Table(show_header=True, header_style="bold")
    table.add_column("strategy")
    table.add_column("runs", justify="right")
    table.add_column("mean", justify="right")
    table.add_column("min", justify="right")
    table.add_column("max", justify="right")
    table.add_column("median", justify="right")
    table.add_column("sum", justify="right")

    for s in report.summaries:
        table.add_row(
            s.strategy.value,
            str(s.runs),
            format_duration(s.mean_ns),
            format_duration(s.min_ns),
            format_duration(s.max_ns),
            format_duration(s.median_ns),
            str(s.sum),
        )

    buf = io.StringIO()
    console = Console(file=buf, width=120, no_color=True, highlight=False)
    console.print(table)
    for note in report.notes:
        console.print(note)
    return buf.getvalue().rstrip("\n")


def render_json(report: Report) -> str:
    payload = report.model_dump(mode="json")
    return json.dumps(payload, indent=2, sort_keys=True)
