"""Run comparison records."""

from typing import Any

from pydantic import BaseModel, Field

from rag_bench.metrics.domain.models import AggregateMetrics, Better, MetricComparison


class RunSnapshot(BaseModel, frozen=True):
    """The side of a comparison: a run's configuration snapshot and its metrics."""

    id: str
    name: str | None = None
    rag_config: dict[str, Any] = Field(default_factory=dict)
    metrics: AggregateMetrics


class ComparisonSummary(BaseModel, frozen=True):
    winner: Better
    a_wins: int = Field(ge=0)
    b_wins: int = Field(ge=0)
    ties: int = Field(ge=0)


class RunComparison(BaseModel, frozen=True):
    run_a: RunSnapshot
    run_b: RunSnapshot
    comparison: dict[str, MetricComparison]
    summary: ComparisonSummary


def summarize(comparison: dict[str, MetricComparison]) -> ComparisonSummary:
    """Tally per-metric wins; the run with more wins is the winner."""
    a_wins = sum(1 for m in comparison.values() if m.better == "a")
    b_wins = sum(1 for m in comparison.values() if m.better == "b")
    if a_wins > b_wins:
        winner: Better = "a"
    elif b_wins > a_wins:
        winner = "b"
    else:
        winner = "tie"
    return ComparisonSummary(
        winner=winner,
        a_wins=a_wins,
        b_wins=b_wins,
        ties=len(comparison) - a_wins - b_wins,
    )
