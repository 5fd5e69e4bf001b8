"""Tests for metric-by-metric comparison of two runs."""

from rag_bench.metrics.domain.compare import COMPARED_METRICS, compare, determine_better
from rag_bench.metrics.domain.models import (
    AggregateMetrics,
    GenerationAggregate,
    OverallAggregate,
    RetrievalAggregate,
)


def _make_metrics(
    precision: float = 0.5, retrieval_latency: int = 100, faithfulness: float = 0.5
) -> AggregateMetrics:
    return AggregateMetrics(
        retrieval=RetrievalAggregate(
            context_precision=precision, avg_latency_ms=retrieval_latency
        ),
        generation=GenerationAggregate(faithfulness=faithfulness),
        overall=OverallAggregate(success_rate=1.0, total_questions=1, successful=1),
    )


class TestDetermineBetter:
    def test_lower_latency_wins(self) -> None:
        assert determine_better("retrieval.avg_latency_ms", -100) == "b"
        assert determine_better("overall.avg_total_latency_ms", 50) == "a"

    def test_higher_score_wins(self) -> None:
        assert determine_better("generation.faithfulness", 0.2) == "b"
        assert determine_better("retrieval.mrr", -0.1) == "a"

    def test_zero_diff_is_a_tie(self) -> None:
        assert determine_better("retrieval.mrr", 0.0) == "tie"
        assert determine_better("retrieval.avg_latency_ms", 0) == "tie"


class TestCompare:
    def test_covers_every_compared_metric(self) -> None:
        comparison = compare(_make_metrics(), _make_metrics())

        assert list(comparison) == [path for path, _ in COMPARED_METRICS]

    def test_faster_run_b_wins_retrieval_latency(self) -> None:
        comparison = compare(
            _make_metrics(retrieval_latency=200), _make_metrics(retrieval_latency=100)
        )

        row = comparison["retrieval.avg_latency_ms"]
        assert row.name == "Retrieval Latency"
        assert row.diff == -100
        assert row.pct_change == -50.0
        assert row.better == "b"

    def test_higher_faithfulness_in_run_b_wins(self) -> None:
        comparison = compare(
            _make_metrics(faithfulness=0.7), _make_metrics(faithfulness=0.9)
        )

        row = comparison["generation.faithfulness"]
        assert row.diff == 0.2
        assert row.pct_change == 28.57
        assert row.better == "b"

    def test_equal_values_tie(self) -> None:
        comparison = compare(_make_metrics(), _make_metrics())

        assert all(row.better == "tie" for row in comparison.values())

    def test_pct_change_is_zero_when_a_is_zero(self) -> None:
        comparison = compare(_make_metrics(precision=0.0), _make_metrics(precision=0.4))

        row = comparison["retrieval.context_precision"]
        assert row.pct_change == 0.0
        assert row.better == "b"
