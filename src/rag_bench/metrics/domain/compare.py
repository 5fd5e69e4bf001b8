"""Metric-by-metric comparison of two runs' aggregate metrics."""

from rag_bench.metrics.domain.models import AggregateMetrics, Better, MetricComparison

# (dotted path into AggregateMetrics, display name)
COMPARED_METRICS: tuple[tuple[str, str], ...] = (
    ("retrieval.context_precision", "Context Precision"),
    ("retrieval.mrr", "MRR"),
    ("retrieval.ndcg", "NDCG"),
    ("retrieval.hit_rate", "Hit Rate"),
    ("retrieval.avg_latency_ms", "Retrieval Latency"),
    ("generation.faithfulness", "Faithfulness"),
    ("generation.answer_relevance", "Answer Relevance"),
    ("generation.avg_latency_ms", "Generation Latency"),
    ("overall.success_rate", "Success Rate"),
    ("overall.avg_total_latency_ms", "Total Latency"),
)


def _lookup(metrics: AggregateMetrics, path: str) -> float:
    section, field = path.split(".")
    return float(getattr(getattr(metrics, section), field))


def determine_better(metric_path: str, diff: float) -> Better:
    """Lower wins for latency metrics, higher wins for everything else."""
    if diff == 0:
        return "tie"
    if "latency" in metric_path:
        return "b" if diff < 0 else "a"
    return "b" if diff > 0 else "a"


def compare(a: AggregateMetrics, b: AggregateMetrics) -> dict[str, MetricComparison]:
    """
    Compare run B against run A over COMPARED_METRICS.

    ``diff`` is B - A rounded to 4 decimals and ``pct_change`` is diff / A * 100
    rounded to 2 decimals, or 0 when A is 0.
    """
    comparison: dict[str, MetricComparison] = {}
    for path, name in COMPARED_METRICS:
        value_a = _lookup(a, path)
        value_b = _lookup(b, path)
        diff = value_b - value_a
        pct_change = diff / value_a * 100 if value_a != 0 else 0.0
        comparison[path] = MetricComparison(
            name=name,
            a=value_a,
            b=value_b,
            diff=round(diff, 4),
            pct_change=round(pct_change, 2),
            better=determine_better(path, diff),
        )
    return comparison
