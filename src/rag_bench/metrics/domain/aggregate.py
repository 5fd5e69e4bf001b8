"""Run-level aggregation of per-question results."""

import math
from collections.abc import Iterable, Sequence

from rag_bench.metrics.domain.models import (
    AggregateMetrics,
    GenerationAggregate,
    OverallAggregate,
    ResultMetrics,
    RetrievalAggregate,
)
from rag_bench.run.domain.result import BenchmarkResult
from rag_bench.run.domain.status import RunType


def _mean(values: Iterable[float | None]) -> float:
    """Arithmetic mean ignoring None and NaN; 0.0 when nothing is left."""
    valid = [v for v in values if v is not None and not math.isnan(v)]
    if not valid:
        return 0.0
    return sum(valid) / len(valid)


def _succeeded(result: BenchmarkResult, run_type: RunType) -> bool:
    if run_type == RunType.RETRIEVAL_ONLY:
        return not result.failed
    return bool(result.generated_answer)


def aggregate(
    results: Sequence[BenchmarkResult], run_type: RunType = RunType.FULL
) -> AggregateMetrics:
    """
    Unweighted means of every per-question metric across a run.

    Failed results contribute only to the question count and the failure tally.
    Latency means are rounded to whole milliseconds.
    """
    if not results:
        return AggregateMetrics()

    scored = [r.metrics for r in results if isinstance(r.metrics, ResultMetrics)]
    retrieval = [m.retrieval for m in scored]
    generation = [m.generation for m in scored]
    successful = sum(1 for r in results if _succeeded(r, run_type))

    return AggregateMetrics(
        retrieval=RetrievalAggregate(
            context_precision=_mean(m.precision for m in retrieval),
            context_recall=_mean(m.recall for m in retrieval),
            mrr=_mean(m.mrr for m in retrieval),
            ndcg=_mean(m.ndcg for m in retrieval),
            hit_rate=_mean(m.hit_rate for m in retrieval),
            llm_context_precision=_mean(m.llm_context_precision for m in retrieval),
            avg_latency_ms=round(_mean(r.retrieval_latency_ms for r in results)),
        ),
        generation=GenerationAggregate(
            faithfulness=_mean(m.faithfulness for m in generation),
            answer_relevance=_mean(m.answer_relevance for m in generation),
            semantic_similarity=_mean(m.semantic_similarity for m in generation),
            context_coverage=_mean(m.context_coverage for m in generation),
            avg_latency_ms=round(_mean(r.generation_ms for r in results)),
        ),
        overall=OverallAggregate(
            success_rate=successful / len(results),
            total_questions=len(results),
            successful=successful,
            failed=len(results) - successful,
            avg_total_latency_ms=round(_mean(r.total_latency_ms for r in results)),
        ),
    )
