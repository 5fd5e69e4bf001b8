"""RunComparator — compares two completed runs metric by metric."""

import asyncio

from rag_bench.comparison.domain.comparison import RunComparison, RunSnapshot, summarize
from rag_bench.metrics.domain.compare import compare
from rag_bench.run.application.manager import RunManager
from rag_bench.run.domain.errors import (
    RunMetricsMissingError,
    RunNotComparableError,
    RunNotFoundError,
)
from rag_bench.run.domain.run import Run
from rag_bench.run.domain.status import RunStatus


class RunComparator:
    def __init__(self, runs: RunManager) -> None:
        self._runs = runs

    async def compare_runs(self, run_id_a: str, run_id_b: str) -> RunComparison:
        """
        Compare run B against run A.

        Raises:
            RunNotFoundError: if either run does not exist.
            RunNotComparableError: if either run is not completed.
            RunMetricsMissingError: if either run has no aggregate metrics.
        """
        run_a, run_b = await asyncio.gather(
            self._runs.get(run_id_a), self._runs.get(run_id_b)
        )
        snapshot_a = _snapshot(run_id_a, run_a)
        snapshot_b = _snapshot(run_id_b, run_b)

        comparison = compare(snapshot_a.metrics, snapshot_b.metrics)
        return RunComparison(
            run_a=snapshot_a,
            run_b=snapshot_b,
            comparison=comparison,
            summary=summarize(comparison),
        )


def _snapshot(run_id: str, run: Run | None) -> RunSnapshot:
    if run is None:
        raise RunNotFoundError(run_id)
    if run.status != RunStatus.COMPLETED:
        raise RunNotComparableError(run_id, status=run.status)
    if run.aggregate_metrics is None:
        raise RunMetricsMissingError(run_id)
    return RunSnapshot(
        id=run.id,
        name=run.name,
        rag_config=run.rag_config,
        metrics=run.aggregate_metrics,
    )
