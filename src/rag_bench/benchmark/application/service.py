"""BenchmarkService — the operations the benchmarking core offers to its callers."""

import asyncio

from rag_bench.comparison.application.comparator import RunComparator
from rag_bench.comparison.domain.comparison import RunComparison
from rag_bench.execution.application.engine import ExecutionEngine
from rag_bench.execution.domain.progress import ExecutionSummary, ProgressCallback
from rag_bench.run.application.manager import RunManager, RunOptions
from rag_bench.run.domain.result import BenchmarkResult
from rag_bench.run.domain.run import Run
from rag_bench.run.domain.status import RunStatus


class BenchmarkService:
    """Facade over run management, execution and comparison.

    ``start_run`` returns as soon as the run is claimed; execution continues in
    a background task the service keeps a reference to until it finishes.
    """

    def __init__(
        self, runs: RunManager, engine: ExecutionEngine, comparator: RunComparator
    ) -> None:
        self._runs = runs
        self._engine = engine
        self._comparator = comparator
        self._tasks: set[asyncio.Task[ExecutionSummary]] = set()

    async def create_run(
        self,
        knowledge_base_id: str,
        dataset_id: str,
        options: RunOptions | None = None,
    ) -> Run:
        return await self._runs.create(knowledge_base_id, dataset_id, options)

    async def start_run(
        self,
        run_id: str,
        on_progress: ProgressCallback | None = None,
        parallelism: int | None = None,
    ) -> asyncio.Task[ExecutionSummary]:
        """
        Claim the run, then execute it in the background.

        Precondition failures are raised here, before any task is scheduled.
        Awaiting the returned task yields the ExecutionSummary or re-raises the
        failure that ended the run.

        Raises:
            RunNotFoundError, RunAlreadyRunningError, RunAlreadyCompletedError,
            RunNotPendingError.
        """
        run = await self._engine.claim(run_id)
        task = asyncio.create_task(
            self._engine.execute_claimed(
                run, on_progress=on_progress, parallelism=parallelism
            ),
            name=f"rag-bench-run-{run_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._forget)
        return task

    def _forget(self, task: asyncio.Task[ExecutionSummary]) -> None:
        self._tasks.discard(task)
        # The engine already reported the failure; mark it retrieved.
        if not task.cancelled():
            task.exception()

    async def get_run(self, run_id: str) -> Run | None:
        return await self._runs.get(run_id)

    async def list_runs(
        self,
        knowledge_base_id: str,
        status: RunStatus | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Run]:
        return await self._runs.list_runs(
            knowledge_base_id, status=status, limit=limit, offset=offset
        )

    async def cancel_run(self, run_id: str) -> Run:
        """Status-only; a running execution stops before its next question."""
        return await self._runs.cancel(run_id)

    async def delete_run(self, run_id: str) -> bool:
        return await self._runs.delete(run_id)

    async def get_run_results(
        self, run_id: str, limit: int = 100, offset: int = 0
    ) -> list[BenchmarkResult]:
        return await self._runs.get_results(run_id, limit=limit, offset=offset)

    async def get_result(self, result_id: str) -> BenchmarkResult | None:
        return await self._runs.get_result(result_id)

    async def add_human_evaluation(
        self, result_id: str, evaluated_by: str, rating: int, feedback: str | None
    ) -> BenchmarkResult:
        return await self._runs.add_human_evaluation(
            result_id, evaluated_by=evaluated_by, rating=rating, feedback=feedback
        )

    async def compare_runs(self, run_id_a: str, run_id_b: str) -> RunComparison:
        return await self._comparator.compare_runs(run_id_a, run_id_b)

    async def wait(self) -> None:
        """Wait for every background execution started by this service."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
