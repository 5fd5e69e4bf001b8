"""ExecutionEngine — drives a run through all active questions of its dataset."""

import asyncio
import time
from datetime import UTC, datetime

from rag_bench.config.domain.execution import ExecutionConfig
from rag_bench.dataset.domain.store import QuestionStore
from rag_bench.execution.application.question_executor import QuestionExecutor
from rag_bench.execution.domain.observer import ExecutionObserver
from rag_bench.execution.domain.progress import ExecutionSummary, ProgressCallback
from rag_bench.execution.domain.totals import calculate_totals
from rag_bench.knowledge_base.domain.context import ExecutionContext
from rag_bench.knowledge_base.domain.provider import KnowledgeBaseProvider
from rag_bench.metrics.domain.aggregate import aggregate
from rag_bench.run.application.manager import RunManager
from rag_bench.run.domain.errors import EmptyDatasetError, RunAlreadyRunningError
from rag_bench.run.domain.result import BenchmarkResult
from rag_bench.run.domain.run import Run
from rag_bench.run.domain.status import RunStatus


class ExecutionEngine:
    """Executes runs question by question.

    Up to ``parallelism`` questions are answered concurrently, but results are
    persisted and progress is reported strictly in question order, so
    ``parallelism=1`` is fully sequential. The run status is re-read before
    each question starts and before each result is committed; once the run is
    cancelled no further question is started or committed.
    """

    def __init__(
        self,
        runs: RunManager,
        questions: QuestionStore,
        knowledge_bases: KnowledgeBaseProvider,
        executor: QuestionExecutor,
        config: ExecutionConfig,
        observer: ExecutionObserver,
    ) -> None:
        self._runs = runs
        self._questions = questions
        self._knowledge_bases = knowledge_bases
        self._executor = executor
        self._config = config
        self._observer = observer

    async def execute(
        self,
        run_id: str,
        on_progress: ProgressCallback | None = None,
        parallelism: int | None = None,
    ) -> ExecutionSummary:
        """Claim a pending run and execute it to the end.

        Raises:
            RunNotFoundError, RunAlreadyRunningError, RunAlreadyCompletedError,
            RunNotPendingError: before anything is mutated.
            EmptyDatasetError: after the run was marked failed.
            Exception: any systemic failure, after the run was marked failed.
        """
        run = await self.claim(run_id)
        return await self.execute_claimed(
            run, on_progress=on_progress, parallelism=parallelism
        )

    async def claim(self, run_id: str) -> Run:
        """Atomically move a pending run to running and return it.

        Raises:
            RunNotFoundError: if the run does not exist.
            RunAlreadyRunningError: if the run is running, including when another
                caller claimed it first.
            RunAlreadyCompletedError: if the run is completed.
            RunNotPendingError: if the run failed or was cancelled.
        """
        run = await self._runs.require(run_id)
        run.ensure_startable()
        claimed = await self._runs.transition(
            run_id,
            from_statuses=(RunStatus.PENDING,),
            to_status=RunStatus.RUNNING,
            extra={"started_at": datetime.now(UTC), "progress": 0},
        )
        if not claimed:
            (await self._runs.require(run_id)).ensure_startable()
            raise RunAlreadyRunningError(run_id)
        return await self._runs.require(run_id)

    async def execute_claimed(
        self,
        run: Run,
        on_progress: ProgressCallback | None = None,
        parallelism: int | None = None,
    ) -> ExecutionSummary:
        """Execute a run already moved to running by claim()."""
        try:
            return await self._execute(
                run=run,
                on_progress=on_progress,
                parallelism=parallelism or self._config.parallelism,
            )
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            self._observer.execution_failed(run_id=run.id, reason=reason)
            await self._runs.transition(
                run.id,
                from_statuses=(RunStatus.RUNNING,),
                to_status=RunStatus.FAILED,
                extra={"error_message": reason, "completed_at": datetime.now(UTC)},
            )
            raise

    async def _execute(
        self, run: Run, on_progress: ProgressCallback | None, parallelism: int
    ) -> ExecutionSummary:
        questions = await self._questions.list_active_questions(run.dataset_id)
        if not questions:
            raise EmptyDatasetError(run.dataset_id)

        context = ExecutionContext(
            knowledge_base_id=run.knowledge_base_id,
            defaults=await self._knowledge_bases.get_execution_defaults(
                run.knowledge_base_id
            ),
            rag_config=run.rag_config,
        )
        total = len(questions)
        self._observer.execution_started(
            run_id=run.id, total_questions=total, parallelism=parallelism
        )
        started_at = time.monotonic()

        # At most ``parallelism`` questions are uncommitted at any time; a new
        # question is only started once an earlier one has been committed.
        tasks: list[asyncio.Task[BenchmarkResult]] = []
        results: list[BenchmarkResult] = []
        try:
            for index in range(total):
                while len(tasks) < total and len(tasks) - index < parallelism:
                    if await self._is_cancelled(run.id):
                        break
                    question = questions[len(tasks)]
                    tasks.append(
                        asyncio.create_task(
                            self._executor.execute(
                                run=run, context=context, question=question
                            )
                        )
                    )
                if index >= len(tasks):
                    return self._stop_cancelled(run.id, total, len(results))

                result = await tasks[index]
                if await self._is_cancelled(run.id):
                    return self._stop_cancelled(run.id, total, len(results))

                await self._runs.add_result(result)
                results.append(result)

                progress = round(len(results) / total * 100)
                await self._runs.update_progress(run.id, progress)
                self._observer.execution_progress(
                    run_id=run.id,
                    progress=progress,
                    completed=len(results),
                    total=total,
                )
                if on_progress is not None:
                    on_progress(progress, len(results), total)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        metrics = aggregate(results, run_type=run.run_type)
        totals = calculate_totals(results, rates=self._config.cost)
        completed = await self._runs.transition(
            run.id,
            from_statuses=(RunStatus.RUNNING,),
            to_status=RunStatus.COMPLETED,
            extra={
                "completed_at": datetime.now(UTC),
                "progress": 100,
                "aggregate_metrics": metrics,
                "total_llm_tokens": totals.llm_tokens,
                "total_embedding_tokens": totals.embedding_tokens,
                "estimated_cost_usd": totals.estimated_cost_usd,
            },
        )
        if not completed:
            return self._stop_cancelled(run.id, total, len(results))

        self._observer.execution_completed(
            run_id=run.id,
            total_questions=total,
            elapsed_seconds=time.monotonic() - started_at,
        )
        return ExecutionSummary(
            run_id=run.id,
            status=RunStatus.COMPLETED,
            total_questions=total,
            completed_questions=len(results),
            aggregate_metrics=metrics,
        )

    async def _is_cancelled(self, run_id: str) -> bool:
        run = await self._runs.get(run_id)
        return run is not None and run.status == RunStatus.CANCELLED

    def _stop_cancelled(
        self, run_id: str, total: int, completed: int
    ) -> ExecutionSummary:
        self._observer.execution_cancelled(
            run_id=run_id, completed=completed, total=total
        )
        return ExecutionSummary(
            run_id=run_id,
            status=RunStatus.CANCELLED,
            total_questions=total,
            completed_questions=completed,
        )
