"""RunManager — owns the Run lifecycle on top of the RunStore port."""

from collections.abc import Collection
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from rag_bench.knowledge_base.domain.provider import KnowledgeBaseProvider
from rag_bench.run.domain.errors import (
    ResultNotFoundError,
    RunNotCancellableError,
    RunNotFoundError,
)
from rag_bench.run.domain.observer import RunObserver
from rag_bench.run.domain.result import BenchmarkResult
from rag_bench.run.domain.run import Run
from rag_bench.run.domain.status import RunStatus, RunType
from rag_bench.run.domain.store import RunStore

_CANCELLABLE = (RunStatus.PENDING, RunStatus.RUNNING)


class RunOptions(BaseModel, frozen=True):
    name: str | None = None
    description: str | None = None
    run_type: RunType = RunType.FULL


class RunManager:
    """Creates, reads and mutates runs and their results.

    The retrieval configuration of the knowledge base is snapshotted when the
    run is created and never re-read afterwards.
    """

    def __init__(
        self,
        store: RunStore,
        knowledge_bases: KnowledgeBaseProvider,
        observer: RunObserver,
    ) -> None:
        self._store = store
        self._knowledge_bases = knowledge_bases
        self._observer = observer

    async def create(
        self,
        knowledge_base_id: str,
        dataset_id: str,
        options: RunOptions | None = None,
    ) -> Run:
        opts = options if options is not None else RunOptions()
        rag_config = await self._knowledge_bases.get_rag_config(knowledge_base_id)
        run = await self._store.create_run(
            Run(
                knowledge_base_id=knowledge_base_id,
                dataset_id=dataset_id,
                name=opts.name,
                description=opts.description,
                run_type=opts.run_type,
                rag_config=rag_config,
            )
        )
        self._observer.run_created(
            run_id=run.id,
            knowledge_base_id=knowledge_base_id,
            dataset_id=dataset_id,
            run_type=run.run_type,
        )
        return run

    async def get(self, run_id: str) -> Run | None:
        return await self._store.get_run(run_id)

    async def require(self, run_id: str) -> Run:
        """Like get(), but raises RunNotFoundError instead of returning None."""
        run = await self._store.get_run(run_id)
        if run is None:
            raise RunNotFoundError(run_id)
        return run

    async def list_runs(
        self,
        knowledge_base_id: str,
        status: RunStatus | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Run]:
        """Runs of a knowledge base, newest first."""
        return await self._store.list_runs(
            knowledge_base_id=knowledge_base_id,
            status=status,
            limit=limit,
            offset=offset,
        )

    async def update_status(
        self, run_id: str, status: RunStatus, extra: dict[str, Any] | None = None
    ) -> Run:
        """Write the status together with any extra fields in a single update."""
        run = await self._store.update_run(run_id, {**(extra or {}), "status": status})
        self._observer.run_status_changed(run_id=run_id, status=status)
        return run

    async def update_progress(self, run_id: str, progress: int) -> Run:
        """Write progress without touching the status."""
        return await self._store.update_run(run_id, {"progress": progress})

    async def transition(
        self,
        run_id: str,
        from_statuses: Collection[RunStatus],
        to_status: RunStatus,
        extra: dict[str, Any] | None = None,
    ) -> bool:
        applied = await self._store.transition(
            run_id=run_id,
            from_statuses=from_statuses,
            to_status=to_status,
            fields=extra or {},
        )
        if applied:
            self._observer.run_status_changed(run_id=run_id, status=to_status)
        else:
            self._observer.run_transition_rejected(
                run_id=run_id,
                from_statuses=[str(s) for s in from_statuses],
                to_status=to_status,
            )
        return applied

    async def cancel(self, run_id: str) -> Run:
        """
        Mark a pending or running run cancelled. An in-flight execution notices
        the new status before its next question.

        Raises:
            RunNotFoundError: if the run does not exist.
            RunNotCancellableError: if the run already finished.
        """
        run = await self.require(run_id)
        cancelled = await self.transition(
            run_id,
            from_statuses=_CANCELLABLE,
            to_status=RunStatus.CANCELLED,
            extra={"completed_at": datetime.now(UTC)},
        )
        if not cancelled:
            latest = await self.get(run_id)
            status = latest.status if latest is not None else run.status
            raise RunNotCancellableError(run_id, status=status)
        return await self.require(run_id)

    async def delete(self, run_id: str) -> bool:
        deleted = await self._store.delete_run(run_id)
        if deleted:
            self._observer.run_deleted(run_id=run_id)
        return deleted

    async def add_result(self, result: BenchmarkResult) -> BenchmarkResult:
        return await self._store.add_result(result)

    async def get_results(
        self, run_id: str, limit: int = 100, offset: int = 0
    ) -> list[BenchmarkResult]:
        """Results in question execution order."""
        return await self._store.list_results(run_id=run_id, limit=limit, offset=offset)

    async def get_result(self, result_id: str) -> BenchmarkResult | None:
        return await self._store.get_result(result_id)

    async def add_human_evaluation(
        self, result_id: str, evaluated_by: str, rating: int, feedback: str | None
    ) -> BenchmarkResult:
        """
        Raises:
            ResultNotFoundError: if the result does not exist.
            pydantic.ValidationError: if rating is outside 1-5.
        """
        if await self._store.get_result(result_id) is None:
            raise ResultNotFoundError(result_id)
        result = await self._store.update_result(
            result_id,
            {
                "human_rating": rating,
                "human_feedback": feedback,
                "evaluated_by": evaluated_by,
                "evaluated_at": datetime.now(UTC),
            },
        )
        self._observer.result_evaluated(result_id=result_id, rating=rating)
        return result
