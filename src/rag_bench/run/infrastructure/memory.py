"""In-process RunStore — the default store for tests and one-shot CLI runs."""

import asyncio
from collections.abc import Collection
from typing import Any

from rag_bench.run.domain.result import BenchmarkResult
from rag_bench.run.domain.run import Run
from rag_bench.run.domain.status import RunStatus
from rag_bench.run.infrastructure.errors import StoreError


class InMemoryRunStore:
    """Keeps runs and results in dicts; results are kept in insertion order.

    Satisfies the RunStore protocol structurally.
    """

    def __init__(self) -> None:
        self._runs: dict[str, Run] = {}
        self._results: dict[str, BenchmarkResult] = {}
        self._lock = asyncio.Lock()

    async def create_run(self, run: Run) -> Run:
        async with self._lock:
            if run.id in self._runs:
                raise StoreError(reason=f"run '{run.id}' already exists")
            self._runs[run.id] = run
        return run

    async def get_run(self, run_id: str) -> Run | None:
        return self._runs.get(run_id)

    async def list_runs(
        self,
        knowledge_base_id: str,
        status: RunStatus | None,
        limit: int,
        offset: int,
    ) -> list[Run]:
        runs = [
            r
            for r in self._runs.values()
            if r.knowledge_base_id == knowledge_base_id
            and (status is None or r.status == status)
        ]
        runs.sort(key=lambda r: r.created_at, reverse=True)
        return runs[offset : offset + limit]

    async def update_run(self, run_id: str, fields: dict[str, Any]) -> Run:
        async with self._lock:
            run = self._require_run(run_id)
            updated = run.with_updates(fields)
            self._runs[run_id] = updated
        return updated

    async def transition(
        self,
        run_id: str,
        from_statuses: Collection[RunStatus],
        to_status: RunStatus,
        fields: dict[str, Any],
    ) -> bool:
        async with self._lock:
            run = self._runs.get(run_id)
            if run is None or run.status not in from_statuses:
                return False
            self._runs[run_id] = run.with_updates({**fields, "status": to_status})
        return True

    async def delete_run(self, run_id: str) -> bool:
        async with self._lock:
            if self._runs.pop(run_id, None) is None:
                return False
            self._results = {
                k: v for k, v in self._results.items() if v.run_id != run_id
            }
        return True

    async def add_result(self, result: BenchmarkResult) -> BenchmarkResult:
        async with self._lock:
            self._require_run(result.run_id)
            self._results[result.id] = result
        return result

    async def list_results(
        self, run_id: str, limit: int, offset: int
    ) -> list[BenchmarkResult]:
        results = [r for r in self._results.values() if r.run_id == run_id]
        return results[offset : offset + limit]

    async def get_result(self, result_id: str) -> BenchmarkResult | None:
        return self._results.get(result_id)

    async def update_result(
        self, result_id: str, fields: dict[str, Any]
    ) -> BenchmarkResult:
        async with self._lock:
            result = self._results.get(result_id)
            if result is None:
                raise StoreError(reason=f"result '{result_id}' does not exist")
            updated = BenchmarkResult.model_validate({**result.model_dump(), **fields})
            self._results[result_id] = updated
        return updated

    def _require_run(self, run_id: str) -> Run:
        run = self._runs.get(run_id)
        if run is None:
            raise StoreError(reason=f"run '{run_id}' does not exist")
        return run
