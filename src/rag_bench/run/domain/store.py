"""RunStore Protocol — persistence port for Run and BenchmarkResult records."""

from collections.abc import Collection
from typing import Any, Protocol

from rag_bench.run.domain.result import BenchmarkResult
from rag_bench.run.domain.run import Run
from rag_bench.run.domain.status import RunStatus


class RunStore(Protocol):
    """CRUD for runs and results plus an atomic conditional status transition."""

    async def create_run(self, run: Run) -> Run: ...

    async def get_run(self, run_id: str) -> Run | None: ...

    async def list_runs(
        self,
        knowledge_base_id: str,
        status: RunStatus | None,
        limit: int,
        offset: int,
    ) -> list[Run]: ...

    async def update_run(self, run_id: str, fields: dict[str, Any]) -> Run: ...

    async def transition(
        self,
        run_id: str,
        from_statuses: Collection[RunStatus],
        to_status: RunStatus,
        fields: dict[str, Any],
    ) -> bool:
        """Set status and fields only if the current status is in from_statuses.

        Returns False, leaving the run untouched, when the run is missing or in
        any other status.
        """
        ...

    async def delete_run(self, run_id: str) -> bool: ...

    async def add_result(self, result: BenchmarkResult) -> BenchmarkResult: ...

    async def list_results(
        self, run_id: str, limit: int, offset: int
    ) -> list[BenchmarkResult]: ...

    async def get_result(self, result_id: str) -> BenchmarkResult | None: ...

    async def update_result(
        self, result_id: str, fields: dict[str, Any]
    ) -> BenchmarkResult: ...
