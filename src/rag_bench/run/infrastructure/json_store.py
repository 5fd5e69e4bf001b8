"""File-backed RunStore: runs/<id>.json plus results/<run_id>.jsonl."""

import asyncio
import os
import tempfile
from collections.abc import Collection
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rag_bench.run.domain.result import BenchmarkResult
from rag_bench.run.domain.run import Run
from rag_bench.run.domain.status import RunStatus
from rag_bench.run.infrastructure.errors import StoreError


class JsonRunStore:
    """Persists runs under ``root/runs/<id>.json`` and results under
    ``root/results/<run_id>.jsonl``.

    Every write goes to a temporary file in the same directory that then
    replaces the target, so readers never see a partially written file. A
    single asyncio lock serialises writers within the process. Run ids that
    are not plain file names are rejected with StoreError.

    Satisfies the RunStore protocol structurally.
    """

    def __init__(self, root: Path) -> None:
        self._runs_dir = root / "runs"
        self._results_dir = root / "results"
        self._runs_dir.mkdir(parents=True, exist_ok=True)
        self._results_dir.mkdir(parents=True, exist_ok=True)
        self._lock = asyncio.Lock()

    async def create_run(self, run: Run) -> Run:
        async with self._lock:
            if self._run_path(run.id).exists():
                raise StoreError(reason=f"run '{run.id}' already exists")
            self._write_run(run)
        return run

    async def get_run(self, run_id: str) -> Run | None:
        return self._read_run(run_id)

    async def list_runs(
        self,
        knowledge_base_id: str,
        status: RunStatus | None,
        limit: int,
        offset: int,
    ) -> list[Run]:
        runs = [
            run
            for path in self._runs_dir.glob("*.json")
            if (run := self._read_run(path.stem)) is not None
            and run.knowledge_base_id == knowledge_base_id
            and (status is None or run.status == status)
        ]
        runs.sort(key=lambda r: r.created_at, reverse=True)
        return runs[offset : offset + limit]

    async def update_run(self, run_id: str, fields: dict[str, Any]) -> Run:
        async with self._lock:
            run = self._read_run(run_id)
            if run is None:
                raise StoreError(reason=f"run '{run_id}' does not exist")
            updated = run.with_updates(fields)
            self._write_run(updated)
        return updated

    async def transition(
        self,
        run_id: str,
        from_statuses: Collection[RunStatus],
        to_status: RunStatus,
        fields: dict[str, Any],
    ) -> bool:
        async with self._lock:
            run = self._read_run(run_id)
            if run is None or run.status not in from_statuses:
                return False
            self._write_run(run.with_updates({**fields, "status": to_status}))
        return True

    async def delete_run(self, run_id: str) -> bool:
        async with self._lock:
            path = self._run_path(run_id)
            if not path.exists():
                return False
            path.unlink()
            self._results_path(run_id).unlink(missing_ok=True)
        return True

    async def add_result(self, result: BenchmarkResult) -> BenchmarkResult:
        async with self._lock:
            if not self._run_path(result.run_id).exists():
                raise StoreError(reason=f"run '{result.run_id}' does not exist")
            with open(self._results_path(result.run_id), "a", encoding="utf-8") as fh:
                fh.write(result.model_dump_json() + "\n")
        return result

    async def list_results(
        self, run_id: str, limit: int, offset: int
    ) -> list[BenchmarkResult]:
        return self._read_results(run_id)[offset : offset + limit]

    async def get_result(self, result_id: str) -> BenchmarkResult | None:
        for path in self._results_dir.glob("*.jsonl"):
            for result in self._read_results(path.stem):
                if result.id == result_id:
                    return result
        return None

    async def update_result(
        self, result_id: str, fields: dict[str, Any]
    ) -> BenchmarkResult:
        async with self._lock:
            for path in self._results_dir.glob("*.jsonl"):
                results = self._read_results(path.stem)
                for index, result in enumerate(results):
                    if result.id != result_id:
                        continue
                    updated = BenchmarkResult.model_validate(
                        {**result.model_dump(), **fields}
                    )
                    results[index] = updated
                    self._atomic_write(
                        path, "".join(r.model_dump_json() + "\n" for r in results)
                    )
                    return updated
        raise StoreError(reason=f"result '{result_id}' does not exist")

    def _run_path(self, run_id: str) -> Path:
        return self._runs_dir / f"{_file_stem(run_id)}.json"

    def _results_path(self, run_id: str) -> Path:
        return self._results_dir / f"{_file_stem(run_id)}.jsonl"

    def _read_run(self, run_id: str) -> Run | None:
        path = self._run_path(run_id)
        try:
            return Run.model_validate_json(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except ValidationError as exc:
            raise StoreError(reason=f"corrupt run file {path}: {exc}") from exc

    def _write_run(self, run: Run) -> None:
        self._atomic_write(self._run_path(run.id), run.model_dump_json(indent=2))

    def _read_results(self, run_id: str) -> list[BenchmarkResult]:
        path = self._results_path(run_id)
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return []
        try:
            return [
                BenchmarkResult.model_validate_json(line)
                for line in lines
                if line.strip()
            ]
        except ValidationError as exc:
            raise StoreError(reason=f"corrupt results file {path}: {exc}") from exc

    def _atomic_write(self, path: Path, content: str) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as tmp:
            tmp.write(content)
        os.replace(tmp.name, path)


def _file_stem(run_id: str) -> str:
    """Run ids name files directly, so they must stay inside the store."""
    if not run_id or run_id in {".", ".."} or "/" in run_id or "\\" in run_id:
        raise StoreError(reason=f"invalid run id {run_id!r}")
    return run_id
