"""Tests for the file-backed RunStore."""

from pathlib import Path

import pytest

from rag_bench.run.infrastructure.errors import StoreError
from rag_bench.run.infrastructure.json_store import JsonRunStore
from tests.run.store_contract import StoreContract, make_result, make_run


class TestJsonRunStore(StoreContract):
    @pytest.fixture
    def store(self, tmp_path: Path) -> JsonRunStore:
        return JsonRunStore(root=tmp_path)


class TestJsonRunStoreFiles:
    async def test_runs_survive_a_new_store_instance(self, tmp_path: Path) -> None:
        run = await JsonRunStore(root=tmp_path).create_run(make_run(name="baseline"))
        await JsonRunStore(root=tmp_path).add_result(make_result(run.id))

        reopened = JsonRunStore(root=tmp_path)

        assert (await reopened.get_run(run.id)).name == "baseline"
        assert len(await reopened.list_results(run.id, limit=10, offset=0)) == 1

    async def test_file_layout(self, tmp_path: Path) -> None:
        store = JsonRunStore(root=tmp_path)
        run = await store.create_run(make_run())
        await store.add_result(make_result(run.id))

        assert (tmp_path / "runs" / f"{run.id}.json").exists()
        assert (tmp_path / "results" / f"{run.id}.jsonl").exists()
        assert not list((tmp_path / "runs").glob("*.tmp"))

    async def test_corrupt_run_file_raises(self, tmp_path: Path) -> None:
        store = JsonRunStore(root=tmp_path)
        (tmp_path / "runs" / "bad.json").write_text("{not json")

        with pytest.raises(StoreError, match="corrupt run file"):
            await store.get_run("bad")

    @pytest.mark.parametrize("run_id", ["../outside", "a/b", "..\\x", "..", ""])
    async def test_run_id_outside_the_store_is_rejected(
        self, tmp_path: Path, run_id: str
    ) -> None:
        store = JsonRunStore(root=tmp_path / "store")
        (tmp_path / "outside.json").write_text("{}")

        with pytest.raises(StoreError, match="invalid run id"):
            await store.get_run(run_id)

        with pytest.raises(StoreError, match="invalid run id"):
            await store.delete_run(run_id)

        assert (tmp_path / "outside.json").exists()
