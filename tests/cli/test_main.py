"""End-to-end tests of the typer CLI against a file-backed store."""

from pathlib import Path

from typer.testing import CliRunner

from rag_bench.cli.main import app

runner = CliRunner()


def _write_config(tmp_path: Path) -> Path:
    path = tmp_path / "rag-bench.yaml"
    path.write_text(
        "name: cli-test\n"
        f"store:\n  path: {tmp_path / 'store'}\n"
        f"dataset:\n  path: {tmp_path / 'datasets'}\n"
        "retrieval:\n  url: http://localhost:9/search\n"
    )
    return path


def _run_ids(tmp_path: Path) -> list[str]:
    return [p.stem for p in (tmp_path / "store" / "runs").glob("*.json")]


class TestRunLifecycleCommands:
    def test_create_list_show_delete(self, tmp_path: Path) -> None:
        config = str(_write_config(tmp_path))

        created = runner.invoke(
            app, ["create", "kb-1", "ds-1", "--name", "baseline", "-c", config]
        )
        assert created.exit_code == 0, created.output
        [run_id] = _run_ids(tmp_path)

        listed = runner.invoke(app, ["list", "kb-1", "-c", config])
        assert listed.exit_code == 0
        assert run_id in listed.output

        shown = runner.invoke(app, ["show", run_id, "-c", config])
        assert shown.exit_code == 0
        assert "baseline" in shown.output

        deleted = runner.invoke(app, ["delete", run_id, "-c", config])
        assert deleted.exit_code == 0
        assert _run_ids(tmp_path) == []

    def test_cancel_pending_run(self, tmp_path: Path) -> None:
        config = str(_write_config(tmp_path))
        runner.invoke(app, ["create", "kb-1", "ds-1", "-c", config])
        [run_id] = _run_ids(tmp_path)

        cancelled = runner.invoke(app, ["cancel", run_id, "-c", config])

        assert cancelled.exit_code == 0
        assert "cancelled" in cancelled.output


class TestCommandErrors:
    def test_show_missing_run(self, tmp_path: Path) -> None:
        config = str(_write_config(tmp_path))

        result = runner.invoke(app, ["show", "missing", "-c", config])

        assert result.exit_code == 1
        assert "Run not found: missing" in result.output

    def test_start_with_missing_dataset_fails_the_run(self, tmp_path: Path) -> None:
        config = str(_write_config(tmp_path))
        runner.invoke(app, ["create", "kb-1", "nope", "-c", config])
        [run_id] = _run_ids(tmp_path)

        result = runner.invoke(app, ["start", run_id, "-c", config])

        assert result.exit_code == 1
        assert "Failed to load dataset 'nope'" in result.output

    def test_compare_pending_runs(self, tmp_path: Path) -> None:
        config = str(_write_config(tmp_path))
        runner.invoke(app, ["create", "kb-1", "ds-1", "-c", config])
        runner.invoke(app, ["create", "kb-1", "ds-1", "-c", config])
        run_a, run_b = _run_ids(tmp_path)

        result = runner.invoke(app, ["compare", run_a, run_b, "-c", config])

        assert result.exit_code == 1
        assert "must be completed" in result.output

    def test_missing_config(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["list", "kb-1", "-c", str(tmp_path / "absent.yaml")]
        )

        assert result.exit_code == 1
        assert "Failed to load config" in result.output
