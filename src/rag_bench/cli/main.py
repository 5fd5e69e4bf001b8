"""CLI entrypoint for rag-bench — typer app managing benchmark runs."""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

import structlog
import typer

from rag_bench.benchmark.application.service import BenchmarkService
from rag_bench.cli.output.report import (
    print_comparison,
    print_results,
    print_run,
    print_runs,
    print_summary,
)
from rag_bench.comparison.application.comparator import RunComparator
from rag_bench.config.domain.config import BenchConfig
from rag_bench.config.infrastructure.observer import StructlogConfigObserver
from rag_bench.config.infrastructure.yaml_loader import YamlConfigLoader
from rag_bench.core.errors import RagBenchError
from rag_bench.dataset.infrastructure.jsonl_store import JsonlQuestionStore
from rag_bench.dataset.infrastructure.observer import StructlogDatasetObserver
from rag_bench.execution.application.engine import ExecutionEngine
from rag_bench.execution.application.question_executor import QuestionExecutor
from rag_bench.execution.domain.observer import ExecutionObserver
from rag_bench.execution.infrastructure.composite_observer import (
    CompositeExecutionObserver,
)
from rag_bench.execution.infrastructure.observer import StructlogExecutionObserver
from rag_bench.execution.infrastructure.progress_observer import (
    ProgressExecutionObserver,
)
from rag_bench.generation.infrastructure.litellm import LiteLLMGenerator
from rag_bench.judge.infrastructure.llm_judge import LLMJudge
from rag_bench.judge.infrastructure.observer import StructlogJudgeObserver
from rag_bench.knowledge_base.infrastructure.configured import (
    ConfiguredKnowledgeBaseProvider,
)
from rag_bench.retrieval.infrastructure.http import HttpRetriever
from rag_bench.run.application.manager import RunManager, RunOptions
from rag_bench.run.domain.status import RunStatus, RunType
from rag_bench.run.infrastructure.json_store import JsonRunStore
from rag_bench.run.infrastructure.observer import StructlogRunObserver

app = typer.Typer(add_completion=False, help="Benchmark a RAG pipeline.")

_CONFIG_OPTION = typer.Option(
    Path("rag-bench.yaml"), "--config", "-c", help="Path to rag-bench config YAML"
)
_LOG_FORMAT_OPTION = typer.Option(
    "console", "--log-format", help="Log format: 'console' or 'json'"
)

type Action = Callable[[BenchmarkService], Awaitable[None]]


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_service(
    config: BenchConfig, show_progress: bool = False
) -> BenchmarkService:
    """Wire the production adapters described by config into a BenchmarkService."""
    knowledge_bases = ConfiguredKnowledgeBaseProvider(
        defaults=config.defaults, overrides=config.knowledge_bases
    )
    runs = RunManager(
        store=JsonRunStore(root=config.store.path),
        knowledge_bases=knowledge_bases,
        observer=StructlogRunObserver(),
    )

    observers: list[ExecutionObserver] = [StructlogExecutionObserver()]
    if show_progress:
        observers.append(ProgressExecutionObserver())
    execution_observer = CompositeExecutionObserver(observers=observers)

    generator = LiteLLMGenerator()
    executor = QuestionExecutor(
        retriever=HttpRetriever(config=config.retrieval),
        generator=generator,
        judge=LLMJudge(
            generator=generator,
            config=config.judge,
            observer=StructlogJudgeObserver(),
        ),
        observer=execution_observer,
    )
    engine = ExecutionEngine(
        runs=runs,
        questions=JsonlQuestionStore(
            root=config.dataset.path, observer=StructlogDatasetObserver()
        ),
        knowledge_bases=knowledge_bases,
        executor=executor,
        config=config.execution,
        observer=execution_observer,
    )
    return BenchmarkService(runs=runs, engine=engine, comparator=RunComparator(runs))


def _invoke(
    config_path: Path, log_format: str, action: Action, show_progress: bool = False
) -> None:
    """Load config, build the service and run one async action against it.

    RagBenchError is reported as a one-line message with exit code 1.
    """
    try:
        _configure_structlog(log_format=log_format)
        config = YamlConfigLoader(observer=StructlogConfigObserver()).load(
            path=config_path
        )
        service = build_service(
            config=config, show_progress=show_progress and log_format != "json"
        )
        asyncio.run(action(service))
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        typer.echo("Interrupted.")
        sys.exit(1)
    except RagBenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


@app.command()
def create(
    knowledge_base_id: str = typer.Argument(..., help="Knowledge base to benchmark"),
    dataset_id: str = typer.Argument(..., help="Dataset whose questions are asked"),
    name: str | None = typer.Option(None, "--name", help="Run name"),
    description: str | None = typer.Option(None, "--description"),
    run_type: RunType = typer.Option(RunType.FULL, "--run-type"),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Create a pending run, snapshotting the knowledge base's configuration."""

    async def action(service: BenchmarkService) -> None:
        run = await service.create_run(
            knowledge_base_id,
            dataset_id,
            RunOptions(name=name, description=description, run_type=run_type),
        )
        print_run(run)

    _invoke(config_path, log_format, action)


@app.command()
def start(
    run_id: str = typer.Argument(..., help="Pending run to execute"),
    parallelism: int | None = typer.Option(
        None, "--parallelism", "-p", min=1, help="Questions answered concurrently"
    ),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Execute a pending run in the foreground."""

    async def action(service: BenchmarkService) -> None:
        task = await service.start_run(run_id, parallelism=parallelism)
        try:
            summary = await task
        except asyncio.CancelledError:
            await service.cancel_run(run_id)
            raise
        print_summary(summary)

    _invoke(config_path, log_format, action, show_progress=True)


@app.command(name="list")
def list_runs(
    knowledge_base_id: str = typer.Argument(...),
    status: RunStatus | None = typer.Option(None, "--status"),
    limit: int = typer.Option(20, "--limit", min=1),
    offset: int = typer.Option(0, "--offset", min=0),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """List a knowledge base's runs, newest first."""

    async def action(service: BenchmarkService) -> None:
        print_runs(
            await service.list_runs(
                knowledge_base_id, status=status, limit=limit, offset=offset
            )
        )

    _invoke(config_path, log_format, action)


@app.command()
def show(
    run_id: str = typer.Argument(...),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Show a run with its aggregate metrics."""

    async def action(service: BenchmarkService) -> None:
        run = await service.get_run(run_id)
        if run is None:
            typer.echo(f"Run not found: {run_id}")
            raise typer.Exit(code=1)
        print_run(run)

    _invoke(config_path, log_format, action)


@app.command()
def results(
    run_id: str = typer.Argument(...),
    limit: int = typer.Option(100, "--limit", min=1),
    offset: int = typer.Option(0, "--offset", min=0),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Show per-question results in execution order."""

    async def action(service: BenchmarkService) -> None:
        print_results(await service.get_run_results(run_id, limit=limit, offset=offset))

    _invoke(config_path, log_format, action)


@app.command()
def rate(
    result_id: str = typer.Argument(...),
    rating: int = typer.Option(..., "--rating", min=1, max=5),
    feedback: str | None = typer.Option(None, "--feedback"),
    evaluated_by: str = typer.Option(..., "--by", help="Who is rating"),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Attach a human rating (1-5) to a result."""

    async def action(service: BenchmarkService) -> None:
        result = await service.add_human_evaluation(
            result_id, evaluated_by=evaluated_by, rating=rating, feedback=feedback
        )
        print_results([result])

    _invoke(config_path, log_format, action)


@app.command()
def cancel(
    run_id: str = typer.Argument(...),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Cancel a pending or running run."""

    async def action(service: BenchmarkService) -> None:
        print_run(await service.cancel_run(run_id))

    _invoke(config_path, log_format, action)


@app.command()
def delete(
    run_id: str = typer.Argument(...),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Delete a run and its results."""

    async def action(service: BenchmarkService) -> None:
        if not await service.delete_run(run_id):
            typer.echo(f"Run not found: {run_id}")
            raise typer.Exit(code=1)
        typer.echo(f"Deleted run {run_id}")

    _invoke(config_path, log_format, action)


@app.command()
def compare(
    run_id_a: str = typer.Argument(..., help="Baseline run (a)"),
    run_id_b: str = typer.Argument(..., help="Candidate run (b)"),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Compare two completed runs metric by metric."""

    async def action(service: BenchmarkService) -> None:
        print_comparison(await service.compare_runs(run_id_a, run_id_b))

    _invoke(config_path, log_format, action)


if __name__ == "__main__":
    app()
