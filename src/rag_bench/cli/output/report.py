"""Terminal rendering of runs, results and run comparisons."""

import typer

from rag_bench.comparison.domain.comparison import RunComparison
from rag_bench.execution.domain.progress import ExecutionSummary
from rag_bench.metrics.domain.models import AggregateMetrics, FailedMetrics
from rag_bench.run.domain.result import BenchmarkResult
from rag_bench.run.domain.run import Run
from rag_bench.run.domain.status import RunStatus

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_BLUE = "\033[34m"
_WHITE = "\033[97m"

_STATUS_COLORS: dict[RunStatus, str] = {
    RunStatus.PENDING: _DIM,
    RunStatus.RUNNING: _CYAN,
    RunStatus.COMPLETED: _GREEN,
    RunStatus.FAILED: _RED,
    RunStatus.CANCELLED: _YELLOW,
}


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _status(status: RunStatus) -> str:
    return f"{_STATUS_COLORS.get(status, '')}{status}{_RESET}"


def _score_color(score: float) -> str:
    if score >= 0.8:
        return _GREEN
    if score >= 0.5:
        return _YELLOW
    return _RED


def _fmt(value: float) -> str:
    """Scores as 0.000, latencies and counts as integers."""
    if float(value).is_integer() and abs(value) >= 1:
        return f"{int(value)}"
    return f"{value:.3f}"


def _field(label: str, value: object, width: int = 14) -> None:
    typer.echo(f"  {_DIM}{label:<{width}}{_RESET}  {_WHITE}{value}{_RESET}")


def print_run(run: Run) -> None:
    typer.echo("")
    _rule(color=_BLUE)
    typer.echo(f"{_BLUE}{_BOLD}  Run {run.id}{_RESET}")
    _rule(color=_BLUE)
    _field("Name", run.name or "-")
    _field("Knowledge base", run.knowledge_base_id)
    _field("Dataset", run.dataset_id)
    _field("Type", run.run_type)
    typer.echo(f"  {_DIM}{'Status':<14}{_RESET}  {_status(run.status)}")
    _field("Progress", f"{run.progress}%")
    _field("Created", run.created_at.isoformat(timespec="seconds"))
    if run.started_at is not None:
        _field("Started", run.started_at.isoformat(timespec="seconds"))
    if run.completed_at is not None:
        _field("Finished", run.completed_at.isoformat(timespec="seconds"))
    if run.error_message:
        typer.echo(f"  {_DIM}{'Error':<14}{_RESET}  {_RED}{run.error_message}{_RESET}")
    if run.aggregate_metrics is not None:
        _field("LLM tokens", run.total_llm_tokens)
        _field("Embed tokens", run.total_embedding_tokens)
        _field("Cost (USD)", f"{run.estimated_cost_usd:.6f}")
        print_metrics(run.aggregate_metrics)
    typer.echo("")


def print_metrics(metrics: AggregateMetrics) -> None:
    sections = (
        ("Retrieval", metrics.retrieval.model_dump()),
        ("Generation", metrics.generation.model_dump()),
        ("Overall", metrics.overall.model_dump()),
    )
    for title, values in sections:
        typer.echo("")
        typer.echo(f"  {_BOLD}{title}{_RESET}")
        for name, value in values.items():
            if "latency" in name or isinstance(value, int):
                rendered = f"{_WHITE}{value}{_RESET}"
            else:
                rendered = f"{_score_color(value)}{value:.3f}{_RESET}"
            typer.echo(f"    {_DIM}{name:<24}{_RESET}{rendered}")


def print_runs(runs: list[Run]) -> None:
    if not runs:
        typer.echo(f"{_DIM}No runs found.{_RESET}")
        return
    header = f"{'ID':<36}  {'Status':<10}  {'Type':<15}  {'Progress':>8}  Name"
    typer.echo(f"  {_DIM}{header}{_RESET}")
    for run in runs:
        status = f"{_STATUS_COLORS.get(run.status, '')}{run.status:<10}{_RESET}"
        typer.echo(
            f"  {run.id:<36}  {status}  {run.run_type:<15}  {run.progress:>7}%  "
            f"{run.name or ''}"
        )


def print_results(results: list[BenchmarkResult]) -> None:
    if not results:
        typer.echo(f"{_DIM}No results found.{_RESET}")
        return
    for result in results:
        typer.echo("")
        typer.echo(f"{_BOLD}  {result.question_id}{_RESET}  {_DIM}{result.id}{_RESET}")
        typer.echo(f"    {_DIM}Q:{_RESET} {result.input_question}")
        if isinstance(result.metrics, FailedMetrics):
            typer.echo(f"    {_RED}error: {result.metrics.error}{_RESET}")
            continue
        answer = result.generated_answer or f"{_DIM}(no answer){_RESET}"
        typer.echo(f"    {_DIM}A:{_RESET} {answer}")
        retrieval = result.metrics.retrieval
        typer.echo(
            f"    {_DIM}precision{_RESET} {retrieval.precision:.3f}  "
            f"{_DIM}recall{_RESET} {retrieval.recall:.3f}  "
            f"{_DIM}mrr{_RESET} {retrieval.mrr:.3f}  "
            f"{_DIM}ndcg{_RESET} {retrieval.ndcg:.3f}  "
            f"{_DIM}latency{_RESET} {result.total_latency_ms or 0}ms"
        )
        if result.human_rating is not None:
            typer.echo(
                f"    {_DIM}rated{_RESET} {result.human_rating}/5 "
                f"{_DIM}by{_RESET} {result.evaluated_by or '-'}"
            )


def print_summary(summary: ExecutionSummary) -> None:
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  rag-bench  ·  Run {summary.status}{_RESET}")
    _rule(color=_CYAN)
    _field("Run", summary.run_id)
    _field("Questions", f"{summary.completed_questions}/{summary.total_questions}")
    if summary.aggregate_metrics is not None:
        print_metrics(summary.aggregate_metrics)
    typer.echo("")


def print_comparison(result: RunComparison) -> None:
    """Render the per-metric table; the better side of each row is marked ▲."""
    name_a = result.run_a.name or result.run_a.id[:8]
    name_b = result.run_b.name or result.run_b.id[:8]

    typer.echo("")
    _rule(color=_BLUE)
    typer.echo(f"{_BLUE}{_BOLD}  {name_a} (a)  vs  {name_b} (b){_RESET}")
    _rule(color=_BLUE)
    typer.echo(
        f"  {_DIM}{'Metric':<20}  {'a':>10}  {'b':>10}  {'diff':>10}  {'%':>8}{_RESET}"
    )
    typer.echo(f"  {'─' * 20}  {'─' * 10}  {'─' * 10}  {'─' * 10}  {'─' * 8}")

    for row in result.comparison.values():
        mark_a = f"{_BOLD}▲{_RESET}" if row.better == "a" else " "
        mark_b = f"{_BOLD}▲{_RESET}" if row.better == "b" else " "
        diff_color = _DIM if row.better == "tie" else (
            _GREEN if row.better == "b" else _RED
        )
        typer.echo(
            f"  {row.name:<20}  {_fmt(row.a):>9}{mark_a}  {_fmt(row.b):>9}{mark_b}  "
            f"{diff_color}{row.diff:>+10.4f}{_RESET}  {row.pct_change:>+7.2f}%"
        )

    summary = result.summary
    _rule()
    if summary.winner == "tie":
        verdict = f"{_YELLOW}{_BOLD}tie{_RESET}"
    else:
        winner = name_a if summary.winner == "a" else name_b
        verdict = f"{_GREEN}{_BOLD}{winner} ({summary.winner}){_RESET}"
    typer.echo(
        f"  Winner: {verdict}  {_DIM}a wins {summary.a_wins} · "
        f"b wins {summary.b_wins} · ties {summary.ties}{_RESET}"
    )
    typer.echo("")
