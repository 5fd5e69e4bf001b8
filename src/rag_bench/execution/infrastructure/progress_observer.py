"""ProgressExecutionObserver — renders a Rich question progress bar to stderr."""

from rich.console import Console
from rich.progress import (
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.text import Text


class _CountsColumn(ProgressColumn):
    """Renders done+inflight/total with colors matching the bar segments."""

    def render(self, task: Task) -> Text:
        done = int(task.fields.get("done", 0))
        inflight = int(task.fields.get("inflight", 0))
        total = int(task.total or 0)
        return Text.assemble(
            (str(done), "bright_green"),
            ("+", "dim white"),
            (str(inflight), "grey50"),
            ("/", "dim white"),
            (str(total), "default"),
        )


class _SegmentedBarColumn(ProgressColumn):
    """Three segments: committed, being answered, not started."""

    def __init__(self, bar_width: int = 40) -> None:
        super().__init__()
        self.bar_width = bar_width

    def render(self, task: Task) -> Text:
        total = task.total or 0
        if total > 0:
            done_cells = int(task.completed / total * self.bar_width)
            inflight = int(task.fields.get("inflight", 0))
            inflight_cells = min(
                int(inflight / total * self.bar_width),
                self.bar_width - done_cells,
            )
        else:
            done_cells = 0
            inflight_cells = 0
        remaining_cells = self.bar_width - done_cells - inflight_cells

        result = Text()
        result.append("█" * done_cells, style="bright_green")
        result.append("▒" * inflight_cells, style="grey50")
        result.append("░" * remaining_cells, style="dim white")
        return result


class ProgressExecutionObserver:
    """Shows one progress bar per executing run on stderr.

    Only execution_started, question_started, execution_progress and the
    terminal events produce output; all other events are no-ops.

    Pass ``disabled=True`` to keep the counters without rendering (useful in tests).

    Does NOT inherit from ExecutionObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self.started = 0
        self.done = 0
        self.total = 0
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    def _refresh(self) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(
            self._task_id,
            completed=self.done,
            done=self.done,
            inflight=max(0, self.started - self.done),
        )

    def _stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def execution_started(
        self, run_id: str, total_questions: int, parallelism: int
    ) -> None:
        self.started = 0
        self.done = 0
        self.total = total_questions
        if self._disabled:
            return

        self._progress = Progress(
            TextColumn("{task.description}"),
            _SegmentedBarColumn(bar_width=40),
            _CountsColumn(),
            TimeElapsedColumn(),
            TextColumn("eta"),
            TimeRemainingColumn(),
            console=Console(stderr=True),
            refresh_per_second=10,
            transient=False,
        )
        self._task_id = self._progress.add_task(
            description=f"[bold]run {run_id[:8]}[/bold]",
            total=float(total_questions),
            done=0,
            inflight=0,
        )
        self._progress.start()

    def question_started(self, run_id: str, question_id: str) -> None:
        self.started += 1
        self._refresh()

    def question_completed(
        self, run_id: str, question_id: str, total_latency_ms: int
    ) -> None:
        pass

    def question_failed(self, run_id: str, question_id: str, reason: str) -> None:
        pass

    def generation_failed(self, run_id: str, question_id: str, reason: str) -> None:
        pass

    def execution_progress(
        self, run_id: str, progress: int, completed: int, total: int
    ) -> None:
        self.done = completed
        self._refresh()

    def execution_cancelled(self, run_id: str, completed: int, total: int) -> None:
        self._stop()

    def execution_completed(
        self, run_id: str, total_questions: int, elapsed_seconds: float
    ) -> None:
        self._stop()

    def execution_failed(self, run_id: str, reason: str) -> None:
        self._stop()
