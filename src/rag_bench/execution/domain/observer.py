"""Observer port for the execution domain — defines events in domain language."""

from typing import Protocol


class ExecutionObserver(Protocol):
    """Observer port emitting structured events while a run executes.

    Implementations may log to structlog, render progress, or record for tests.
    """

    def execution_started(
        self, run_id: str, total_questions: int, parallelism: int
    ) -> None: ...

    def question_started(self, run_id: str, question_id: str) -> None: ...

    def question_completed(
        self, run_id: str, question_id: str, total_latency_ms: int
    ) -> None: ...

    def question_failed(self, run_id: str, question_id: str, reason: str) -> None: ...

    def generation_failed(self, run_id: str, question_id: str, reason: str) -> None: ...

    def execution_progress(
        self, run_id: str, progress: int, completed: int, total: int
    ) -> None: ...

    def execution_cancelled(self, run_id: str, completed: int, total: int) -> None: ...

    def execution_completed(
        self, run_id: str, total_questions: int, elapsed_seconds: float
    ) -> None: ...

    def execution_failed(self, run_id: str, reason: str) -> None: ...
