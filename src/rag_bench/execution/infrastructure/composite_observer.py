"""CompositeExecutionObserver — fans out all events to a list of observers."""

from rag_bench.execution.domain.observer import ExecutionObserver


class CompositeExecutionObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from ExecutionObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[ExecutionObserver]) -> None:
        self._observers = observers

    def execution_started(
        self, run_id: str, total_questions: int, parallelism: int
    ) -> None:
        for obs in self._observers:
            obs.execution_started(
                run_id=run_id, total_questions=total_questions, parallelism=parallelism
            )

    def question_started(self, run_id: str, question_id: str) -> None:
        for obs in self._observers:
            obs.question_started(run_id=run_id, question_id=question_id)

    def question_completed(
        self, run_id: str, question_id: str, total_latency_ms: int
    ) -> None:
        for obs in self._observers:
            obs.question_completed(
                run_id=run_id,
                question_id=question_id,
                total_latency_ms=total_latency_ms,
            )

    def question_failed(self, run_id: str, question_id: str, reason: str) -> None:
        for obs in self._observers:
            obs.question_failed(run_id=run_id, question_id=question_id, reason=reason)

    def generation_failed(self, run_id: str, question_id: str, reason: str) -> None:
        for obs in self._observers:
            obs.generation_failed(
                run_id=run_id, question_id=question_id, reason=reason
            )

    def execution_progress(
        self, run_id: str, progress: int, completed: int, total: int
    ) -> None:
        for obs in self._observers:
            obs.execution_progress(
                run_id=run_id, progress=progress, completed=completed, total=total
            )

    def execution_cancelled(self, run_id: str, completed: int, total: int) -> None:
        for obs in self._observers:
            obs.execution_cancelled(run_id=run_id, completed=completed, total=total)

    def execution_completed(
        self, run_id: str, total_questions: int, elapsed_seconds: float
    ) -> None:
        for obs in self._observers:
            obs.execution_completed(
                run_id=run_id,
                total_questions=total_questions,
                elapsed_seconds=elapsed_seconds,
            )

    def execution_failed(self, run_id: str, reason: str) -> None:
        for obs in self._observers:
            obs.execution_failed(run_id=run_id, reason=reason)
