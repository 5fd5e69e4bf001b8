"""StructlogExecutionObserver — production observer that delegates to structlog."""

import structlog


class StructlogExecutionObserver:
    """Logs execution domain events to structlog.

    Does NOT inherit from ExecutionObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def execution_started(
        self, run_id: str, total_questions: int, parallelism: int
    ) -> None:
        self._log.info(
            "execution.started",
            run_id=run_id,
            total_questions=total_questions,
            parallelism=parallelism,
        )

    def question_started(self, run_id: str, question_id: str) -> None:
        self._log.debug(
            "execution.question.started", run_id=run_id, question_id=question_id
        )

    def question_completed(
        self, run_id: str, question_id: str, total_latency_ms: int
    ) -> None:
        self._log.debug(
            "execution.question.completed",
            run_id=run_id,
            question_id=question_id,
            total_latency_ms=total_latency_ms,
        )

    def question_failed(self, run_id: str, question_id: str, reason: str) -> None:
        self._log.error(
            "execution.question.failed",
            run_id=run_id,
            question_id=question_id,
            reason=reason,
        )

    def generation_failed(self, run_id: str, question_id: str, reason: str) -> None:
        self._log.warning(
            "execution.generation.failed",
            run_id=run_id,
            question_id=question_id,
            reason=reason,
        )

    def execution_progress(
        self, run_id: str, progress: int, completed: int, total: int
    ) -> None:
        self._log.info(
            "execution.progress",
            run_id=run_id,
            progress=progress,
            completed=completed,
            total=total,
        )

    def execution_cancelled(self, run_id: str, completed: int, total: int) -> None:
        self._log.warning(
            "execution.cancelled", run_id=run_id, completed=completed, total=total
        )

    def execution_completed(
        self, run_id: str, total_questions: int, elapsed_seconds: float
    ) -> None:
        self._log.info(
            "execution.completed",
            run_id=run_id,
            total_questions=total_questions,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def execution_failed(self, run_id: str, reason: str) -> None:
        self._log.error("execution.failed", run_id=run_id, reason=reason)
