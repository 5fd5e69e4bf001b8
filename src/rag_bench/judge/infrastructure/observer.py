"""Structlog implementation of the JudgeObserver port."""

import structlog


class StructlogJudgeObserver:
    """Delegates judge domain events to structlog.

    Satisfies the JudgeObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def judge_evaluation_started(self, evaluator: str, model: str) -> None:
        self._log.debug("judge.evaluation_started", evaluator=evaluator, model=model)

    def judge_evaluation_completed(self, evaluator: str, duration_ms: int) -> None:
        self._log.debug(
            "judge.evaluation_completed", evaluator=evaluator, duration_ms=duration_ms
        )

    def judge_evaluation_failed(self, evaluator: str, reason: str) -> None:
        self._log.warning("judge.evaluation_failed", evaluator=evaluator, reason=reason)
