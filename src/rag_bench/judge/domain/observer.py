"""JudgeObserver port — domain events emitted during judge invocations."""

from typing import Protocol


class JudgeObserver(Protocol):
    """Observer port for judge domain events.

    ``evaluator`` is one of faithfulness, answer_relevance, context_relevance
    or hallucination.
    """

    def judge_evaluation_started(self, evaluator: str, model: str) -> None: ...

    def judge_evaluation_completed(self, evaluator: str, duration_ms: int) -> None: ...

    def judge_evaluation_failed(self, evaluator: str, reason: str) -> None: ...
