"""Tests for CompositeExecutionObserver."""

from rag_bench.execution.infrastructure.composite_observer import (
    CompositeExecutionObserver,
)
from tests.execution.fake_observer import FakeExecutionObserver


def _make_composite(
    *observers: FakeExecutionObserver,
) -> CompositeExecutionObserver:
    return CompositeExecutionObserver(observers=list(observers))


class TestCompositeExecutionObserverFanOut:
    """Every event is forwarded to all observers in order."""

    def test_execution_started_forwarded_to_all(self) -> None:
        obs_a = FakeExecutionObserver()
        obs_b = FakeExecutionObserver()
        composite = _make_composite(obs_a, obs_b)

        composite.execution_started(run_id="run-1", total_questions=3, parallelism=2)

        assert obs_a.execution_started_events[0].run_id == "run-1"
        assert obs_b.execution_started_events[0].parallelism == 2

    def test_question_events_forwarded(self) -> None:
        obs = FakeExecutionObserver()
        composite = _make_composite(obs)

        composite.question_started(run_id="r", question_id="q1")
        composite.question_completed(run_id="r", question_id="q1", total_latency_ms=12)
        composite.question_failed(run_id="r", question_id="q2", reason="boom")
        composite.generation_failed(run_id="r", question_id="q3", reason="quota")

        assert obs.question_started_ids == ["q1"]
        assert obs.question_completed_events[0].total_latency_ms == 12
        assert obs.question_failed_events[0].reason == "boom"
        assert obs.generation_failed_events[0].question_id == "q3"

    def test_terminal_events_forwarded(self) -> None:
        obs = FakeExecutionObserver()
        composite = _make_composite(obs)

        composite.execution_progress(run_id="r", progress=50, completed=1, total=2)
        composite.execution_cancelled(run_id="r", completed=1, total=2)
        composite.execution_completed(
            run_id="r", total_questions=2, elapsed_seconds=1.5
        )
        composite.execution_failed(run_id="r", reason="boom")

        assert obs.progress_events[0].progress == 50
        assert obs.cancelled_events[0].completed == 1
        assert obs.completed_events[0].elapsed_seconds == 1.5
        assert obs.failed_events[0].reason == "boom"

    def test_no_observers_is_a_no_op(self) -> None:
        composite = _make_composite()

        composite.execution_failed(run_id="r", reason="boom")
