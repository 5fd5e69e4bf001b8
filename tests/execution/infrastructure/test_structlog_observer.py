"""Tests for StructlogExecutionObserver event names and levels."""

from structlog.testing import capture_logs

from rag_bench.execution.infrastructure.observer import StructlogExecutionObserver


class TestStructlogExecutionObserver:
    def test_started_event(self) -> None:
        with capture_logs() as logs:
            StructlogExecutionObserver().execution_started(
                run_id="run-1", total_questions=3, parallelism=2
            )

        assert logs[0]["event"] == "execution.started"
        assert logs[0]["log_level"] == "info"
        assert logs[0]["total_questions"] == 3

    def test_question_failure_is_an_error(self) -> None:
        with capture_logs() as logs:
            StructlogExecutionObserver().question_failed(
                run_id="run-1", question_id="q1", reason="boom"
            )

        assert logs[0]["event"] == "execution.question.failed"
        assert logs[0]["log_level"] == "error"
        assert logs[0]["reason"] == "boom"

    def test_generation_failure_is_a_warning(self) -> None:
        with capture_logs() as logs:
            StructlogExecutionObserver().generation_failed(
                run_id="run-1", question_id="q1", reason="quota"
            )

        assert logs[0]["event"] == "execution.generation.failed"
        assert logs[0]["log_level"] == "warning"
