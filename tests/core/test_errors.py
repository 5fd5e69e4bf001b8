"""Tests verifying the RagBenchError type hierarchy."""

from pathlib import Path

import pytest

from rag_bench.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from rag_bench.core.errors import RagBenchError
from rag_bench.dataset.infrastructure.errors import DatasetLoadError
from rag_bench.generation.infrastructure.errors import GenerationError
from rag_bench.judge.infrastructure.errors import JudgeResponseParseError
from rag_bench.retrieval.infrastructure.errors import RetrievalError
from rag_bench.run.domain.errors import (
    EmptyDatasetError,
    ResultNotFoundError,
    RunAlreadyCompletedError,
    RunAlreadyRunningError,
    RunMetricsMissingError,
    RunNotCancellableError,
    RunNotComparableError,
    RunNotFoundError,
    RunNotPendingError,
)
from rag_bench.run.infrastructure.errors import StoreError

_ERRORS: list[RagBenchError] = [
    MissingEnvVarsError(missing_vars=["MY_VAR"]),
    ConfigValidationError(reason="bad value"),
    ConfigLoadError(path=Path("/some/config.yaml")),
    DatasetLoadError(dataset_id="ds", reason="file not found"),
    GenerationError(reason="timeout"),
    RetrievalError(reason="HTTP 500"),
    JudgeResponseParseError(reason="not JSON"),
    StoreError(reason="disk full"),
    RunNotFoundError("r1"),
    RunAlreadyRunningError("r1"),
    RunAlreadyCompletedError("r1"),
    RunNotPendingError("r1", status="failed"),
    RunNotCancellableError("r1", status="completed"),
    EmptyDatasetError("ds"),
    RunNotComparableError("r1", status="pending"),
    RunMetricsMissingError("r1"),
    ResultNotFoundError("res1"),
]


class TestRagBenchErrorHierarchy:
    """All rag-bench-specific exceptions inherit from RagBenchError."""

    @pytest.mark.parametrize("error", _ERRORS, ids=lambda e: type(e).__name__)
    def test_is_rag_bench_error(self, error: RagBenchError) -> None:
        assert isinstance(error, RagBenchError)

    @pytest.mark.parametrize("error", _ERRORS, ids=lambda e: type(e).__name__)
    def test_message_starts_with_failed(self, error: RagBenchError) -> None:
        assert str(error).startswith("Failed to ")

    def test_rag_bench_error_is_exception(self) -> None:
        assert isinstance(RagBenchError("test"), Exception)

    def test_not_retriable_by_default(self) -> None:
        assert RagBenchError("test").retriable is False


class TestRunErrorMessages:
    def test_not_comparable_mentions_completed(self) -> None:
        assert "must be completed" in str(RunNotComparableError("r1", status="pending"))

    def test_missing_env_vars_are_sorted(self) -> None:
        error = MissingEnvVarsError(missing_vars=["B", "A"])
        assert str(error).endswith("A, B")
