"""Precondition errors raised by run management, execution and comparison.

These are raised before any state is mutated and are meant to be surfaced to
the caller as client-facing failures.
"""

from rag_bench.core.errors import RagBenchError


class RunNotFoundError(RagBenchError):
    def __init__(self, run_id: str) -> None:
        self.run_id = run_id
        super().__init__(f"Failed to find run: '{run_id}' does not exist")


class RunAlreadyRunningError(RagBenchError):
    def __init__(self, run_id: str) -> None:
        self.run_id = run_id
        super().__init__(f"Failed to start run: '{run_id}' is already running")


class RunAlreadyCompletedError(RagBenchError):
    def __init__(self, run_id: str) -> None:
        self.run_id = run_id
        super().__init__(f"Failed to start run: '{run_id}' is already completed")


class RunNotPendingError(RagBenchError):
    """Raised when a failed or cancelled run is started again."""

    def __init__(self, run_id: str, status: str) -> None:
        self.run_id = run_id
        self.status = status
        super().__init__(
            f"Failed to start run: '{run_id}' is {status}; only pending runs can start"
        )


class RunNotCancellableError(RagBenchError):
    def __init__(self, run_id: str, status: str) -> None:
        self.run_id = run_id
        self.status = status
        super().__init__(f"Failed to cancel run: '{run_id}' is already {status}")


class EmptyDatasetError(RagBenchError):
    def __init__(self, dataset_id: str) -> None:
        self.dataset_id = dataset_id
        super().__init__(
            f"Failed to execute run: dataset '{dataset_id}' has no active questions"
        )


class RunNotComparableError(RagBenchError):
    def __init__(self, run_id: str, status: str) -> None:
        self.run_id = run_id
        self.status = status
        super().__init__(
            f"Failed to compare runs: both runs must be completed to compare"
            f" ('{run_id}' is {status})"
        )


class RunMetricsMissingError(RagBenchError):
    def __init__(self, run_id: str) -> None:
        self.run_id = run_id
        super().__init__(
            f"Failed to compare runs: run '{run_id}' has no aggregate metrics"
        )


class ResultNotFoundError(RagBenchError):
    def __init__(self, result_id: str) -> None:
        self.result_id = result_id
        super().__init__(f"Failed to find result: '{result_id}' does not exist")
