"""Observer port for the run domain — defines events in domain language."""

from typing import Protocol


class RunObserver(Protocol):
    """Observer port emitting structured events for run lifecycle changes.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def run_created(
        self, run_id: str, knowledge_base_id: str, dataset_id: str, run_type: str
    ) -> None: ...

    def run_status_changed(self, run_id: str, status: str) -> None: ...

    def run_transition_rejected(
        self, run_id: str, from_statuses: list[str], to_status: str
    ) -> None: ...

    def run_deleted(self, run_id: str) -> None: ...

    def result_evaluated(self, result_id: str, rating: int) -> None: ...
