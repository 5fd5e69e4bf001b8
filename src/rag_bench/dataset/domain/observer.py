"""Observer port for the dataset domain — defines events in domain language."""

from typing import Protocol


class DatasetObserver(Protocol):
    def dataset_loading_started(self, dataset_id: str, path: str) -> None: ...

    def dataset_loading_completed(
        self, dataset_id: str, total_questions: int, active_questions: int
    ) -> None: ...

    def dataset_loading_failed(self, dataset_id: str, reason: str) -> None: ...
