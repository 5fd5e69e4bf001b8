"""Structlog implementation of the DatasetObserver port."""

import structlog


class StructlogDatasetObserver:
    """Delegates dataset domain events to structlog.

    Satisfies the DatasetObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def dataset_loading_started(self, dataset_id: str, path: str) -> None:
        self._log.info("dataset.loading_started", dataset_id=dataset_id, path=path)

    def dataset_loading_completed(
        self, dataset_id: str, total_questions: int, active_questions: int
    ) -> None:
        self._log.info(
            "dataset.loading_completed",
            dataset_id=dataset_id,
            total_questions=total_questions,
            active_questions=active_questions,
        )

    def dataset_loading_failed(self, dataset_id: str, reason: str) -> None:
        self._log.error("dataset.loading_failed", dataset_id=dataset_id, reason=reason)
