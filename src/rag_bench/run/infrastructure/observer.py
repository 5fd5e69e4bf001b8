"""Structlog implementation of the RunObserver port."""

import structlog


class StructlogRunObserver:
    """Delegates run domain events to structlog.

    Satisfies the RunObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def run_created(
        self, run_id: str, knowledge_base_id: str, dataset_id: str, run_type: str
    ) -> None:
        self._log.info(
            "run.created",
            run_id=run_id,
            knowledge_base_id=knowledge_base_id,
            dataset_id=dataset_id,
            run_type=run_type,
        )

    def run_status_changed(self, run_id: str, status: str) -> None:
        self._log.info("run.status_changed", run_id=run_id, status=str(status))

    def run_transition_rejected(
        self, run_id: str, from_statuses: list[str], to_status: str
    ) -> None:
        self._log.warning(
            "run.transition_rejected",
            run_id=run_id,
            from_statuses=from_statuses,
            to_status=str(to_status),
        )

    def run_deleted(self, run_id: str) -> None:
        self._log.info("run.deleted", run_id=run_id)

    def result_evaluated(self, result_id: str, rating: int) -> None:
        self._log.info("run.result_evaluated", result_id=result_id, rating=rating)
