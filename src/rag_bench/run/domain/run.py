"""Run — one execution of a dataset against a pipeline configuration snapshot."""

import uuid
from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rag_bench.metrics.domain.models import AggregateMetrics
from rag_bench.run.domain.errors import (
    RunAlreadyCompletedError,
    RunAlreadyRunningError,
    RunNotPendingError,
)
from rag_bench.run.domain.status import RunStatus, RunType


def _now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


class Run(BaseModel):
    """Immutable snapshot of a run record.

    Every state change produces a new, re-validated Run; the aggregate metrics
    are present exactly when the run is completed.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id, min_length=1)
    knowledge_base_id: str = Field(min_length=1)
    dataset_id: str = Field(min_length=1)
    name: str | None = None
    description: str | None = None
    run_type: RunType = RunType.FULL
    status: RunStatus = RunStatus.PENDING
    progress: int = Field(default=0, ge=0, le=100)
    rag_config: dict[str, Any] = Field(default_factory=dict)
    aggregate_metrics: AggregateMetrics | None = None
    error_message: str | None = None
    created_at: datetime = Field(default_factory=_now)
    started_at: datetime | None = None
    completed_at: datetime | None = None
    total_llm_tokens: int = Field(default=0, ge=0)
    total_embedding_tokens: int = Field(default=0, ge=0)
    estimated_cost_usd: float = Field(default=0.0, ge=0.0)

    @model_validator(mode="after")
    def _metrics_iff_completed(self) -> Self:
        completed = self.status == RunStatus.COMPLETED
        if completed and self.aggregate_metrics is None:
            raise ValueError("a completed run must carry aggregate_metrics")
        if not completed and self.aggregate_metrics is not None:
            raise ValueError(
                f"a {self.status} run must not carry aggregate_metrics"
            )
        return self

    def with_updates(self, fields: dict[str, Any]) -> "Run":
        """Return a re-validated copy with ``fields`` merged in."""
        return Run.model_validate({**self.model_dump(), **fields})

    def ensure_startable(self) -> None:
        """
        Raises:
            RunAlreadyRunningError: if the run is running.
            RunAlreadyCompletedError: if the run is completed.
            RunNotPendingError: if the run failed or was cancelled.
        """
        match self.status:
            case RunStatus.PENDING:
                return
            case RunStatus.RUNNING:
                raise RunAlreadyRunningError(self.id)
            case RunStatus.COMPLETED:
                raise RunAlreadyCompletedError(self.id)
            case _:
                raise RunNotPendingError(self.id, status=self.status)
