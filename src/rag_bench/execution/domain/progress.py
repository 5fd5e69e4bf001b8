"""Progress callback signature and the summary returned by an execution."""

from collections.abc import Callable

from pydantic import BaseModel, Field

from rag_bench.metrics.domain.models import AggregateMetrics
from rag_bench.run.domain.status import RunStatus

# (percent, completed_count, total_count)
type ProgressCallback = Callable[[int, int, int], None]


class ExecutionSummary(BaseModel, frozen=True):
    """Outcome of one execution; ``aggregate_metrics`` is set only when completed."""

    run_id: str
    status: RunStatus
    total_questions: int = Field(ge=0)
    completed_questions: int = Field(ge=0)
    aggregate_metrics: AggregateMetrics | None = None
