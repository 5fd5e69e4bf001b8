"""BenchmarkResult — the outcome of one question within one run."""

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from rag_bench.metrics.domain.models import FailedMetrics, ResultMetrics
from rag_bench.retrieval.domain.item import RetrievedItem


def _now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


class BenchmarkResult(BaseModel):
    """One row per (run, question).

    A question that raised during execution is stored with ``FailedMetrics``
    and every other field left empty. Token counts are split between the
    answer generation call and the judge calls.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id, min_length=1)
    run_id: str = Field(min_length=1)
    question_id: str = Field(min_length=1)
    input_question: str
    enhanced_query: str | None = None
    retrieved_context_ids: list[str] = Field(default_factory=list)
    retrieved_context: list[RetrievedItem] = Field(default_factory=list)
    generated_answer: str | None = None
    llm_provider: str | None = None
    llm_model: str | None = None

    query_enhancement_ms: int | None = None
    vector_search_ms: int | None = None
    bm25_search_ms: int | None = None
    fusion_ms: int | None = None
    reranking_ms: int | None = None
    total_search_ms: int | None = None
    generation_ms: int | None = None
    faithfulness_eval_ms: int | None = None
    relevance_eval_ms: int | None = None
    context_relevance_eval_ms: int | None = None
    total_latency_ms: int | None = None

    generation_prompt_tokens: int = Field(default=0, ge=0)
    generation_completion_tokens: int = Field(default=0, ge=0)
    judge_prompt_tokens: int = Field(default=0, ge=0)
    judge_completion_tokens: int = Field(default=0, ge=0)
    embedding_tokens: int = Field(default=0, ge=0)

    metrics: ResultMetrics | FailedMetrics

    human_rating: int | None = Field(default=None, ge=1, le=5)
    human_feedback: str | None = None
    evaluated_by: str | None = None
    evaluated_at: datetime | None = None

    created_at: datetime = Field(default_factory=_now)

    @property
    def failed(self) -> bool:
        return isinstance(self.metrics, FailedMetrics)

    @property
    def prompt_tokens(self) -> int:
        return self.generation_prompt_tokens + self.judge_prompt_tokens

    @property
    def completion_tokens(self) -> int:
        return self.generation_completion_tokens + self.judge_completion_tokens

    @property
    def retrieval_latency_ms(self) -> int | None:
        """Sum of the retrieval sub-stages, or None if search was never timed."""
        if self.vector_search_ms is None:
            return None
        return (
            self.vector_search_ms
            + (self.bm25_search_ms or 0)
            + (self.fusion_ms or 0)
            + (self.reranking_ms or 0)
        )
