"""Typed metric records produced per question, per run, and per comparison."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

type Better = Literal["a", "b", "tie"]

Score = Annotated[float, Field(ge=0.0, le=1.0)]


class RetrievalMetrics(BaseModel):
    """Information-retrieval metrics for one question."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    precision: Score
    recall: Score
    mrr: Score
    ndcg: Score
    hit_rate: Score
    retrieved_count: int = Field(ge=0)
    expected_count: int = Field(ge=0)
    llm_context_precision: float | None = Field(default=None, ge=0.0, le=1.0)


class LengthMetrics(BaseModel, frozen=True):
    chars: int = Field(default=0, ge=0)
    words: int = Field(default=0, ge=0)
    sentences: int = Field(default=0, ge=0)


class GenerationMetrics(BaseModel):
    """Answer-quality metrics for one question; every field is optional."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    semantic_similarity: float | None = Field(default=None, ge=0.0, le=1.0)
    context_coverage: float | None = Field(default=None, ge=0.0, le=1.0)
    faithfulness: float | None = Field(default=None, ge=0.0, le=1.0)
    faithfulness_reasoning: str | None = None
    answer_relevance: float | None = Field(default=None, ge=0.0, le=1.0)
    answer_relevance_reasoning: str | None = None
    context_relevance_reasoning: str | None = None
    length: LengthMetrics | None = None


class ResultMetrics(BaseModel):
    """Metrics of a question that went through the pipeline without error."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    retrieval: RetrievalMetrics
    generation: GenerationMetrics = GenerationMetrics()


class FailedMetrics(BaseModel):
    """Metrics placeholder of a question whose execution raised."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    error: str


class RetrievalAggregate(BaseModel, frozen=True):
    context_precision: float = 0.0
    context_recall: float = 0.0
    mrr: float = 0.0
    ndcg: float = 0.0
    hit_rate: float = 0.0
    llm_context_precision: float = 0.0
    avg_latency_ms: int = 0


class GenerationAggregate(BaseModel, frozen=True):
    faithfulness: float = 0.0
    answer_relevance: float = 0.0
    semantic_similarity: float = 0.0
    context_coverage: float = 0.0
    avg_latency_ms: int = 0


class OverallAggregate(BaseModel, frozen=True):
    success_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    total_questions: int = Field(default=0, ge=0)
    successful: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    avg_total_latency_ms: int = 0


class AggregateMetrics(BaseModel, frozen=True):
    """Run-level means; every field defaults to zero so an empty run is well-formed."""

    retrieval: RetrievalAggregate = RetrievalAggregate()
    generation: GenerationAggregate = GenerationAggregate()
    overall: OverallAggregate = OverallAggregate()


class MetricComparison(BaseModel, frozen=True):
    """One row of a run-vs-run comparison table."""

    name: str
    a: float
    b: float
    diff: float
    pct_change: float
    better: Better
