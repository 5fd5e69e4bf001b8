"""Typed verdicts returned by the LLM judge.

A verdict never signals failure by raising: when the judge call or its parsing
fails, the verdict carries zeroed scores and the failure message in ``error``.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from rag_bench.generation.domain.usage import TokenUsage


def _clamp_unit(value: Any) -> float:
    """Coerce a model-reported score into [0, 1]; non-numbers become 0."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    return min(max(float(value), 0.0), 1.0)


UnitScore = Annotated[float, BeforeValidator(_clamp_unit)]


class ClaimVerdict(BaseModel, frozen=True):
    claim: str = ""
    supported: bool = False
    evidence: str = ""


class FaithfulnessVerdict(BaseModel):
    """How much of the answer is supported by the retrieved context."""

    model_config = ConfigDict(frozen=True)

    score: UnitScore = 0.0
    claims: list[ClaimVerdict] = Field(default_factory=list)
    supported_count: int = 0
    total_claims: int = 0
    reasoning: str = ""
    tokens: TokenUsage = TokenUsage()
    error: str | None = None


class AnswerRelevanceVerdict(BaseModel):
    """Whether the answer addresses the question, completely and with focus."""

    model_config = ConfigDict(frozen=True)

    score: UnitScore = 0.0
    addresses_question: bool = False
    completeness: str = "unknown"
    focus: str = "unknown"
    reasoning: str = ""
    tokens: TokenUsage = TokenUsage()
    error: str | None = None


class ChunkEvaluation(BaseModel, frozen=True):
    """Judge opinion on one retrieved chunk; ``chunk`` is its 1-based rank."""

    chunk: int
    relevant: bool = False
    usefulness: str = "none"


class ContextRelevanceVerdict(BaseModel):
    """LLM-judged precision of the retrieved context for the question."""

    model_config = ConfigDict(frozen=True)

    score: UnitScore = 0.0
    chunk_evaluations: list[ChunkEvaluation] = Field(default_factory=list)
    relevant_chunks: int = 0
    total_chunks: int = 0
    reasoning: str = ""
    tokens: TokenUsage = TokenUsage()
    error: str | None = None


class Hallucination(BaseModel, frozen=True):
    text: str = ""
    type: str = "fabricated_fact"
    severity: str = "medium"


class HallucinationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    hallucinations: list[Hallucination] = Field(default_factory=list)
    hallucination_count: int = 0
    total_claims: int = 0
    hallucination_rate: UnitScore = 0.0
    reasoning: str = ""
    tokens: TokenUsage = TokenUsage()
    error: str | None = None


class RAGEvaluation(BaseModel):
    """The three evaluators combined into one weighted score."""

    model_config = ConfigDict(frozen=True)

    overall_score: float
    faithfulness: FaithfulnessVerdict
    answer_relevance: AnswerRelevanceVerdict
    context_relevance: ContextRelevanceVerdict
    tokens: TokenUsage
    estimated_cost: float
