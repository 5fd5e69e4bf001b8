"""FakeJudge — in-memory Judge implementation for use in tests."""

from collections.abc import Sequence

from rag_bench.generation.domain.usage import TokenUsage
from rag_bench.judge.domain.verdicts import (
    AnswerRelevanceVerdict,
    ChunkEvaluation,
    ContextRelevanceVerdict,
    FaithfulnessVerdict,
    HallucinationReport,
    RAGEvaluation,
)
from rag_bench.retrieval.domain.item import RetrievedItem

_TOKENS = TokenUsage(prompt_tokens=10, completion_tokens=5)


class FakeJudge:
    """Satisfies the Judge protocol. Returns canned verdicts and records calls."""

    def __init__(
        self,
        faithfulness: float = 1.0,
        relevance: float = 1.0,
        context_precision: float = 1.0,
        chunk_evaluations: list[ChunkEvaluation] | None = None,
    ) -> None:
        self._faithfulness = faithfulness
        self._relevance = relevance
        self._context_precision = context_precision
        self._chunk_evaluations = chunk_evaluations or []
        self.calls: list[str] = []

    async def evaluate_faithfulness(
        self, answer: str, context: Sequence[RetrievedItem]
    ) -> FaithfulnessVerdict:
        self.calls.append("faithfulness")
        return FaithfulnessVerdict(
            score=self._faithfulness, reasoning="Supported.", tokens=_TOKENS
        )

    async def evaluate_answer_relevance(
        self, question: str, answer: str
    ) -> AnswerRelevanceVerdict:
        self.calls.append("answer_relevance")
        return AnswerRelevanceVerdict(
            score=self._relevance,
            addresses_question=True,
            reasoning="On topic.",
            tokens=_TOKENS,
        )

    async def evaluate_context_relevance(
        self, question: str, context: Sequence[RetrievedItem]
    ) -> ContextRelevanceVerdict:
        self.calls.append("context_relevance")
        return ContextRelevanceVerdict(
            score=self._context_precision,
            chunk_evaluations=self._chunk_evaluations,
            total_chunks=len(context),
            reasoning="Useful context.",
            tokens=_TOKENS,
        )

    async def detect_hallucinations(
        self, answer: str, context: Sequence[RetrievedItem]
    ) -> HallucinationReport:
        self.calls.append("hallucination")
        return HallucinationReport(reasoning="None found.", tokens=_TOKENS)

    async def evaluate_rag_response(
        self, question: str, answer: str, context: Sequence[RetrievedItem]
    ) -> RAGEvaluation:
        faithfulness = await self.evaluate_faithfulness(answer, context)
        relevance = await self.evaluate_answer_relevance(question, answer)
        context_relevance = await self.evaluate_context_relevance(question, context)
        return RAGEvaluation(
            overall_score=1.0,
            faithfulness=faithfulness,
            answer_relevance=relevance,
            context_relevance=context_relevance,
            tokens=faithfulness.tokens + relevance.tokens + context_relevance.tokens,
            estimated_cost=0.0,
        )
