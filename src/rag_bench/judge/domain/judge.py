"""Judge Protocol — structural interface for qualitative answer evaluation."""

from collections.abc import Sequence
from typing import Protocol

from rag_bench.judge.domain.verdicts import (
    AnswerRelevanceVerdict,
    ContextRelevanceVerdict,
    FaithfulnessVerdict,
    HallucinationReport,
    RAGEvaluation,
)
from rag_bench.retrieval.domain.item import RetrievedItem


class Judge(Protocol):
    """Scores an answer and its retrieved context.

    Implementations must not raise: failures are reported through the
    verdict's ``error`` field with zeroed scores.
    """

    async def evaluate_faithfulness(
        self, answer: str, context: Sequence[RetrievedItem]
    ) -> FaithfulnessVerdict: ...

    async def evaluate_answer_relevance(
        self, question: str, answer: str
    ) -> AnswerRelevanceVerdict: ...

    async def evaluate_context_relevance(
        self, question: str, context: Sequence[RetrievedItem]
    ) -> ContextRelevanceVerdict: ...

    async def detect_hallucinations(
        self, answer: str, context: Sequence[RetrievedItem]
    ) -> HallucinationReport: ...

    async def evaluate_rag_response(
        self, question: str, answer: str, context: Sequence[RetrievedItem]
    ) -> RAGEvaluation: ...
