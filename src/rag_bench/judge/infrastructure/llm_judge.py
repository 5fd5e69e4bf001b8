"""LLMJudge: prompts a Generator and parses its JSON verdicts."""

import asyncio
import time
from collections.abc import Callable, Sequence
from typing import Any

from pydantic import BaseModel

from rag_bench.config.domain.judge import JudgeConfig
from rag_bench.generation.domain.generation import ChatMessage, Generation
from rag_bench.generation.domain.generator import Generator
from rag_bench.generation.domain.usage import TokenUsage
from rag_bench.judge.domain.cost import estimate_cost
from rag_bench.judge.domain.observer import JudgeObserver
from rag_bench.judge.domain.verdicts import (
    AnswerRelevanceVerdict,
    ContextRelevanceVerdict,
    FaithfulnessVerdict,
    HallucinationReport,
    RAGEvaluation,
)
from rag_bench.judge.infrastructure import prompts
from rag_bench.judge.infrastructure.parsing import parse_json_response
from rag_bench.retrieval.domain.item import RetrievedItem

FAITHFULNESS_WEIGHT = 0.4
RELEVANCE_WEIGHT = 0.4
CONTEXT_RELEVANCE_WEIGHT = 0.2


class LLMJudge:
    """Stateless qualitative evaluator.

    Every evaluator sends a single user message at temperature 0 and maps the
    model's JSON reply onto a typed verdict. Call and parse failures become a
    verdict with zeroed scores and ``error`` set; nothing is raised.

    Satisfies the Judge protocol structurally.
    """

    def __init__(
        self, generator: Generator, config: JudgeConfig, observer: JudgeObserver
    ) -> None:
        self._generator = generator
        self._config = config
        self._observer = observer

    async def evaluate_faithfulness(
        self, answer: str, context: Sequence[RetrievedItem]
    ) -> FaithfulnessVerdict:
        if not answer or not context:
            return FaithfulnessVerdict(reasoning="No answer or context provided")

        def build(data: dict[str, Any], generation: Generation) -> FaithfulnessVerdict:
            return FaithfulnessVerdict(
                score=data.get("faithfulness_score") or 0.0,
                claims=data.get("claims") or [],
                supported_count=data.get("supported_count") or 0,
                total_claims=data.get("total_claims") or 0,
                reasoning=data.get("reasoning") or "",
                tokens=generation.usage,
            )

        return await self._evaluate(
            evaluator="faithfulness",
            prompt=prompts.faithfulness_prompt(answer=answer, context=context),
            max_tokens=self._config.faithfulness_max_tokens,
            build=build,
            on_error=lambda reason, tokens: FaithfulnessVerdict(
                reasoning=f"Evaluation failed: {reason}", error=reason, tokens=tokens
            ),
        )

    async def evaluate_answer_relevance(
        self, question: str, answer: str
    ) -> AnswerRelevanceVerdict:
        if not question or not answer:
            return AnswerRelevanceVerdict(reasoning="No question or answer provided")

        def build(
            data: dict[str, Any], generation: Generation
        ) -> AnswerRelevanceVerdict:
            return AnswerRelevanceVerdict(
                score=data.get("relevance_score") or 0.0,
                addresses_question=data.get("addresses_question") or False,
                completeness=data.get("completeness") or "unknown",
                focus=data.get("focus") or "unknown",
                reasoning=data.get("reasoning") or "",
                tokens=generation.usage,
            )

        return await self._evaluate(
            evaluator="answer_relevance",
            prompt=prompts.answer_relevance_prompt(question=question, answer=answer),
            max_tokens=self._config.relevance_max_tokens,
            build=build,
            on_error=lambda reason, tokens: AnswerRelevanceVerdict(
                reasoning=f"Evaluation failed: {reason}", error=reason, tokens=tokens
            ),
        )

    async def evaluate_context_relevance(
        self, question: str, context: Sequence[RetrievedItem]
    ) -> ContextRelevanceVerdict:
        if not question or not context:
            return ContextRelevanceVerdict(reasoning="No question or context provided")

        def build(
            data: dict[str, Any], generation: Generation
        ) -> ContextRelevanceVerdict:
            return ContextRelevanceVerdict(
                score=data.get("context_precision") or 0.0,
                chunk_evaluations=data.get("chunk_evaluations") or [],
                relevant_chunks=data.get("relevant_chunks") or 0,
                total_chunks=data.get("total_chunks") or len(context),
                reasoning=data.get("reasoning") or "",
                tokens=generation.usage,
            )

        return await self._evaluate(
            evaluator="context_relevance",
            prompt=prompts.context_relevance_prompt(question=question, context=context),
            max_tokens=self._config.context_relevance_max_tokens,
            build=build,
            on_error=lambda reason, tokens: ContextRelevanceVerdict(
                reasoning=f"Evaluation failed: {reason}", error=reason, tokens=tokens
            ),
        )

    async def detect_hallucinations(
        self, answer: str, context: Sequence[RetrievedItem]
    ) -> HallucinationReport:
        if not answer:
            return HallucinationReport(reasoning="No answer provided")

        def build(data: dict[str, Any], generation: Generation) -> HallucinationReport:
            return HallucinationReport(
                hallucinations=data.get("hallucinations") or [],
                hallucination_count=data.get("hallucination_count") or 0,
                total_claims=data.get("total_claims") or 0,
                hallucination_rate=data.get("hallucination_rate") or 0.0,
                reasoning=data.get("reasoning") or "",
                tokens=generation.usage,
            )

        return await self._evaluate(
            evaluator="hallucination",
            prompt=prompts.hallucination_prompt(answer=answer, context=context),
            max_tokens=self._config.hallucination_max_tokens,
            build=build,
            on_error=lambda reason, tokens: HallucinationReport(
                reasoning=f"Detection failed: {reason}", error=reason, tokens=tokens
            ),
        )

    async def evaluate_rag_response(
        self, question: str, answer: str, context: Sequence[RetrievedItem]
    ) -> RAGEvaluation:
        """Run the three evaluators concurrently and combine them 0.4/0.4/0.2."""
        faithfulness, relevance, context_relevance = await asyncio.gather(
            self.evaluate_faithfulness(answer=answer, context=context),
            self.evaluate_answer_relevance(question=question, answer=answer),
            self.evaluate_context_relevance(question=question, context=context),
        )

        overall = (
            faithfulness.score * FAITHFULNESS_WEIGHT
            + relevance.score * RELEVANCE_WEIGHT
            + context_relevance.score * CONTEXT_RELEVANCE_WEIGHT
        )
        tokens = faithfulness.tokens + relevance.tokens + context_relevance.tokens

        return RAGEvaluation(
            overall_score=round(overall, 3),
            faithfulness=faithfulness,
            answer_relevance=relevance,
            context_relevance=context_relevance,
            tokens=tokens,
            estimated_cost=estimate_cost(tokens=tokens, pricing=self._config.pricing),
        )

    async def _evaluate[V: BaseModel](
        self,
        evaluator: str,
        prompt: str,
        max_tokens: int,
        build: Callable[[dict[str, Any], Generation], V],
        on_error: Callable[[str, TokenUsage], V],
    ) -> V:
        self._observer.judge_evaluation_started(
            evaluator=evaluator, model=self._config.model
        )
        start = time.monotonic()
        try:
            generation = await self._generator.generate(
                provider=self._config.provider,
                model=self._config.model,
                messages=[ChatMessage(role="user", content=prompt)],
                system_prompt=None,
                temperature=0.0,
                max_tokens=max_tokens,
            )
        except Exception as exc:
            return self._failed(evaluator, str(exc), TokenUsage(), on_error)

        # Tokens of a completed call are kept even when its reply is unusable.
        try:
            verdict = build(parse_json_response(generation.content), generation)
        except Exception as exc:
            return self._failed(evaluator, str(exc), generation.usage, on_error)

        self._observer.judge_evaluation_completed(
            evaluator=evaluator,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return verdict

    def _failed[V: BaseModel](
        self,
        evaluator: str,
        reason: str,
        tokens: TokenUsage,
        on_error: Callable[[str, TokenUsage], V],
    ) -> V:
        self._observer.judge_evaluation_failed(evaluator=evaluator, reason=reason)
        return on_error(reason, tokens)
