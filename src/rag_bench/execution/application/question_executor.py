"""QuestionExecutor — runs one question through retrieval, generation and judging."""

import time
from collections.abc import Sequence
from typing import Any

from rag_bench.dataset.domain.question import Question
from rag_bench.execution.domain.observer import ExecutionObserver
from rag_bench.generation.domain.generation import ChatMessage, Generation
from rag_bench.generation.domain.generator import Generator
from rag_bench.generation.domain.usage import TokenUsage
from rag_bench.judge.domain.judge import Judge
from rag_bench.judge.domain.verdicts import ChunkEvaluation
from rag_bench.knowledge_base.domain.context import ExecutionContext
from rag_bench.metrics.domain.models import (
    FailedMetrics,
    GenerationMetrics,
    ResultMetrics,
    RetrievalMetrics,
)
from rag_bench.metrics.domain.retrieval import calculate_retrieval_metrics
from rag_bench.metrics.domain.text import (
    context_coverage,
    length_metrics,
    text_similarity,
)
from rag_bench.retrieval.domain.item import RetrievedItem
from rag_bench.retrieval.domain.retriever import Retriever
from rag_bench.retrieval.domain.search import STAGE_TIMING_KEYS
from rag_bench.run.domain.result import BenchmarkResult
from rag_bench.run.domain.run import Run
from rag_bench.run.domain.status import RunType


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def build_system_prompt(base_prompt: str, items: Sequence[RetrievedItem]) -> str:
    """The knowledge base's system prompt followed by the numbered context."""
    context = "\n\n".join(
        f"[{i}] {item.title or 'Context'}: {item.content}"
        for i, item in enumerate(items, 1)
    )
    return f"{base_prompt}\n\nContext:\n{context}"


def annotate_items(
    items: Sequence[RetrievedItem], evaluations: Sequence[ChunkEvaluation]
) -> list[RetrievedItem]:
    """Copy per-chunk judge verdicts onto the items they refer to (1-based)."""
    by_chunk = {e.chunk: e for e in evaluations}
    annotated: list[RetrievedItem] = []
    for rank, item in enumerate(items, 1):
        evaluation = by_chunk.get(rank)
        if evaluation is None:
            annotated.append(item)
            continue
        annotated.append(
            item.model_copy(
                update={
                    "relevance_score": 1.0 if evaluation.relevant else 0.0,
                    "is_relevant": evaluation.relevant,
                    "relevance_reasoning": evaluation.usefulness,
                }
            )
        )
    return annotated


class QuestionExecutor:
    """Produces exactly one BenchmarkResult per question.

    Any exception raised while answering is contained here and turned into a
    result carrying ``FailedMetrics``; a generation failure alone degrades to a
    result without an answer.
    """

    def __init__(
        self,
        retriever: Retriever,
        generator: Generator,
        judge: Judge,
        observer: ExecutionObserver,
    ) -> None:
        self._retriever = retriever
        self._generator = generator
        self._judge = judge
        self._observer = observer

    async def execute(
        self, run: Run, context: ExecutionContext, question: Question
    ) -> BenchmarkResult:
        self._observer.question_started(run_id=run.id, question_id=question.id)
        try:
            result = await self._answer(run=run, context=context, question=question)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            self._observer.question_failed(
                run_id=run.id, question_id=question.id, reason=reason
            )
            return BenchmarkResult(
                run_id=run.id,
                question_id=question.id,
                input_question=question.question,
                metrics=FailedMetrics(error=reason),
            )

        self._observer.question_completed(
            run_id=run.id,
            question_id=question.id,
            total_latency_ms=result.total_latency_ms or 0,
        )
        return result

    async def _answer(
        self, run: Run, context: ExecutionContext, question: Question
    ) -> BenchmarkResult:
        start = time.monotonic()

        search_start = time.monotonic()
        outcome = await self._retriever.search(context=context, query=question.question)
        search_ms = _elapsed_ms(search_start)
        timings: dict[str, int] = {
            "total_search_ms": search_ms,
            "vector_search_ms": search_ms,
        }
        timings.update(
            {k: v for k, v in outcome.timings.items() if k in STAGE_TIMING_KEYS}
        )

        generation: Generation | None = None
        if run.run_type != RunType.RETRIEVAL_ONLY:
            generation_start = time.monotonic()
            generation = await self._generate(
                run_id=run.id, context=context, question=question, items=outcome.items
            )
            timings["generation_ms"] = _elapsed_ms(generation_start)

        timings["total_latency_ms"] = _elapsed_ms(start)

        items = list(outcome.items)
        retrieval = calculate_retrieval_metrics(
            [item.id for item in items], question.expected_context_ids
        )
        generation_fields: dict[str, Any] = {}
        judge_usage = TokenUsage()
        answer = generation.content if generation is not None else None

        if answer:
            generation_fields["context_coverage"] = context_coverage(
                answer, (item.content for item in items)
            )
            generation_fields["length"] = length_metrics(answer)
            if question.expected_answer:
                generation_fields["semantic_similarity"] = text_similarity(
                    answer, question.expected_answer
                )
            if items:
                retrieval, items, judge_usage = await self._judge_answer(
                    question=question,
                    answer=answer,
                    items=items,
                    retrieval=retrieval,
                    timings=timings,
                    generation_fields=generation_fields,
                )

        generation_usage = generation.usage if generation is not None else TokenUsage()
        return BenchmarkResult(
            run_id=run.id,
            question_id=question.id,
            input_question=question.question,
            enhanced_query=outcome.enhanced_query or question.question,
            retrieved_context_ids=[item.id for item in items],
            retrieved_context=items,
            generated_answer=answer,
            llm_provider=context.defaults.provider,
            llm_model=context.defaults.model,
            generation_prompt_tokens=generation_usage.prompt_tokens,
            generation_completion_tokens=generation_usage.completion_tokens,
            judge_prompt_tokens=judge_usage.prompt_tokens,
            judge_completion_tokens=judge_usage.completion_tokens,
            embedding_tokens=outcome.embedding_tokens,
            metrics=ResultMetrics(
                retrieval=retrieval,
                generation=GenerationMetrics(**generation_fields),
            ),
            **timings,
        )

    async def _generate(
        self,
        run_id: str,
        context: ExecutionContext,
        question: Question,
        items: Sequence[RetrievedItem],
    ) -> Generation | None:
        defaults = context.defaults
        try:
            return await self._generator.generate(
                provider=defaults.provider,
                model=defaults.model,
                messages=[ChatMessage(role="user", content=question.question)],
                system_prompt=build_system_prompt(defaults.system_prompt, items),
                temperature=defaults.temperature,
                max_tokens=defaults.max_tokens,
            )
        except Exception as exc:
            self._observer.generation_failed(
                run_id=run_id, question_id=question.id, reason=str(exc)
            )
            return None

    async def _judge_answer(
        self,
        question: Question,
        answer: str,
        items: list[RetrievedItem],
        retrieval: RetrievalMetrics,
        timings: dict[str, int],
        generation_fields: dict[str, Any],
    ) -> tuple[RetrievalMetrics, list[RetrievedItem], TokenUsage]:
        """Run the three judge evaluators one after another, each timed.

        Fills ``timings`` and ``generation_fields`` in place and returns the
        retrieval metrics, items and judge token usage after judging.
        """
        start = time.monotonic()
        faithfulness = await self._judge.evaluate_faithfulness(
            answer=answer, context=items
        )
        timings["faithfulness_eval_ms"] = _elapsed_ms(start)

        start = time.monotonic()
        relevance = await self._judge.evaluate_answer_relevance(
            question=question.question, answer=answer
        )
        timings["relevance_eval_ms"] = _elapsed_ms(start)

        start = time.monotonic()
        context_relevance = await self._judge.evaluate_context_relevance(
            question=question.question, context=items
        )
        timings["context_relevance_eval_ms"] = _elapsed_ms(start)

        generation_fields.update(
            faithfulness=faithfulness.score,
            faithfulness_reasoning=faithfulness.reasoning,
            answer_relevance=relevance.score,
            answer_relevance_reasoning=relevance.reasoning,
            context_relevance_reasoning=context_relevance.reasoning,
        )

        # Without ground truth the judged precision is the only precision.
        if question.expected_context_ids:
            update = {"llm_context_precision": context_relevance.score}
        else:
            update = {"precision": context_relevance.score}

        usage = faithfulness.tokens + relevance.tokens + context_relevance.tokens
        return (
            retrieval.model_copy(update=update),
            annotate_items(items, context_relevance.chunk_evaluations),
            usage,
        )
