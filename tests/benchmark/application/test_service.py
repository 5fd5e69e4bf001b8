"""Tests for BenchmarkService background execution."""

import asyncio

import pytest

from rag_bench.benchmark.application.service import BenchmarkService
from rag_bench.comparison.application.comparator import RunComparator
from rag_bench.config.domain.execution import ExecutionConfig
from rag_bench.dataset.domain.question import Question
from rag_bench.execution.application.engine import ExecutionEngine
from rag_bench.execution.application.question_executor import QuestionExecutor
from rag_bench.metrics.domain.models import ResultMetrics
from rag_bench.retrieval.domain.item import RetrievedItem
from rag_bench.retrieval.domain.search import SearchOutcome
from rag_bench.run.application.manager import RunManager, RunOptions
from rag_bench.run.domain.errors import (
    EmptyDatasetError,
    RunAlreadyRunningError,
    RunNotFoundError,
)
from rag_bench.run.domain.status import RunStatus
from rag_bench.run.infrastructure.memory import InMemoryRunStore
from tests.dataset.fake_question_store import FakeQuestionStore
from tests.execution.fake_observer import FakeExecutionObserver
from tests.generation.fake_generator import FakeGenerator
from tests.judge.fake_judge import FakeJudge
from tests.knowledge_base.fake_provider import FakeKnowledgeBaseProvider
from tests.retrieval.fake_retriever import FakeRetriever
from tests.run.fake_observer import FakeRunObserver


def _make_questions(dataset_id: str = "ds-1") -> list[Question]:
    return [
        Question(
            id=f"q{i}",
            dataset_id=dataset_id,
            question=f"Question {i}?",
            expected_context_ids=["c1"],
        )
        for i in range(2)
    ]


def _make_service(questions: list[Question] | None = None) -> BenchmarkService:
    knowledge_bases = FakeKnowledgeBaseProvider()
    runs = RunManager(
        store=InMemoryRunStore(),
        knowledge_bases=knowledge_bases,
        observer=FakeRunObserver(),
    )
    observer = FakeExecutionObserver()
    executor = QuestionExecutor(
        retriever=FakeRetriever(
            default=SearchOutcome(items=[RetrievedItem(id="c1", content="Paris.")])
        ),
        generator=FakeGenerator(replies=["Paris."]),
        judge=FakeJudge(),
        observer=observer,
    )
    engine = ExecutionEngine(
        runs=runs,
        questions=FakeQuestionStore(
            questions if questions is not None else _make_questions()
        ),
        knowledge_bases=knowledge_bases,
        executor=executor,
        config=ExecutionConfig(),
        observer=observer,
    )
    return BenchmarkService(runs=runs, engine=engine, comparator=RunComparator(runs))


class TestStartRun:
    async def test_returns_task_after_claiming(self) -> None:
        service = _make_service()
        run = await service.create_run("kb-1", "ds-1", RunOptions(name="baseline"))

        task = await service.start_run(run.id)

        assert isinstance(task, asyncio.Task)
        assert (await service.get_run(run.id)).status == RunStatus.RUNNING
        summary = await task
        assert summary.status == RunStatus.COMPLETED
        assert (await service.get_run(run.id)).status == RunStatus.COMPLETED

    async def test_second_start_raises_immediately(self) -> None:
        service = _make_service()
        run = await service.create_run("kb-1", "ds-1")
        task = await service.start_run(run.id)

        with pytest.raises(RunAlreadyRunningError):
            await service.start_run(run.id)

        await task

    async def test_missing_run_raises_before_scheduling(self) -> None:
        service = _make_service()

        with pytest.raises(RunNotFoundError):
            await service.start_run("missing")

    async def test_execution_failure_is_raised_by_the_task(self) -> None:
        service = _make_service(questions=[])
        run = await service.create_run("kb-1", "ds-1")

        task = await service.start_run(run.id)

        with pytest.raises(EmptyDatasetError):
            await task
        assert (await service.get_run(run.id)).status == RunStatus.FAILED

    async def test_wait_drains_background_runs(self) -> None:
        service = _make_service()
        run = await service.create_run("kb-1", "ds-1")
        await service.start_run(run.id)

        await service.wait()

        assert (await service.get_run(run.id)).status == RunStatus.COMPLETED


class TestResultsAndRatings:
    async def test_results_and_human_evaluation(self) -> None:
        service = _make_service()
        run = await service.create_run("kb-1", "ds-1")
        await (await service.start_run(run.id))

        results = await service.get_run_results(run.id)
        rated = await service.add_human_evaluation(
            results[0].id, evaluated_by="sam", rating=5, feedback=None
        )

        assert len(results) == 2
        assert isinstance(results[0].metrics, ResultMetrics)
        assert rated.human_rating == 5
        assert (await service.get_result(results[0].id)).human_rating == 5


class TestRunManagementPassThrough:
    async def test_list_cancel_delete(self) -> None:
        service = _make_service()
        run = await service.create_run("kb-1", "ds-1")

        cancelled = await service.cancel_run(run.id)
        listed = await service.list_runs("kb-1", status=RunStatus.CANCELLED)
        deleted = await service.delete_run(run.id)

        assert cancelled.status == RunStatus.CANCELLED
        assert [r.id for r in listed] == [run.id]
        assert deleted is True
        assert await service.get_run(run.id) is None

    async def test_compare_completed_runs(self) -> None:
        service = _make_service()
        run_a = await service.create_run("kb-1", "ds-1")
        run_b = await service.create_run("kb-1", "ds-1")
        await (await service.start_run(run_a.id))
        await (await service.start_run(run_b.id))

        comparison = await service.compare_runs(run_a.id, run_b.id)

        assert comparison.comparison["retrieval.mrr"].better == "tie"
        assert comparison.comparison["overall.success_rate"].better == "tie"
