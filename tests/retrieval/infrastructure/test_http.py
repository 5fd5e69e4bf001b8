"""Tests for HttpRetriever against an in-process httpx transport."""

import json
from collections.abc import Callable

import httpx
import pytest

from rag_bench.config.domain.retrieval import RetrievalConfig
from rag_bench.knowledge_base.domain.context import ExecutionContext
from rag_bench.knowledge_base.domain.defaults import ExecutionDefaults
from rag_bench.retrieval.infrastructure.errors import RetrievalError
from rag_bench.retrieval.infrastructure.http import HttpRetriever

_URL = "http://search.test/search"


def _make_context() -> ExecutionContext:
    return ExecutionContext(
        knowledge_base_id="kb-1",
        defaults=ExecutionDefaults(max_results=3, similarity_threshold=0.4),
        rag_config={"hybrid": True},
    )


def _make_retriever(
    handler: Callable[[httpx.Request], httpx.Response],
) -> HttpRetriever:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpRetriever(
        config=RetrievalConfig(url=_URL, headers={"X-Api-Key": "secret"}),
        client=client,
    )


class TestHttpRetrieverSuccess:
    async def test_parses_results_and_instrumentation(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "results": [
                        {"id": "c1", "title": "Geo", "content": "Paris.", "score": 0.9},
                        {"id": 2, "content": "France."},
                    ],
                    "enhanced_query": "capital city of France",
                    "timings": {"vector_search_ms": 12, "reranking_ms": 4.7, "x": 1},
                    "embedding_tokens": 8,
                },
            )

        outcome = await _make_retriever(handler).search(_make_context(), "capital?")

        assert [item.id for item in outcome.items] == ["c1", "2"]
        assert outcome.items[0].score == 0.9
        assert outcome.enhanced_query == "capital city of France"
        assert outcome.timings == {"vector_search_ms": 12, "reranking_ms": 4}
        assert outcome.embedding_tokens == 8

    async def test_posts_query_and_settings(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"results": []})

        await _make_retriever(handler).search(_make_context(), "capital?")

        request = captured[0]
        body = json.loads(request.content)
        assert str(request.url) == _URL
        assert request.headers["X-Api-Key"] == "secret"
        assert body == {
            "knowledge_base_id": "kb-1",
            "query": "capital?",
            "max_results": 3,
            "similarity_threshold": 0.4,
            "rag_config": {"hybrid": True},
        }

    async def test_optional_fields_default(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"results": [], "timings": "fast"})

        outcome = await _make_retriever(handler).search(_make_context(), "q")

        assert outcome.items == []
        assert outcome.enhanced_query is None
        assert outcome.timings == {}
        assert outcome.embedding_tokens == 0


class TestHttpRetrieverErrors:
    async def test_server_error_is_retriable(self) -> None:
        retriever = _make_retriever(lambda request: httpx.Response(503))

        with pytest.raises(RetrievalError, match="HTTP 503") as exc_info:
            await retriever.search(_make_context(), "q")

        assert exc_info.value.retriable is True

    async def test_client_error_is_not_retriable(self) -> None:
        retriever = _make_retriever(lambda request: httpx.Response(404))

        with pytest.raises(RetrievalError, match="HTTP 404") as exc_info:
            await retriever.search(_make_context(), "q")

        assert exc_info.value.retriable is False

    async def test_transport_error_is_retriable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RetrievalError, match="connection refused") as exc_info:
            await _make_retriever(handler).search(_make_context(), "q")

        assert exc_info.value.retriable is True

    async def test_non_json_body(self) -> None:
        retriever = _make_retriever(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(RetrievalError, match="not JSON"):
            await retriever.search(_make_context(), "q")

    async def test_missing_results_list(self) -> None:
        retriever = _make_retriever(
            lambda request: httpx.Response(200, json={"items": []})
        )

        with pytest.raises(RetrievalError, match="'results'"):
            await retriever.search(_make_context(), "q")

    async def test_malformed_item(self) -> None:
        retriever = _make_retriever(
            lambda request: httpx.Response(200, json={"results": [{"title": "x"}]})
        )

        with pytest.raises(RetrievalError, match="malformed result item"):
            await retriever.search(_make_context(), "q")
