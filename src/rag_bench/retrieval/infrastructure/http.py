"""HttpRetriever — Retriever implementation that calls a search endpoint over HTTP."""

from typing import Any

import httpx
from pydantic import ValidationError

from rag_bench.config.domain.retrieval import RetrievalConfig
from rag_bench.knowledge_base.domain.context import ExecutionContext
from rag_bench.retrieval.domain.item import RetrievedItem
from rag_bench.retrieval.domain.search import STAGE_TIMING_KEYS, SearchOutcome
from rag_bench.retrieval.infrastructure.errors import RetrievalError


class HttpRetriever:
    """POSTs the query and execution settings to the configured search URL.

    Expected response body::

        {"results": [{"id": ..., "title": ..., "content": ..., "score": ...}],
         "enhanced_query": "...", "timings": {"vector_search_ms": 12, ...},
         "embedding_tokens": 8}

    Only ``results`` is required. Satisfies the Retriever protocol structurally.
    """

    def __init__(
        self, config: RetrievalConfig, client: httpx.AsyncClient | None = None
    ) -> None:
        self._config = config
        self._client = client

    async def search(self, context: ExecutionContext, query: str) -> SearchOutcome:
        """
        Raises:
            RetrievalError: on transport errors, non-2xx responses, or payloads
                that do not match the expected shape.
        """
        body = {
            "knowledge_base_id": context.knowledge_base_id,
            "query": query,
            "max_results": context.defaults.max_results,
            "similarity_threshold": context.defaults.similarity_threshold,
            "rag_config": context.rag_config,
        }
        try:
            if self._client is not None:
                response = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient(
                    timeout=self._config.timeout_seconds
                ) as client:
                    response = await self._post(client, body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise RetrievalError(
                reason=f"search endpoint returned HTTP {status}",
                retriable=status >= 500,
            ) from exc
        except httpx.HTTPError as exc:
            raise RetrievalError(reason=str(exc), retriable=True) from exc
        except ValueError as exc:
            raise RetrievalError(reason=f"response is not JSON: {exc}") from exc

        return _parse_payload(payload)

    async def _post(
        self, client: httpx.AsyncClient, body: dict[str, Any]
    ) -> httpx.Response:
        return await client.post(
            self._config.url, json=body, headers=self._config.headers
        )


def _parse_payload(payload: Any) -> SearchOutcome:
    if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
        raise RetrievalError(reason="response has no 'results' list")

    raw_timings = payload.get("timings")
    if not isinstance(raw_timings, dict):
        raw_timings = {}
    timings = {
        key: int(value)
        for key, value in raw_timings.items()
        if key in STAGE_TIMING_KEYS and isinstance(value, int | float)
    }

    try:
        items = [RetrievedItem.model_validate(raw) for raw in payload["results"]]
    except ValidationError as exc:
        raise RetrievalError(reason=f"malformed result item: {exc}") from exc

    enhanced = payload.get("enhanced_query")
    embedding_tokens = payload.get("embedding_tokens")
    return SearchOutcome(
        items=items,
        enhanced_query=enhanced if isinstance(enhanced, str) else None,
        timings=timings,
        embedding_tokens=embedding_tokens if isinstance(embedding_tokens, int) else 0,
    )
