"""Retriever Protocol — structural interface for the retrieval collaborator."""

from typing import Protocol

from rag_bench.knowledge_base.domain.context import ExecutionContext
from rag_bench.retrieval.domain.search import SearchOutcome


class Retriever(Protocol):
    """Returns ranked context for a query under a run's execution context."""

    async def search(self, context: ExecutionContext, query: str) -> SearchOutcome: ...
