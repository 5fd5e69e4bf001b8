"""KnowledgeBaseProvider Protocol — read-only access to knowledge base settings."""

from typing import Any, Protocol

from rag_bench.knowledge_base.domain.defaults import ExecutionDefaults


class KnowledgeBaseProvider(Protocol):
    """Resolves a knowledge base's execution defaults and retrieval config."""

    async def get_execution_defaults(
        self, knowledge_base_id: str
    ) -> ExecutionDefaults: ...

    async def get_rag_config(self, knowledge_base_id: str) -> dict[str, Any]: ...
