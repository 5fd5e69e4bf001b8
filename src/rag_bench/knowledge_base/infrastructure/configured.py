"""ConfiguredKnowledgeBaseProvider — knowledge base settings read from BenchConfig."""

from typing import Any

from rag_bench.config.domain.knowledge_base import KnowledgeBaseOverrides
from rag_bench.knowledge_base.domain.defaults import ExecutionDefaults


class ConfiguredKnowledgeBaseProvider:
    """Satisfies the KnowledgeBaseProvider protocol from static configuration.

    Unknown knowledge bases resolve to the system defaults; known ones have
    their non-null override fields applied on top.
    """

    def __init__(
        self,
        defaults: ExecutionDefaults,
        overrides: dict[str, KnowledgeBaseOverrides],
    ) -> None:
        self._defaults = defaults
        self._overrides = overrides

    async def get_execution_defaults(
        self, knowledge_base_id: str
    ) -> ExecutionDefaults:
        override = self._overrides.get(knowledge_base_id)
        if override is None:
            return self._defaults
        return self._defaults.model_copy(
            update=override.model_dump(exclude_none=True)
        )

    async def get_rag_config(self, knowledge_base_id: str) -> dict[str, Any]:
        resolved = await self.get_execution_defaults(knowledge_base_id)
        return {"knowledge_base_id": knowledge_base_id, **resolved.model_dump()}
