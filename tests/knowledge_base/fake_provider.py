"""FakeKnowledgeBaseProvider — static KnowledgeBaseProvider for use in tests."""

from typing import Any

from rag_bench.knowledge_base.domain.defaults import ExecutionDefaults


class FakeKnowledgeBaseProvider:
    """KnowledgeBaseProvider returning the same settings for every id."""

    def __init__(
        self,
        defaults: ExecutionDefaults | None = None,
        rag_config: dict[str, Any] | None = None,
    ) -> None:
        self._defaults = defaults if defaults is not None else ExecutionDefaults()
        self._rag_config = rag_config if rag_config is not None else {"top_k": 5}

    async def get_execution_defaults(
        self, knowledge_base_id: str
    ) -> ExecutionDefaults:
        return self._defaults

    async def get_rag_config(self, knowledge_base_id: str) -> dict[str, Any]:
        return dict(self._rag_config)
