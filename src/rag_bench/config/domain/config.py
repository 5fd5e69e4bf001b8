"""Top-level BenchConfig aggregate — the root configuration object."""

from pydantic import BaseModel, Field

from rag_bench.config.domain.execution import ExecutionConfig
from rag_bench.config.domain.judge import JudgeConfig
from rag_bench.config.domain.knowledge_base import KnowledgeBaseOverrides
from rag_bench.config.domain.retrieval import RetrievalConfig
from rag_bench.config.domain.storage import DatasetConfig, StoreConfig
from rag_bench.knowledge_base.domain.defaults import ExecutionDefaults

type KnowledgeBaseId = str


class BenchConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a rag-bench installation."""

    name: str = Field(min_length=1)
    store: StoreConfig
    dataset: DatasetConfig
    retrieval: RetrievalConfig
    judge: JudgeConfig = JudgeConfig()
    defaults: ExecutionDefaults = ExecutionDefaults()
    knowledge_bases: dict[KnowledgeBaseId, KnowledgeBaseOverrides] = Field(
        default_factory=dict
    )
    execution: ExecutionConfig = ExecutionConfig()
