"""ExecutionContext — everything the pipeline needs to answer one run's questions."""

from typing import Any

from pydantic import BaseModel, Field

from rag_bench.knowledge_base.domain.defaults import ExecutionDefaults


class ExecutionContext(BaseModel, frozen=True):
    """Built once per run from knowledge base defaults and the run's config snapshot.

    The snapshot is the configuration captured when the run was created; it is
    passed through to the retrieval collaborator untouched.
    """

    knowledge_base_id: str = Field(min_length=1)
    defaults: ExecutionDefaults
    rag_config: dict[str, Any] = Field(default_factory=dict)
