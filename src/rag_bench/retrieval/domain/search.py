"""SearchOutcome — the ranked items and instrumentation from one retrieval call."""

from pydantic import BaseModel, Field

from rag_bench.retrieval.domain.item import RetrievedItem

# Sub-stage timings a retrieval collaborator may report, in milliseconds.
STAGE_TIMING_KEYS: tuple[str, ...] = (
    "query_enhancement_ms",
    "vector_search_ms",
    "bm25_search_ms",
    "fusion_ms",
    "reranking_ms",
)


class SearchOutcome(BaseModel, frozen=True):
    items: list[RetrievedItem] = Field(default_factory=list)
    enhanced_query: str | None = None
    timings: dict[str, int] = Field(default_factory=dict)
    embedding_tokens: int = Field(default=0, ge=0)
