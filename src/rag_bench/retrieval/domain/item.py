"""RetrievedItem — one ranked context chunk returned by the retrieval collaborator."""

from pydantic import BaseModel, ConfigDict, Field


class RetrievedItem(BaseModel):
    """Ranked snapshot of a retrieved chunk.

    The relevance fields start empty and are back-annotated from the judge's
    per-chunk context relevance evaluations.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(min_length=1)
    title: str | None = None
    content: str = ""
    score: float | None = None
    relevance_score: float | None = None
    is_relevant: bool | None = None
    relevance_reasoning: str | None = None
