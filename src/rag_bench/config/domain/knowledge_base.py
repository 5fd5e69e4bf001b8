"""Per-knowledge-base overrides of the system execution defaults."""

from pydantic import BaseModel, Field


class KnowledgeBaseOverrides(BaseModel, frozen=True):
    """Every field is optional; unset fields fall back to the system defaults."""

    provider: str | None = None
    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, ge=1)
    similarity_threshold: float | None = Field(default=None, ge=0.0, le=1.0)
    max_results: int | None = Field(default=None, ge=1)
    system_prompt: str | None = None
