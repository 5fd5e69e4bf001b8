"""ExecutionDefaults — the pipeline settings a knowledge base runs with."""

from pydantic import BaseModel, Field

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant. Answer based on the provided context."
)


class ExecutionDefaults(BaseModel, frozen=True):
    """Model, sampling and retrieval settings resolved for one knowledge base."""

    provider: str = "openai"
    model: str = "gpt-4o-mini"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=500, ge=1)
    similarity_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    max_results: int = Field(default=5, ge=1)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
