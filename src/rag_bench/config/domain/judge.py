"""Judge configuration models."""

from pydantic import BaseModel, Field


class JudgePricing(BaseModel, frozen=True):
    """Per-million-token rates used to estimate the dollar cost of judge calls."""

    input_per_million: float = Field(default=0.15, ge=0.0)
    output_per_million: float = Field(default=0.60, ge=0.0)


class JudgeConfig(BaseModel, frozen=True):
    provider: str = "openai"
    model: str = "gpt-4o-mini"
    faithfulness_max_tokens: int = Field(default=1500, ge=1)
    relevance_max_tokens: int = Field(default=800, ge=1)
    context_relevance_max_tokens: int = Field(default=800, ge=1)
    hallucination_max_tokens: int = Field(default=1000, ge=1)
    pricing: JudgePricing = JudgePricing()
