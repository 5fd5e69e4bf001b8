"""Execution configuration models."""

from pydantic import BaseModel, Field


class CostRates(BaseModel, frozen=True):
    llm_per_thousand: float = Field(default=0.002, ge=0.0)
    embedding_per_thousand: float = Field(default=0.0001, ge=0.0)


class ExecutionConfig(BaseModel, frozen=True):
    parallelism: int = Field(default=1, ge=1)
    cost: CostRates = CostRates()
