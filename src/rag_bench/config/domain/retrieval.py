"""Retrieval endpoint configuration model."""

from pydantic import BaseModel, Field


class RetrievalConfig(BaseModel, frozen=True):
    url: str = Field(min_length=1)
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    headers: dict[str, str] = Field(default_factory=dict)
