"""Chat messages in, Generation out — the value objects of the generation port."""

from typing import Literal

from pydantic import BaseModel

from rag_bench.generation.domain.usage import TokenUsage


class ChatMessage(BaseModel, frozen=True):
    role: Literal["system", "user", "assistant"]
    content: str


class Generation(BaseModel, frozen=True):
    """The text produced by one generation call plus its token usage."""

    content: str
    usage: TokenUsage = TokenUsage()
