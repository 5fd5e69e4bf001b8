"""Generator Protocol — structural interface for the LLM generation collaborator."""

from typing import Protocol

from rag_bench.generation.domain.generation import ChatMessage, Generation


class Generator(Protocol):
    """Produces a completion for a list of chat messages.

    Implementations carry their own timeout and retry policy.
    """

    async def generate(
        self,
        provider: str,
        model: str,
        messages: list[ChatMessage],
        system_prompt: str | None,
        temperature: float,
        max_tokens: int,
    ) -> Generation: ...
