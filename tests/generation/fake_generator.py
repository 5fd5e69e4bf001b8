"""FakeGenerator — in-memory Generator implementation for use in tests."""

from rag_bench.generation.domain.generation import ChatMessage, Generation
from rag_bench.generation.domain.usage import TokenUsage


class FakeGenerator:
    """Satisfies the Generator protocol.

    Replies are served in order; the last one repeats once the list is used up.
    A reply that is an Exception is raised instead of returned.
    """

    def __init__(
        self, replies: list[str | Exception], usage: TokenUsage | None = None
    ) -> None:
        self._replies = replies
        self._usage = usage if usage is not None else TokenUsage()
        self.calls: list[dict[str, object]] = []

    async def generate(
        self,
        provider: str,
        model: str,
        messages: list[ChatMessage],
        system_prompt: str | None,
        temperature: float,
        max_tokens: int,
    ) -> Generation:
        self.calls.append(
            {
                "provider": provider,
                "model": model,
                "messages": messages,
                "system_prompt": system_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        index = min(len(self.calls) - 1, len(self._replies) - 1)
        reply = self._replies[index]
        if isinstance(reply, Exception):
            raise reply
        return Generation(content=reply, usage=self._usage)
