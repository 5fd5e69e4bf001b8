"""Error types raised by generation infrastructure."""

from rag_bench.core.errors import RagBenchError


class GenerationError(RagBenchError):
    """Raised when the LLM cannot be invoked or returns no usable content."""

    def __init__(self, reason: str, retriable: bool = False) -> None:
        super().__init__(f"Failed to generate response: {reason}", retriable=retriable)
