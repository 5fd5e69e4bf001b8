"""Error types raised by retrieval infrastructure."""

from rag_bench.core.errors import RagBenchError


class RetrievalError(RagBenchError):
    """Raised when the search endpoint fails or returns a malformed payload."""

    def __init__(self, reason: str, retriable: bool = False) -> None:
        super().__init__(f"Failed to retrieve context: {reason}", retriable=retriable)
