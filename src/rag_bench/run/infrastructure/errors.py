"""Error types raised by run store infrastructure."""

from rag_bench.core.errors import RagBenchError


class StoreError(RagBenchError):
    """Raised when a run or result record cannot be read or written."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to access run store: {reason}")
