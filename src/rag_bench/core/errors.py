"""Base exception class for all rag-bench-specific errors."""


class RagBenchError(Exception):
    """Base class for all rag-bench errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
