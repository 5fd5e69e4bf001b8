"""Error types raised by judge infrastructure."""

from rag_bench.core.errors import RagBenchError


class JudgeResponseParseError(RagBenchError):
    """Raised when the judge model's reply is not a JSON object."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to parse judge response: {reason}")
