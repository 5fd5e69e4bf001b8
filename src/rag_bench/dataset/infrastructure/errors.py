"""Error types raised by dataset infrastructure."""

from rag_bench.core.errors import RagBenchError


class DatasetLoadError(RagBenchError):
    """Raised when a dataset file cannot be read or holds malformed questions."""

    def __init__(self, dataset_id: str, reason: str) -> None:
        self.dataset_id = dataset_id
        super().__init__(f"Failed to load dataset '{dataset_id}': {reason}")
