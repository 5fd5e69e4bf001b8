"""QuestionStore Protocol — read access to a dataset's questions."""

from typing import Protocol

from rag_bench.dataset.domain.question import Question


class QuestionStore(Protocol):
    async def list_active_questions(self, dataset_id: str) -> list[Question]:
        """Active questions of the dataset in a stable order."""
        ...
