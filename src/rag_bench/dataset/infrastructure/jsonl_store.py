"""JSONL question store — one ``<dataset_id>.jsonl`` file per dataset."""

import json
from pathlib import Path

from pydantic import ValidationError

from rag_bench.dataset.domain.observer import DatasetObserver
from rag_bench.dataset.domain.question import Question
from rag_bench.dataset.infrastructure.errors import DatasetLoadError


class JsonlQuestionStore:
    """Reads questions from ``root/<dataset_id>.jsonl``.

    Each non-empty line is a JSON object with at least ``id`` and ``question``;
    ``dataset_id`` defaults to the file's dataset. Questions are returned in
    file order.
    """

    def __init__(self, root: Path, observer: DatasetObserver) -> None:
        self._root = root
        self._observer = observer

    async def list_active_questions(self, dataset_id: str) -> list[Question]:
        """
        Raises:
            DatasetLoadError: if the file is missing, or any line is invalid JSON
                or fails validation. All line errors are reported together.
        """
        questions = self.load(dataset_id)
        active = [q for q in questions if q.is_active]
        self._observer.dataset_loading_completed(
            dataset_id=dataset_id,
            total_questions=len(questions),
            active_questions=len(active),
        )
        return active

    def load(self, dataset_id: str) -> list[Question]:
        """Every question in the dataset file, active or not."""
        path = self._root / f"{dataset_id}.jsonl"
        self._observer.dataset_loading_started(dataset_id=dataset_id, path=str(path))

        try:
            with open(path, encoding="utf-8") as fh:
                lines = [line for line in fh if line.strip()]
        except FileNotFoundError:
            reason = f"file not found: {path}"
            self._observer.dataset_loading_failed(dataset_id=dataset_id, reason=reason)
            raise DatasetLoadError(dataset_id=dataset_id, reason=reason)

        questions: list[Question] = []
        errors: list[str] = []
        for index, line in enumerate(lines):
            parsed = self._parse_line(line=line, index=index, dataset_id=dataset_id)
            if isinstance(parsed, str):
                errors.append(parsed)
            else:
                questions.append(parsed)

        if errors:
            reason = "; ".join(errors)
            self._observer.dataset_loading_failed(dataset_id=dataset_id, reason=reason)
            raise DatasetLoadError(dataset_id=dataset_id, reason=reason)

        return questions

    def _parse_line(self, line: str, index: int, dataset_id: str) -> Question | str:
        """Return a Question, or an error string describing the problem."""
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            return f"line {index}: invalid JSON: {exc}"

        if not isinstance(data, dict):
            return f"line {index}: expected a JSON object"

        try:
            return Question.model_validate({"dataset_id": dataset_id, **data})
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(p) for p in err["loc"]) for err in exc.errors()
            )
            return f"line {index}: invalid field(s) {fields}"
