"""Question — one benchmark question with its optional ground truth."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuestionType(StrEnum):
    SIMPLE = "simple"
    COMPLEX = "complex"
    MULTI_HOP = "multi_hop"
    CONVERSATIONAL = "conversational"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Question(BaseModel):
    """Immutable benchmark question.

    ``expected_context_ids`` is the set of chunk ids that should be retrieved;
    the order given is kept and duplicates are dropped.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(min_length=1)
    dataset_id: str = Field(min_length=1)
    question: str = Field(min_length=1)
    expected_answer: str | None = None
    expected_context_ids: list[str] = Field(default_factory=list)
    question_type: QuestionType = QuestionType.SIMPLE
    difficulty: Difficulty = Difficulty.MEDIUM
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    tags: list[str] = Field(default_factory=list)

    @field_validator("expected_context_ids")
    @classmethod
    def _dedupe(cls, ids: list[str]) -> list[str]:
        return list(dict.fromkeys(ids))
