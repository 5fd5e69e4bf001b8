"""TokenUsage value object — token counts reported by one or more LLM calls."""

from pydantic import BaseModel, Field


class TokenUsage(BaseModel, frozen=True):
    """Immutable prompt/completion token counts; summable across calls."""

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
        )
