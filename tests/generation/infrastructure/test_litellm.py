"""Tests for LiteLLMGenerator infrastructure implementation."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from rag_bench.generation.domain.generation import ChatMessage
from rag_bench.generation.domain.usage import TokenUsage
from rag_bench.generation.infrastructure.errors import GenerationError
from rag_bench.generation.infrastructure.litellm import LiteLLMGenerator

_ACOMPLETION = "rag_bench.generation.infrastructure.litellm.litellm.acompletion"


def _make_acompletion_response(
    content: str | None, prompt_tokens: int = 12, completion_tokens: int = 7
) -> MagicMock:
    """Build a mock litellm response object with the given message content."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    response.usage = MagicMock(
        prompt_tokens=prompt_tokens, completion_tokens=completion_tokens
    )
    return response


async def _generate(generator: LiteLLMGenerator, model: str = "gpt-4o-mini"):
    return await generator.generate(
        provider="openai",
        model=model,
        messages=[ChatMessage(role="user", content="What is the capital?")],
        system_prompt="Answer from context.",
        temperature=0.7,
        max_tokens=500,
    )


class TestLiteLLMGeneratorSuccess:
    async def test_returns_content_and_usage(self) -> None:
        mock = AsyncMock(return_value=_make_acompletion_response("Paris."))
        with patch(_ACOMPLETION, new=mock):
            generation = await _generate(LiteLLMGenerator())

        assert generation.content == "Paris."
        assert generation.usage == TokenUsage(prompt_tokens=12, completion_tokens=7)

    async def test_system_prompt_is_prepended(self) -> None:
        mock = AsyncMock(return_value=_make_acompletion_response("Paris."))
        with patch(_ACOMPLETION, new=mock):
            await _generate(LiteLLMGenerator())

        messages = mock.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "Answer from context."}
        assert messages[1] == {"role": "user", "content": "What is the capital?"}

    async def test_model_is_qualified_with_provider(self) -> None:
        mock = AsyncMock(return_value=_make_acompletion_response("Paris."))
        with patch(_ACOMPLETION, new=mock):
            await _generate(LiteLLMGenerator())

        assert mock.call_args.kwargs["model"] == "openai/gpt-4o-mini"
        assert mock.call_args.kwargs["temperature"] == 0.7
        assert mock.call_args.kwargs["max_tokens"] == 500

    async def test_prefixed_model_is_passed_through(self) -> None:
        mock = AsyncMock(return_value=_make_acompletion_response("Paris."))
        with patch(_ACOMPLETION, new=mock):
            await _generate(LiteLLMGenerator(), model="anthropic/claude-3-5-haiku")

        assert mock.call_args.kwargs["model"] == "anthropic/claude-3-5-haiku"

    async def test_timeout_and_retries_are_forwarded(self) -> None:
        mock = AsyncMock(return_value=_make_acompletion_response("Paris."))
        with patch(_ACOMPLETION, new=mock):
            await _generate(LiteLLMGenerator(timeout_seconds=5.0, num_retries=0))

        assert mock.call_args.kwargs["timeout"] == 5.0
        assert mock.call_args.kwargs["num_retries"] == 0


class TestLiteLLMGeneratorErrors:
    async def test_provider_error_is_wrapped_and_retriable(self) -> None:
        mock = AsyncMock(side_effect=RuntimeError("connection reset"))
        with patch(_ACOMPLETION, new=mock):
            with pytest.raises(GenerationError, match="connection reset") as exc_info:
                await _generate(LiteLLMGenerator())

        assert exc_info.value.retriable is True

    async def test_empty_content_raises(self) -> None:
        mock = AsyncMock(return_value=_make_acompletion_response(None))
        with patch(_ACOMPLETION, new=mock):
            with pytest.raises(GenerationError, match="no content") as exc_info:
                await _generate(LiteLLMGenerator())

        assert exc_info.value.retriable is False

    async def test_empty_choices_raises(self) -> None:
        response = _make_acompletion_response("Paris.")
        response.choices = []
        mock = AsyncMock(return_value=response)
        with patch(_ACOMPLETION, new=mock):
            with pytest.raises(GenerationError, match="no choices"):
                await _generate(LiteLLMGenerator())

    async def test_missing_usage_counts_as_zero(self) -> None:
        response = _make_acompletion_response("Paris.")
        response.usage = None
        with patch(_ACOMPLETION, new=AsyncMock(return_value=response)):
            generation = await _generate(LiteLLMGenerator())

        assert generation.usage == TokenUsage()
