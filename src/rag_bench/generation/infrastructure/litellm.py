"""LiteLLMGenerator — Generator implementation backed by LiteLLM."""

from typing import Any

import litellm

from rag_bench.generation.domain.generation import ChatMessage, Generation
from rag_bench.generation.domain.usage import TokenUsage
from rag_bench.generation.infrastructure.errors import GenerationError


class LiteLLMGenerator:
    """Routes generation calls through LiteLLM using ``provider/model`` names.

    Satisfies the Generator protocol structurally.
    """

    def __init__(self, timeout_seconds: float = 60.0, num_retries: int = 2) -> None:
        litellm.suppress_debug_info = True
        self._timeout_seconds = timeout_seconds
        self._num_retries = num_retries

    async def generate(
        self,
        provider: str,
        model: str,
        messages: list[ChatMessage],
        system_prompt: str | None,
        temperature: float,
        max_tokens: int,
    ) -> Generation:
        """Invoke the model and return its content with token usage.

        Raises:
            GenerationError: if the call fails or the response carries no content.
        """
        payload = [m.model_dump() for m in messages]
        if system_prompt:
            payload.insert(0, {"role": "system", "content": system_prompt})

        try:
            response = await litellm.acompletion(
                model=_qualified_model(provider=provider, model=model),
                messages=payload,
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=self._timeout_seconds,
                num_retries=self._num_retries,
            )
        except Exception as exc:
            raise GenerationError(reason=str(exc), retriable=True) from exc

        choices = getattr(response, "choices", None)
        if not choices:
            raise GenerationError(reason="response has no choices")
        content = choices[0].message.content
        if content is None:
            raise GenerationError(reason="model returned no content")

        return Generation(content=content, usage=_extract_usage(response))


def _qualified_model(provider: str, model: str) -> str:
    """LiteLLM expects ``provider/model`` unless the model already carries a prefix."""
    if "/" in model:
        return model
    return f"{provider}/{model}"


def _extract_usage(response: Any) -> TokenUsage:
    usage = getattr(response, "usage", None)
    prompt = getattr(usage, "prompt_tokens", 0)
    completion = getattr(usage, "completion_tokens", 0)
    return TokenUsage(
        prompt_tokens=prompt if isinstance(prompt, int) else 0,
        completion_tokens=completion if isinstance(completion, int) else 0,
    )
