"""Lenient JSON extraction from judge model replies."""

import json
from typing import Any

from rag_bench.judge.infrastructure.errors import JudgeResponseParseError


def parse_json_response(content: str) -> dict[str, Any]:
    """Parse a reply that may be wrapped in a ```json or ``` fence.

    Raises:
        JudgeResponseParseError: if the remaining text is not a JSON object.
    """
    text = content.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    text = text.strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise JudgeResponseParseError(reason=f"{exc} (content: {content[:200]!r})")

    if not isinstance(data, dict):
        raise JudgeResponseParseError(reason="expected a JSON object")
    return data
