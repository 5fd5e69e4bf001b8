"""Dollar cost estimate for judge token usage."""

from rag_bench.config.domain.judge import JudgePricing
from rag_bench.generation.domain.usage import TokenUsage


def estimate_cost(tokens: TokenUsage, pricing: JudgePricing = JudgePricing()) -> float:
    """USD cost of ``tokens`` at per-million-token rates, rounded to 6 decimals."""
    input_cost = tokens.prompt_tokens / 1_000_000 * pricing.input_per_million
    output_cost = tokens.completion_tokens / 1_000_000 * pricing.output_per_million
    return round(input_cost + output_cost, 6)
