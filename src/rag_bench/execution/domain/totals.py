"""Token and cost totals of a run."""

from collections.abc import Iterable

from pydantic import BaseModel

from rag_bench.config.domain.execution import CostRates
from rag_bench.run.domain.result import BenchmarkResult


class RunTotals(BaseModel, frozen=True):
    llm_tokens: int = 0
    embedding_tokens: int = 0
    estimated_cost_usd: float = 0.0


def calculate_totals(
    results: Iterable[BenchmarkResult], rates: CostRates = CostRates()
) -> RunTotals:
    """Sum generation and judge tokens plus embedding tokens, and price them.

    The cost is rounded to 6 decimals.
    """
    llm_tokens = 0
    embedding_tokens = 0
    for result in results:
        llm_tokens += result.prompt_tokens + result.completion_tokens
        embedding_tokens += result.embedding_tokens

    cost = (
        llm_tokens / 1000 * rates.llm_per_thousand
        + embedding_tokens / 1000 * rates.embedding_per_thousand
    )
    return RunTotals(
        llm_tokens=llm_tokens,
        embedding_tokens=embedding_tokens,
        estimated_cost_usd=round(cost, 6),
    )
