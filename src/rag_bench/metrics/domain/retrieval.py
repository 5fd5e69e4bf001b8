"""Ranking metrics over a ranked list of retrieved ids and a set of expected ids.

Every function returns 0.0 when either input is empty.
"""

import math
from collections.abc import Collection, Sequence

from rag_bench.metrics.domain.models import RetrievalMetrics

NDCG_K = 10


def precision(retrieved: Sequence[str], expected: Collection[str]) -> float:
    """|retrieved ∩ expected| / |retrieved|."""
    if not retrieved or not expected:
        return 0.0
    expected_set = set(expected)
    relevant = sum(1 for item_id in retrieved if item_id in expected_set)
    return relevant / len(retrieved)


def recall(retrieved: Sequence[str], expected: Collection[str]) -> float:
    """Share of distinct expected ids that were retrieved."""
    if not retrieved or not expected:
        return 0.0
    expected_set = set(expected)
    return len(expected_set.intersection(retrieved)) / len(expected_set)


def mrr(ranked: Sequence[str], expected: Collection[str]) -> float:
    """Reciprocal rank of the first relevant id."""
    if not ranked or not expected:
        return 0.0
    expected_set = set(expected)
    for index, item_id in enumerate(ranked):
        if item_id in expected_set:
            return 1.0 / (index + 1)
    return 0.0


def ndcg(ranked: Sequence[str], expected: Collection[str], k: int = NDCG_K) -> float:
    """Binary-relevance NDCG@k; rank 1 is discounted by log2(2).

    Repeated ids only count at their first rank.
    """
    if not ranked or not expected:
        return 0.0
    expected_set = set(expected)
    ranked = list(dict.fromkeys(ranked))

    dcg = sum(
        1.0 / math.log2(index + 2)
        for index, item_id in enumerate(ranked[:k])
        if item_id in expected_set
    )
    ideal_hits = min(len(expected_set), k)
    idcg = sum(1.0 / math.log2(index + 2) for index in range(ideal_hits))

    return dcg / idcg if idcg > 0 else 0.0


def hit_rate(retrieved: Sequence[str], expected: Collection[str]) -> float:
    """1.0 if any expected id was retrieved, else 0.0."""
    if not retrieved or not expected:
        return 0.0
    expected_set = set(expected)
    return 1.0 if any(item_id in expected_set for item_id in retrieved) else 0.0


def calculate_retrieval_metrics(
    retrieved: Sequence[str], expected: Sequence[str]
) -> RetrievalMetrics:
    return RetrievalMetrics(
        precision=precision(retrieved, expected),
        recall=recall(retrieved, expected),
        mrr=mrr(retrieved, expected),
        ndcg=ndcg(retrieved, expected, k=NDCG_K),
        hit_rate=hit_rate(retrieved, expected),
        retrieved_count=len(retrieved),
        expected_count=len(expected),
    )
