"""Lexical answer metrics — cheap stand-ins for embedding and judge scores."""

import math
import re
from collections.abc import Iterable, Sequence

from rag_bench.metrics.domain.models import LengthMetrics

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def _words(text: str, min_length: int) -> list[str]:
    return [w for w in text.lower().split() if len(w) > min_length]


def text_similarity(text_a: str, text_b: str) -> float:
    """Jaccard similarity of the lowercase words longer than 2 characters."""
    if not text_a or not text_b:
        return 0.0
    words_a = set(_words(text_a, min_length=2))
    words_b = set(_words(text_b, min_length=2))
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """Cosine of two embedding vectors; 0.0 on length mismatch or zero magnitude."""
    if not vec_a or not vec_b or len(vec_a) != len(vec_b):
        return 0.0
    dot = sum(a * b for a, b in zip(vec_a, vec_b, strict=True))
    magnitude = math.sqrt(sum(a * a for a in vec_a)) * math.sqrt(
        sum(b * b for b in vec_b)
    )
    return dot / magnitude if magnitude > 0 else 0.0


def context_coverage(answer: str, context: Iterable[str]) -> float:
    """Fraction of context words (longer than 3 chars) that also appear in the answer.

    Counts occurrences across all chunks, so repeated context words weigh more.
    """
    if not answer:
        return 0.0
    answer_words = set(_words(answer, min_length=3))

    total = 0
    matched = 0
    for chunk in context:
        chunk_words = _words(chunk, min_length=3)
        total += len(chunk_words)
        matched += sum(1 for w in chunk_words if w in answer_words)

    return matched / total if total > 0 else 0.0


def length_metrics(answer: str) -> LengthMetrics:
    if not answer:
        return LengthMetrics()
    sentences = [s for s in _SENTENCE_SPLIT.split(answer) if s.strip()]
    return LengthMetrics(
        chars=len(answer), words=len(answer.split()), sentences=len(sentences)
    )
