"""Prompt templates for the LLM judge evaluators."""

from collections.abc import Sequence

from rag_bench.retrieval.domain.item import RetrievedItem

CHUNK_PREVIEW_CHARS = 500

_FAITHFULNESS = """\
You are evaluating whether an AI assistant's answer is grounded in (supported by) the provided context.

CONTEXT:
{context}

ANSWER TO EVALUATE:
{answer}

Your task:
1. Extract each distinct factual claim from the answer
2. For each claim, determine if it is SUPPORTED by the context (the context contains information that supports this claim) or NOT SUPPORTED (the context does not contain information supporting this claim)
3. Calculate the faithfulness score as: (number of supported claims) / (total claims)

Important guidelines:
- General knowledge statements that don't require context support (e.g., "The sky is blue") should be marked as SUPPORTED
- If the answer says "I don't know" or similar, that's fully faithful (score 1.0)
- Paraphrasing is allowed - the claim doesn't need to be verbatim from context

Respond in this exact JSON format:
{{
  "claims": [
    {{"claim": "specific claim text", "supported": true, "evidence": "quote or reference from context"}},
    {{"claim": "another claim", "supported": false, "evidence": "not found in context"}}
  ],
  "supported_count": <number>,
  "total_claims": <number>,
  "faithfulness_score": <0.0 to 1.0>,
  "reasoning": "brief explanation of the evaluation"
}}"""

_ANSWER_RELEVANCE = """\
You are evaluating whether an answer is relevant to and addresses the question asked.

QUESTION:
{question}

ANSWER:
{answer}

Evaluate the answer relevance on these criteria:
1. Does the answer directly address what was asked?
2. Is the answer complete (covers all aspects of the question)?
3. Is the answer focused (doesn't include excessive irrelevant information)?

Rate the relevance from 0.0 to 1.0:
- 1.0: Directly and completely answers the question
- 0.7-0.9: Mostly answers with minor gaps or slight tangents
- 0.4-0.6: Partially answers or includes significant irrelevant content
- 0.1-0.3: Tangentially related but doesn't really answer
- 0.0: Completely off-topic or doesn't address the question

Respond in this exact JSON format:
{{
  "relevance_score": <0.0 to 1.0>,
  "addresses_question": true/false,
  "completeness": "complete" | "partial" | "incomplete",
  "focus": "focused" | "somewhat_focused" | "unfocused",
  "reasoning": "brief explanation"
}}"""

_CONTEXT_RELEVANCE = """\
You are evaluating whether the retrieved context chunks are relevant to answering the question.

QUESTION:
{question}

RETRIEVED CONTEXT CHUNKS:
{chunks}

For each chunk, evaluate:
1. Is it relevant to the question?
2. Does it contain information useful for answering?

Respond in this exact JSON format:
{{
  "chunk_evaluations": [
    {{"chunk": 1, "relevant": true, "usefulness": "high" | "medium" | "low" | "none"}},
    {{"chunk": 2, "relevant": false, "usefulness": "none"}}
  ],
  "relevant_chunks": <number>,
  "total_chunks": <number>,
  "context_precision": <0.0 to 1.0>,
  "reasoning": "brief explanation"
}}"""

_HALLUCINATION = """\
Analyze the following answer for potential hallucinations - claims that are NOT supported by the provided context and are likely fabricated.

CONTEXT:
{context}

ANSWER:
{answer}

Identify any hallucinations:
- Specific facts, numbers, dates that aren't in the context
- Names or entities not mentioned in context
- Claims that contradict the context
- Made-up details that seem plausible but aren't supported

Do NOT flag:
- General knowledge that doesn't need context support
- Reasonable inferences from the context
- "I don't know" type responses

Respond in JSON format:
{{
  "hallucinations": [
    {{"text": "the hallucinated claim", "type": "fabricated_fact" | "wrong_number" | "invented_entity" | "contradiction", "severity": "high" | "medium" | "low"}}
  ],
  "hallucination_count": <number>,
  "total_claims": <number>,
  "hallucination_rate": <0.0 to 1.0>,
  "reasoning": "explanation"
}}"""


def _numbered_context(context: Sequence[RetrievedItem]) -> str:
    return "\n\n".join(f"[{i}] {item.content}" for i, item in enumerate(context, 1))


def faithfulness_prompt(answer: str, context: Sequence[RetrievedItem]) -> str:
    return _FAITHFULNESS.format(context=_numbered_context(context), answer=answer)


def answer_relevance_prompt(question: str, answer: str) -> str:
    return _ANSWER_RELEVANCE.format(question=question, answer=answer)


def context_relevance_prompt(question: str, context: Sequence[RetrievedItem]) -> str:
    """Chunks are truncated to CHUNK_PREVIEW_CHARS characters each."""
    chunks = "\n\n".join(
        f"[Chunk {i}]: {item.content[:CHUNK_PREVIEW_CHARS]}"
        for i, item in enumerate(context, 1)
    )
    return _CONTEXT_RELEVANCE.format(question=question, chunks=chunks)


def hallucination_prompt(answer: str, context: Sequence[RetrievedItem]) -> str:
    return _HALLUCINATION.format(
        context=_numbered_context(context) or "(No context provided)", answer=answer
    )
