"""
Retrieval-augmented answering: embed the question, hybrid-search the endpoint,
build a numbered-context prompt and generate an answer.
"""

import asyncio
from typing import Any

from opensearchpy import AsyncOpenSearch

from hybrid_index.config.logging import get_logger
from hybrid_index.repositories.opensearch.vectors_repository import hybrid_search
from hybrid_index.services.embedder.dense import DenseEmbedder
from hybrid_index.services.errors import InvalidInput, UpstreamFailure
from hybrid_index.services.generation.base import BaseGenerationStrategy
from hybrid_index.services.models import RetrievedChunk, SparseVector
from hybrid_index.services.retrieval.neighbors import parse_neighbors

logger = get_logger(__name__)

NO_CONTEXT_ANSWER = "I don't have enough information from the context provided."


async def embed_question(question: str, embedder: DenseEmbedder) -> list[float]:
    if not question or not question.strip():
        raise InvalidInput("`question` must be a non-empty string.")
    return await asyncio.to_thread(embedder.embed_query, question)


def validate_sparse_query(sparse_query: SparseVector | None) -> None:
    if sparse_query is not None and len(sparse_query.indices) != len(sparse_query.values):
        raise InvalidInput("`sparse_query.indices` and `sparse_query.values` must have the same length.")


async def retrieve_chunks(
    client: AsyncOpenSearch,
    endpoint: str,
    dense_query: list[float],
    top_k: int,
    sparse_query: SparseVector | None = None,
    sparse_weight: float = 1.0,
) -> tuple[list[RetrievedChunk], dict[str, Any]]:
    """Hybrid-search the endpoint. Returns (parsed chunks, raw prediction)."""
    if not dense_query:
        raise InvalidInput("`dense_query` must be a non-empty vector.")
    validate_sparse_query(sparse_query)
    raw = await hybrid_search(
        client,
        endpoint,
        dense_query,
        sparse_query=sparse_query,
        top_k=top_k,
        sparse_weight=sparse_weight,
    )
    chunks = parse_neighbors(raw)
    logger.info("Retrieved chunks", extra={"endpoint": endpoint, "chunk_count": len(chunks), "top_k": top_k})
    return chunks, raw


def build_prompt(question: str, chunks: list[RetrievedChunk]) -> str:
    context = "\n\n".join(f"({i}) {chunk.text}" for i, chunk in enumerate(chunks, start=1))
    return (
        "You are a helpful assistant. Answer the user's question using only the context below.\n"
        "Cite the passages you use by their number, e.g. (1), (2).\n"
        f"If the context does not contain the answer, say \"{NO_CONTEXT_ANSWER}\"\n\n"
        f"Context:\n{context}\n\n"
        f"Question: {question}\n"
        "Answer:"
    )


async def generate_answer(prompt: str, generator: BaseGenerationStrategy, model: str) -> str:
    """Generate an answer. An empty completion is returned as ""; provider errors become UpstreamFailure."""
    try:
        answer = await asyncio.to_thread(generator.generate, prompt, model)
    except Exception as e:
        logger.warning(
            "Answer generation failed",
            extra={"strategy": generator.strategy_name, "model": model, "error_type": type(e).__name__},
        )
        raise UpstreamFailure(f"Generation provider {generator.strategy_name!r} failed", cause=e) from e
    if not answer:
        logger.warning("Generation returned an empty answer", extra={"model": model})
        return ""
    return answer
