"""
Hybrid ingestion pipeline. Strictly sequential up to grouping:
segment → windows → embed(windows) → distances → breakpoints → group.
Dense chunk embedding and TF-IDF vectorization have no dependency on each other and run
concurrently, joined before assembly. Any failure aborts the whole batch; no retries.
"""

import asyncio

from pydantic import BaseModel

from hybrid_index.config.logging import get_logger
from hybrid_index.services.chunking.chunker import SemanticChunker
from hybrid_index.services.embedder.dense import DenseEmbedder
from hybrid_index.services.errors import InvalidInput
from hybrid_index.services.hybrid.assembler import assemble
from hybrid_index.services.hybrid.tfidf import vectorize
from hybrid_index.services.models import ChunkingResult, ProcessedChunk

logger = get_logger(__name__)


class SemanticChunkEmbeddings(BaseModel):
    """Chunking result plus one dense vector per chunk."""

    chunking: ChunkingResult
    vectors: list[list[float]]


class HybridPipelineResult(BaseModel):
    """Chunking result (None when chunks were supplied pre-embedded) and assembled records."""

    chunking: ChunkingResult | None = None
    records: list[ProcessedChunk]


def _require_transcript(transcript: str) -> None:
    if not isinstance(transcript, str) or not transcript.strip():
        raise InvalidInput("`transcript` must be a non-empty string.")


async def run_semantic_chunking(
    transcript: str,
    chunker: SemanticChunker,
    embedder: DenseEmbedder,
) -> SemanticChunkEmbeddings:
    """Chunk a transcript and embed the final chunks (dense only)."""
    _require_transcript(transcript)
    chunking = await asyncio.to_thread(chunker.chunk, transcript)
    vectors = await asyncio.to_thread(embedder.embed_chunks, chunking.chunks)
    return SemanticChunkEmbeddings(chunking=chunking, vectors=vectors)


async def build_hybrid_records(chunks: list[str], embedder: DenseEmbedder) -> list[ProcessedChunk]:
    """Dense-embed and TF-IDF-vectorize chunks concurrently, then assemble records."""
    dense, sparse = await asyncio.gather(
        asyncio.to_thread(embedder.embed_chunks, chunks),
        asyncio.to_thread(vectorize, chunks),
    )
    return assemble(chunks, dense, sparse)


async def run_hybrid_pipeline(
    transcript: str,
    chunker: SemanticChunker,
    embedder: DenseEmbedder,
) -> HybridPipelineResult:
    """Transcript → hybrid records. Raises InvalidInput before any embedding call for empty input."""
    _require_transcript(transcript)
    chunking = await asyncio.to_thread(chunker.chunk, transcript)
    records = await build_hybrid_records(chunking.chunks, embedder)
    logger.info(
        "Hybrid pipeline complete",
        extra={"chunk_count": len(records), "breakpoint_count": len(chunking.breakpoints)},
    )
    return HybridPipelineResult(chunking=chunking, records=records)


async def records_from_embeddings(chunk_vectors: list[tuple[str, list[float]]]) -> HybridPipelineResult:
    """
    Build hybrid records from chunks that already carry dense vectors (e.g. /chunk output).
    Only the sparse side is computed. Vectors must be non-empty and share one dimension.
    """
    if not chunk_vectors:
        raise InvalidInput("`embeddings` array is empty or invalid.")
    dims = {len(vector) for _, vector in chunk_vectors}
    if 0 in dims or len(dims) != 1:
        raise InvalidInput("Every embedding vector must be non-empty and of the same dimension.")
    chunks = [chunk for chunk, _ in chunk_vectors]
    sparse = await asyncio.to_thread(vectorize, chunks)
    records = assemble(chunks, [vector for _, vector in chunk_vectors], sparse)
    return HybridPipelineResult(chunking=None, records=records)
