"""POST /chunk: semantic chunking of one transcript plus dense chunk embeddings."""

from fastapi import APIRouter, Depends, HTTPException

from hybrid_index.config.chunking.models import SemanticChunkingConfig
from hybrid_index.config.embedding.models import EmbeddingConfig
from hybrid_index.controllers.deps import get_chunking_config, get_embedding_config, get_embedding_strategy
from hybrid_index.controllers.schema.chunk import ChunkOut, ChunkRequest, ChunkResponse, DistanceOut
from hybrid_index.services.chunking.chunker import SemanticChunker
from hybrid_index.services.chunking.tokenizer import count_tokens
from hybrid_index.services.embedder.base import BaseEmbeddingStrategy
from hybrid_index.services.embedder.dense import DenseEmbedder
from hybrid_index.services.hybrid.pipeline import run_semantic_chunking

router = APIRouter(prefix="/chunk", tags=["chunking"])


def override_chunking_config(
    base: SemanticChunkingConfig,
    buffer_size: int | None,
    percentile: float | None,
) -> SemanticChunkingConfig:
    """Apply request-level buffer_size/percentile over the profile. Raises HTTP 400 if invalid."""
    update = {k: v for k, v in {"buffer_size": buffer_size, "percentile": percentile}.items() if v is not None}
    if not update:
        return base
    try:
        return SemanticChunkingConfig.model_validate({**base.model_dump(), **update})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("", response_model=ChunkResponse)
async def chunk_transcript(
    body: ChunkRequest,
    chunking_config: SemanticChunkingConfig = Depends(get_chunking_config),
    embedding_config: EmbeddingConfig = Depends(get_embedding_config),
    strategy: BaseEmbeddingStrategy = Depends(get_embedding_strategy),
) -> ChunkResponse:
    """
    Split the transcript at semantic breakpoints and embed each chunk.
    Empty transcript → 422. Embedding provider failure → 502/503.
    """
    config = override_chunking_config(chunking_config, body.buffer_size, body.percentile)
    embedder = DenseEmbedder.with_overrides(strategy, embedding_config, body.model, body.task_type)
    result = await run_semantic_chunking(body.transcript, SemanticChunker(embedder, config), embedder)
    chunking = result.chunking
    return ChunkResponse(
        chunk_count=len(chunking.chunks),
        breakpoints=chunking.breakpoints,
        distances=[DistanceOut(index=s.index, distance=s.distance) for s in chunking.distance_samples],
        chunks=[
            ChunkOut(text=text, token_count=count_tokens(text), vector=vector)
            for text, vector in zip(chunking.chunks, result.vectors)
        ],
    )
