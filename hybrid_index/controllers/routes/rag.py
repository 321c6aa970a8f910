"""POST /rag: answer a question from an indexed transcript."""

from fastapi import APIRouter, Depends
from opensearchpy import AsyncOpenSearch

from hybrid_index.config.embedding.models import EmbeddingConfig
from hybrid_index.config.logging import get_logger
from hybrid_index.config.settings import Settings
from hybrid_index.controllers.deps import (
    get_app_settings,
    get_embedding_config,
    get_embedding_strategy,
    get_generator,
    get_opensearch,
)
from hybrid_index.controllers.routes.query import resolve_top_k
from hybrid_index.controllers.schema.rag import RagRequest, RagResponse
from hybrid_index.services.embedder.base import BaseEmbeddingStrategy
from hybrid_index.services.embedder.dense import DenseEmbedder
from hybrid_index.services.generation.base import BaseGenerationStrategy
from hybrid_index.services.retrieval.rag import build_prompt, embed_question, generate_answer, retrieve_chunks

logger = get_logger(__name__)

router = APIRouter(prefix="/rag", tags=["retrieval"])


@router.post("", response_model=RagResponse)
async def answer_question(
    body: RagRequest,
    settings: Settings = Depends(get_app_settings),
    embedding_config: EmbeddingConfig = Depends(get_embedding_config),
    strategy: BaseEmbeddingStrategy = Depends(get_embedding_strategy),
    generator: BaseGenerationStrategy = Depends(get_generator),
    opensearch: AsyncOpenSearch = Depends(get_opensearch),
) -> RagResponse:
    """Embed the question, retrieve top_k chunks through hybrid search and generate a cited answer."""
    embedder = DenseEmbedder.with_overrides(strategy, embedding_config, model=body.embedding_model)
    question_vector = await embed_question(body.question, embedder)
    chunks, _ = await retrieve_chunks(
        opensearch,
        body.endpoint,
        question_vector,
        top_k=resolve_top_k(body.top_k, settings),
        sparse_weight=settings.sparse_weight,
    )
    model = body.llm_model or settings.generation_model
    answer = await generate_answer(build_prompt(body.question, chunks), generator, model)
    logger.info(
        "RAG answer generated",
        extra={"endpoint": body.endpoint, "chunk_count": len(chunks), "answer_length": len(answer)},
    )
    return RagResponse(answer=answer, chunks=chunks)
