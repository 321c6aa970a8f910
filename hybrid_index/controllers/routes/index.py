"""POST /index: build hybrid records and publish them as a queryable index endpoint."""

from fastapi import APIRouter, Depends, HTTPException

from hybrid_index.config.chunking.models import SemanticChunkingConfig
from hybrid_index.config.indexing.static import resolve_indexing_config
from hybrid_index.config.settings import Settings
from hybrid_index.controllers.deps import (
    AppResources,
    get_app_settings,
    get_chunking_config,
    get_embedding_strategy,
    get_resources,
)
from hybrid_index.controllers.routes.chunk import override_chunking_config
from hybrid_index.controllers.schema.index import IndexInfo, IndexRequest, IndexResponse
from hybrid_index.services.chunking.chunker import SemanticChunker
from hybrid_index.services.embedder.dense import DenseEmbedder
from hybrid_index.services.hybrid.pipeline import records_from_embeddings, run_hybrid_pipeline
from hybrid_index.services.indexing.publisher import publish_hybrid_index
from hybrid_index.utils.ids import generate_index_name

router = APIRouter(prefix="/index", tags=["indexing"])


@router.post("", response_model=IndexResponse)
async def index_transcript(
    body: IndexRequest,
    settings: Settings = Depends(get_app_settings),
    chunking_config: SemanticChunkingConfig = Depends(get_chunking_config),
    resources: AppResources = Depends(get_resources),
) -> IndexResponse:
    """
    Chunk and embed the transcript (or take precomputed embeddings), add TF-IDF sparse vectors,
    upload the JSON-lines records, create the hybrid index, load it and deploy its endpoint.
    All-or-nothing: any failure returns an error and no endpoint.
    """
    try:
        indexing_config = resolve_indexing_config(body.indexing_profile or settings.indexing_profile)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    if body.embeddings is not None:
        pipeline = await records_from_embeddings([(e.chunk, e.vector) for e in body.embeddings])
    else:
        # Precomputed embeddings do not need a provider, so it is only required here.
        strategy = get_embedding_strategy(resources)
        config = override_chunking_config(chunking_config, body.buffer_size, body.percentile)
        embedder = DenseEmbedder.with_overrides(strategy, resources.embedding_config, body.model, body.task_type)
        pipeline = await run_hybrid_pipeline(body.transcript or "", SemanticChunker(embedder, config), embedder)

    index_name = body.index_name or generate_index_name()
    result = await publish_hybrid_index(
        pipeline.records,
        index_name=index_name,
        config=indexing_config,
        client=resources.opensearch,
        object_store=resources.object_store,
    )
    return IndexResponse(
        chunk_count=result.chunk_count,
        storage_uri=result.storage_uri,
        index_name=result.index_name,
        endpoint_name=result.endpoint_name,
        index_info=IndexInfo(
            dimension=result.dimension,
            sparse_dimension=result.sparse_dimension,
            similarity=result.similarity,
        ),
    )
