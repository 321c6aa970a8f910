"""
Request-scoped access to the clients built at startup. Everything here reads from
app.state.resources; tests replace these providers through app.dependency_overrides.
"""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request
from opensearchpy import AsyncOpenSearch

from hybrid_index.config.chunking.models import SemanticChunkingConfig
from hybrid_index.config.chunking.static import resolve_chunking_config
from hybrid_index.config.embedding.models import EmbeddingConfig
from hybrid_index.config.embedding.static import resolve_embedding_config
from hybrid_index.config.logging import get_logger
from hybrid_index.config.settings import Settings, get_settings
from hybrid_index.resources.opensearch.client import close_opensearch_client, create_opensearch_client
from hybrid_index.resources.storage.s3 import S3ObjectStore
from hybrid_index.services.embedder.base import BaseEmbeddingStrategy
from hybrid_index.services.embedder.strategies import build_embedding_strategy
from hybrid_index.services.generation.base import BaseGenerationStrategy
from hybrid_index.services.generation.strategies import build_generation_strategy

logger = get_logger(__name__)


@dataclass
class AppResources:
    """Clients owned by the application for its whole lifetime."""

    opensearch: AsyncOpenSearch
    object_store: S3ObjectStore
    embedding_config: EmbeddingConfig
    embedding_strategy: BaseEmbeddingStrategy | None = None
    generator: BaseGenerationStrategy | None = None


def build_resources(settings: Settings) -> AppResources:
    """
    Construct every collaborator from settings. A provider that cannot be configured
    (e.g. missing API key) is logged and left unset; routes needing it answer 503.
    """
    embedding_config = resolve_embedding_config(settings.embedding_profile)
    try:
        embedding_strategy = build_embedding_strategy(embedding_config, settings)
    except ValueError as e:
        logger.error(
            "Embedding strategy unavailable",
            extra={"strategy": embedding_config.strategy, "error": str(e)},
        )
        embedding_strategy = None
    try:
        generator = build_generation_strategy(settings)
    except ValueError as e:
        logger.error(
            "Generation strategy unavailable",
            extra={"strategy": settings.generation_strategy, "error": str(e)},
        )
        generator = None
    return AppResources(
        opensearch=create_opensearch_client(settings),
        object_store=S3ObjectStore.from_settings(settings),
        embedding_config=embedding_config,
        embedding_strategy=embedding_strategy,
        generator=generator,
    )


async def close_resources(resources: AppResources) -> None:
    await close_opensearch_client(resources.opensearch)


def get_resources(request: Request) -> AppResources:
    resources = getattr(request.app.state, "resources", None)
    if resources is None:
        raise HTTPException(status_code=503, detail="Service is not initialized.")
    return resources


def get_app_settings() -> Settings:
    return get_settings()


def get_opensearch(resources: AppResources = Depends(get_resources)) -> AsyncOpenSearch:
    return resources.opensearch


def get_object_store(resources: AppResources = Depends(get_resources)) -> S3ObjectStore:
    return resources.object_store


def get_embedding_config(resources: AppResources = Depends(get_resources)) -> EmbeddingConfig:
    return resources.embedding_config


def get_embedding_strategy(resources: AppResources = Depends(get_resources)) -> BaseEmbeddingStrategy:
    if resources.embedding_strategy is None:
        raise HTTPException(status_code=503, detail="Embedding provider is not configured.")
    return resources.embedding_strategy


def get_generator(resources: AppResources = Depends(get_resources)) -> BaseGenerationStrategy:
    if resources.generator is None:
        raise HTTPException(status_code=503, detail="Generation provider is not configured.")
    return resources.generator


def get_chunking_config(settings: Settings = Depends(get_app_settings)) -> SemanticChunkingConfig:
    """Base chunking profile from settings; requests may override buffer_size/percentile."""
    try:
        return resolve_chunking_config(settings.chunking_profile)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
