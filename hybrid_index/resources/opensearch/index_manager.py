"""
Create hybrid OpenSearch indices and deploy query endpoints.

A hybrid index holds a k-NN dense field, a rank_features sparse field keyed by the
stringified vocabulary index, and the chunk text. An endpoint is an alias over the index.
"""

from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import OpenSearchException, RequestError

from hybrid_index.config.indexing.models import IndexingConfig
from hybrid_index.config.logging import get_logger
from hybrid_index.services.errors import UpstreamFailure

logger = get_logger(__name__)

# OpenSearch k-NN space_type per similarity
SIMILARITY_TO_SPACE_TYPE = {
    "cosine": "cosinesimil",
    "l2": "l2",
    "dot_product": "innerproduct",
}

DENSE_FIELD_NAME = "embedding"
SPARSE_FIELD_NAME = "sparse_embedding"


def build_index_body(dimension: int, config: IndexingConfig) -> dict[str, Any]:
    """Index settings and mappings for a hybrid (k-NN + rank_features) index."""
    if dimension <= 0:
        raise ValueError(f"Dense dimension must be positive, got {dimension}")
    hnsw = config.hnsw_config
    return {
        "settings": {
            "index": {
                "knn": True,
                "number_of_shards": config.index_settings.get("number_of_shards", 1),
                "number_of_replicas": config.index_settings.get("number_of_replicas", 1),
            }
        },
        "mappings": {
            "properties": {
                DENSE_FIELD_NAME: {
                    "type": "knn_vector",
                    "dimension": dimension,
                    "method": {
                        "name": "hnsw",
                        "space_type": SIMILARITY_TO_SPACE_TYPE[config.similarity],
                        "engine": hnsw.engine,
                        "parameters": {"ef_construction": hnsw.ef_construction, "m": hnsw.m},
                    },
                },
                SPARSE_FIELD_NAME: {"type": "rank_features"},
                "metadata": {"properties": {"text": {"type": "text"}}},
            }
        },
    }


def _error_reason(e: OpenSearchException) -> str:
    info = getattr(e, "info", None)
    if isinstance(info, dict):
        error_info = info.get("error", {})
        if isinstance(error_info, dict) and "reason" in error_info:
            return error_info["reason"]
    return str(e)


async def create_hybrid_index(
    client: AsyncOpenSearch,
    index_name: str,
    dimension: int,
    config: IndexingConfig,
) -> bool:
    """
    Create the index if missing. An existing index with the same dense dimension is reused;
    a dimension change drops and recreates it. Returns True if the index was (re)created.
    Raises UpstreamFailure on OpenSearch errors.
    """
    body = build_index_body(dimension, config)
    try:
        if await client.indices.exists(index=index_name):
            mapping = await client.indices.get_mapping(index=index_name)
            properties = mapping.get(index_name, {}).get("mappings", {}).get("properties", {})
            existing_dimension = properties.get(DENSE_FIELD_NAME, {}).get("dimension")
            if existing_dimension == dimension:
                logger.debug(
                    "Index already exists with compatible dimension",
                    extra={"index_name": index_name, "dimension": dimension},
                )
                return False
            logger.warning(
                "Index dimension mismatch, recreating",
                extra={
                    "index_name": index_name,
                    "existing_dimension": existing_dimension,
                    "new_dimension": dimension,
                },
            )
            await client.indices.delete(index=index_name)
        await client.indices.create(index=index_name, body=body)
    except RequestError as e:
        reason = _error_reason(e)
        logger.error(
            "Failed to create OpenSearch index",
            extra={"index_name": index_name, "error": reason, "error_type": type(e).__name__},
        )
        raise UpstreamFailure(f"Failed to create index '{index_name}': {reason}", cause=e) from e
    except OpenSearchException as e:
        logger.error(
            "OpenSearch error during index creation",
            extra={"index_name": index_name, "error": str(e), "error_type": type(e).__name__},
        )
        raise UpstreamFailure(f"OpenSearch error while creating index '{index_name}'", cause=e) from e
    logger.info(
        "Index created",
        extra={"index_name": index_name, "dimension": dimension, "similarity": config.similarity},
    )
    return True


async def deploy_endpoint(client: AsyncOpenSearch, index_name: str, endpoint_name: str) -> str:
    """Point the endpoint alias at index_name. Returns the endpoint name."""
    try:
        await client.indices.put_alias(index=index_name, name=endpoint_name)
    except OpenSearchException as e:
        logger.error(
            "Failed to deploy endpoint",
            extra={"index_name": index_name, "endpoint_name": endpoint_name, "error": str(e)},
        )
        raise UpstreamFailure(f"Failed to deploy endpoint '{endpoint_name}'", cause=e) from e
    logger.info("Endpoint deployed", extra={"index_name": index_name, "endpoint_name": endpoint_name})
    return endpoint_name
