"""
Hybrid index publishing: records → JSON lines → object storage → create index →
bulk-load records → deploy endpoint. Strict: any failure aborts the whole batch.
"""

import asyncio

from opensearchpy import AsyncOpenSearch
from pydantic import BaseModel

from hybrid_index.config.indexing.models import IndexingConfig
from hybrid_index.config.logging import get_logger
from hybrid_index.repositories.opensearch.vectors_repository import bulk_index_records
from hybrid_index.resources.opensearch.index_manager import create_hybrid_index, deploy_endpoint
from hybrid_index.resources.storage.s3 import S3ObjectStore
from hybrid_index.services.embedder.dense import require_uniform_dimension
from hybrid_index.services.errors import InvalidInput, UpstreamFailure
from hybrid_index.services.hybrid.assembler import serialize_json_lines
from hybrid_index.services.hybrid.tfidf import sparse_dimension
from hybrid_index.services.models import ProcessedChunk
from hybrid_index.utils.time import epoch_millis

logger = get_logger(__name__)

JSONL_CONTENT_TYPE = "application/jsonl"

__all__ = ["PublishResult", "endpoint_name_for", "object_key_for", "publish_hybrid_index"]


class PublishResult(BaseModel):
    chunk_count: int
    storage_uri: str
    index_name: str
    endpoint_name: str
    dimension: int
    sparse_dimension: int
    similarity: str


def endpoint_name_for(index_name: str) -> str:
    return f"{index_name}-endpoint"


def object_key_for(key_prefix: str) -> str:
    """<prefix>-<epoch-ms>.jsonl"""
    return f"{key_prefix}-{epoch_millis()}.jsonl"


async def publish_hybrid_index(
    records: list[ProcessedChunk],
    index_name: str,
    config: IndexingConfig,
    client: AsyncOpenSearch,
    object_store: S3ObjectStore,
    endpoint_name: str | None = None,
) -> PublishResult:
    """
    Publish records as a queryable hybrid index.

    Raises:
        InvalidInput: No records, or nothing left after serialization
        EmbeddingDimensionMismatch: A record has an empty or differently sized dense vector
        UpstreamFailure: Storage or OpenSearch failure, or any record rejected by bulk load
    """
    if not records:
        raise InvalidInput("No records to index.")
    # Validated before upload.
    dimension = require_uniform_dimension([r.dense_embedding for r in records], "publish")
    content = serialize_json_lines(records)
    if not content:
        raise InvalidInput("JSON lines content is empty; every record failed to serialize.")

    sparse_dim = sparse_dimension([r.sparse_embedding for r in records])
    endpoint_name = endpoint_name or endpoint_name_for(index_name)
    logger.info(
        "Publishing hybrid index",
        extra={
            "index_name": index_name,
            "records_count": len(records),
            "dimension": dimension,
            "sparse_dimension": sparse_dim,
            "similarity": config.similarity,
        },
    )

    key = object_key_for(object_store.key_prefix)
    storage_uri = await asyncio.to_thread(
        object_store.upload, content.encode("utf-8"), JSONL_CONTENT_TYPE, key
    )

    await create_hybrid_index(client, index_name, dimension, config)
    success, errors = await bulk_index_records(client, index_name, records)
    if errors:
        raise UpstreamFailure(
            f"Bulk load into '{index_name}' rejected {len(errors)} of {len(records)} records "
            f"(first: {errors[0]['error']})"
        )
    await deploy_endpoint(client, index_name, endpoint_name)

    return PublishResult(
        chunk_count=success,
        storage_uri=storage_uri,
        index_name=index_name,
        endpoint_name=endpoint_name,
        dimension=dimension,
        sparse_dimension=sparse_dim,
        similarity=config.similarity,
    )
