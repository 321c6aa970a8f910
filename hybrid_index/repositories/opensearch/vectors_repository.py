"""
Write hybrid records to an OpenSearch index and run hybrid (k-NN + rank_feature) queries.
Record id is the document _id, so re-indexing the same record overwrites it.
"""

from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import OpenSearchException
from opensearchpy.helpers import async_bulk

from hybrid_index.config.logging import get_logger
from hybrid_index.resources.opensearch.index_manager import DENSE_FIELD_NAME, SPARSE_FIELD_NAME
from hybrid_index.services.errors import UpstreamFailure
from hybrid_index.services.models import ProcessedChunk, SparseVector

logger = get_logger(__name__)


def _record_to_index_doc(record: ProcessedChunk) -> dict[str, Any]:
    """Map one ProcessedChunk to an OpenSearch document. rank_features keys must be strings."""
    sparse = record.sparse_embedding
    return {
        DENSE_FIELD_NAME: record.dense_embedding,
        SPARSE_FIELD_NAME: {str(i): v for i, v in zip(sparse.indices, sparse.values)},
        "metadata": {"text": record.text},
    }


async def bulk_index_records(
    client: AsyncOpenSearch,
    index_name: str,
    records: list[ProcessedChunk],
) -> tuple[int, list[dict[str, Any]]]:
    """
    Bulk-index records and refresh the index.
    Returns (success_count, errors) where errors is a list of {item_id, error, error_code}.
    """
    if not records:
        return 0, []
    actions = [
        {"_index": index_name, "_id": record.id, "_source": _record_to_index_doc(record)}
        for record in records
    ]
    logger.info("Bulk indexing starting", extra={"index_name": index_name, "records_count": len(records)})
    try:
        success, failed = await async_bulk(
            client,
            actions,
            raise_on_error=False,
            raise_on_exception=False,
            request_timeout=60,
        )
        await client.indices.refresh(index=index_name)
    except OpenSearchException as e:
        logger.exception("Bulk index failed", extra={"index_name": index_name})
        raise UpstreamFailure(f"Bulk indexing into '{index_name}' failed", cause=e) from e

    errors: list[dict[str, Any]] = []
    for item in failed or []:
        op = item.get("index", {})
        err = op.get("error", {})
        if isinstance(err, dict):
            err_type = err.get("type", "unknown")
            err_reason = err.get("reason", str(err))
        else:
            err_type = "unknown"
            err_reason = str(err)
        errors.append(
            {
                "item_id": op.get("_id", "unknown"),
                "error": err_reason,
                "error_code": err_type.upper().replace(" ", "_"),
            }
        )
    if errors:
        logger.warning(
            "Bulk index had failures",
            extra={"index_name": index_name, "success": success, "failed_count": len(errors)},
        )
    return success, errors


def build_hybrid_query(
    dense_query: list[float],
    sparse_query: SparseVector | None,
    top_k: int,
    sparse_weight: float = 1.0,
) -> dict[str, Any]:
    """bool.should of one k-NN clause plus one linear rank_feature clause per sparse term."""
    should: list[dict[str, Any]] = [
        {"knn": {DENSE_FIELD_NAME: {"vector": dense_query, "k": top_k}}}
    ]
    if sparse_query is not None and sparse_weight > 0:
        for index, value in zip(sparse_query.indices, sparse_query.values):
            if value <= 0:
                continue
            should.append(
                {
                    "rank_feature": {
                        "field": f"{SPARSE_FIELD_NAME}.{index}",
                        "linear": {},
                        "boost": value * sparse_weight,
                    }
                }
            )
    return {
        "size": top_k,
        "_source": ["metadata"],
        "query": {"bool": {"should": should}},
    }


async def hybrid_search(
    client: AsyncOpenSearch,
    endpoint: str,
    dense_query: list[float],
    sparse_query: SparseVector | None = None,
    top_k: int = 10,
    sparse_weight: float = 1.0,
) -> dict[str, Any]:
    """Run a hybrid query against an endpoint alias and return the raw response."""
    body = build_hybrid_query(dense_query, sparse_query, top_k, sparse_weight)
    logger.info(
        "Hybrid query",
        extra={
            "endpoint": endpoint,
            "dense_dimension": len(dense_query),
            "sparse_terms": len(sparse_query.indices) if sparse_query else 0,
            "top_k": top_k,
        },
    )
    try:
        return await client.search(index=endpoint, body=body)
    except OpenSearchException as e:
        logger.error("Hybrid query failed", extra={"endpoint": endpoint, "error_type": type(e).__name__})
        raise UpstreamFailure(f"Hybrid query against endpoint '{endpoint}' failed", cause=e) from e
