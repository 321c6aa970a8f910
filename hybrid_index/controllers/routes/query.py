"""POST /query: hybrid (dense + sparse) nearest-neighbor query against a deployed endpoint."""

from fastapi import APIRouter, Depends
from opensearchpy import AsyncOpenSearch

from hybrid_index.config.settings import Settings
from hybrid_index.controllers.deps import get_app_settings, get_opensearch
from hybrid_index.controllers.schema.query import QueryRequest, QueryResponse
from hybrid_index.services.errors import InvalidInput
from hybrid_index.services.retrieval.rag import retrieve_chunks

router = APIRouter(prefix="/query", tags=["retrieval"])


def resolve_top_k(top_k: int | None, settings: Settings) -> int:
    """Default from settings; values above settings.max_top_k are rejected."""
    if top_k is None:
        return settings.default_top_k
    if not 1 <= top_k <= settings.max_top_k:
        raise InvalidInput(f"`top_k` must be between 1 and {settings.max_top_k}.")
    return top_k


@router.post("", response_model=QueryResponse)
async def query_endpoint(
    body: QueryRequest,
    settings: Settings = Depends(get_app_settings),
    opensearch: AsyncOpenSearch = Depends(get_opensearch),
) -> QueryResponse:
    """Return parsed neighbors and the raw index response. Malformed neighbors degrade to defaults."""
    chunks, raw = await retrieve_chunks(
        opensearch,
        body.endpoint,
        body.dense_query,
        top_k=resolve_top_k(body.top_k, settings),
        sparse_query=body.sparse_query,
        sparse_weight=settings.sparse_weight,
    )
    return QueryResponse(chunks=chunks, prediction=raw if isinstance(raw, dict) else {})
