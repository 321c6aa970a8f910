"""Request/response schemas for POST /query."""

from typing import Any

from pydantic import BaseModel, Field

from hybrid_index.services.models import RetrievedChunk, SparseVector


class QueryRequest(BaseModel):
    endpoint: str = Field(..., min_length=1, description="Endpoint (alias) returned by /index")
    dense_query: list[float] = Field(..., min_length=1, description="Dense query vector")
    sparse_query: SparseVector | None = Field(default=None, description="Optional TF-IDF query vector")
    top_k: int | None = Field(default=None, ge=1, description="Neighbors to return (default from settings)")


class QueryResponse(BaseModel):
    chunks: list[RetrievedChunk] = Field(default_factory=list)
    prediction: dict[str, Any] = Field(default_factory=dict, description="Raw index response")
