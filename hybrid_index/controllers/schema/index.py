"""Request/response schemas for POST /index."""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ChunkEmbedding(BaseModel):
    """A chunk with its precomputed dense vector (e.g. from /chunk)."""

    chunk: str
    vector: list[float]


class IndexRequest(BaseModel):
    """POST /index request body. Exactly one of transcript or embeddings is used; embeddings win if both are set."""

    transcript: str | None = Field(default=None, description="Transcript to chunk, embed and index")
    embeddings: list[ChunkEmbedding] | None = Field(
        default=None, description="Precomputed chunk embeddings; skips chunking and dense embedding"
    )
    buffer_size: int | None = Field(default=None, ge=0, le=20)
    percentile: float | None = Field(default=None, gt=0, lt=100)
    model: str | None = Field(default=None, description="Embedding model override")
    task_type: str | None = Field(default=None, description="Embedding task type override")
    index_name: str | None = Field(
        default=None,
        min_length=1,
        max_length=200,
        pattern=r"^[a-z0-9][a-z0-9_\-]*$",
        description="Target index (default hybrid-index-<epoch-ms>)",
    )
    indexing_profile: str | dict[str, Any] | None = Field(
        default=None,
        description="Profile name (e.g. cosine_default), similarity name, or inline {similarity, hnsw_config}",
    )

    @model_validator(mode="after")
    def validate_transcript_or_embeddings(self):
        if self.embeddings is None and self.transcript is None:
            raise ValueError("Either transcript or embeddings must be provided")
        return self


class IndexInfo(BaseModel):
    dimension: int = Field(..., ge=0, description="Dense vector dimension")
    sparse_dimension: int = Field(..., ge=0, description="max sparse index + 1 across the batch")
    similarity: str = Field(..., description="cosine|l2|dot_product")


class IndexResponse(BaseModel):
    chunk_count: int = Field(..., ge=0)
    storage_uri: str = Field(..., description="Locator of the uploaded JSON-lines file")
    index_name: str
    endpoint_name: str = Field(..., description="Alias to query through /query and /rag")
    index_info: IndexInfo
