"""Indexing configuration models. Read-only; no business logic."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class HNSWConfig(BaseModel):
    """HNSW tuning parameters for the dense field."""

    m: int = Field(default=16, ge=1)
    ef_construction: int = Field(default=200, ge=1)
    engine: str = Field(default="nmslib", description="nmslib|faiss|lucene")


class IndexingConfig(BaseModel):
    """Dense similarity, HNSW tuning and shard settings for a hybrid index."""

    similarity: Literal["cosine", "l2", "dot_product"] = Field(..., description="cosine|l2|dot_product")
    hnsw_config: HNSWConfig = Field(default_factory=HNSWConfig)
    index_settings: dict[str, Any] = Field(
        default_factory=lambda: {"number_of_shards": 1, "number_of_replicas": 1}
    )
