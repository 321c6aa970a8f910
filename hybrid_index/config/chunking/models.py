"""Semantic chunking configuration models. Read-only; no business logic."""

from pydantic import BaseModel, Field


class SemanticChunkingConfig(BaseModel):
    """Window and breakpoint parameters for semantic chunking."""

    buffer_size: int = Field(default=1, ge=0, description="Neighbor sentences on each side of a window")
    percentile: float = Field(default=90, gt=0, lt=100, description="Distance percentile used as threshold")
