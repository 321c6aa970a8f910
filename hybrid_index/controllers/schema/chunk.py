"""Request/response schemas for POST /chunk."""

from pydantic import BaseModel, Field


class ChunkRequest(BaseModel):
    """POST /chunk request body. Unset parameters fall back to the active chunking/embedding profiles."""

    transcript: str = Field(..., description="Raw transcript text to chunk")
    buffer_size: int | None = Field(default=None, ge=0, le=20, description="Neighbor sentences per side of a window")
    percentile: float | None = Field(default=None, gt=0, lt=100, description="Breakpoint distance percentile")
    model: str | None = Field(default=None, description="Embedding model override")
    task_type: str | None = Field(default=None, description="Embedding task type override")


class DistanceOut(BaseModel):
    index: int
    distance: float


class ChunkOut(BaseModel):
    text: str
    token_count: int = Field(..., ge=0)
    vector: list[float]


class ChunkResponse(BaseModel):
    """POST /chunk response body. chunks[i].vector can be sent back to /index as embeddings."""

    chunk_count: int = Field(..., ge=0)
    breakpoints: list[int] = Field(default_factory=list)
    distances: list[DistanceOut] = Field(default_factory=list)
    chunks: list[ChunkOut] = Field(default_factory=list)
