"""Embedding configuration models. Read-only; no business logic."""

from pydantic import BaseModel, Field


class EmbeddingConfig(BaseModel):
    """Embedding strategy and parameters."""

    strategy: str = Field(..., description="gemini|openai|sentence_transformers|bedrock|mock")
    model: str = Field(..., description="Model identifier")
    task_type: str = Field(default="RETRIEVAL_DOCUMENT", description="Task type for document embeddings")
    query_task_type: str = Field(default="RETRIEVAL_QUERY", description="Task type for question embeddings")
    batch_size: int = Field(default=100, ge=1)
    api_key: str | None = Field(default=None, description="Provider API key when the strategy needs one")
    region: str | None = Field(default=None, description="AWS region when strategy is bedrock")
