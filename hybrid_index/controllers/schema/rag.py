"""Request/response schemas for POST /rag."""

from pydantic import BaseModel, Field

from hybrid_index.services.models import RetrievedChunk


class RagRequest(BaseModel):
    endpoint: str = Field(..., min_length=1, description="Endpoint (alias) returned by /index")
    question: str = Field(..., description="User question")
    top_k: int | None = Field(default=None, ge=1, le=20, description="Context chunks to retrieve (default 5)")
    llm_model: str | None = Field(default=None, description="Generation model override")
    embedding_model: str | None = Field(default=None, description="Question embedding model override")


class RagResponse(BaseModel):
    answer: str = Field(..., description='Generated answer; "" when the model returned nothing')
    chunks: list[RetrievedChunk] = Field(default_factory=list)
