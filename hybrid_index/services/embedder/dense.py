"""
Dense embedding adapter over an embedding strategy. One batched call per invocation;
fails fast on a vector count or dimension mismatch instead of truncating or padding.
"""

from typing import Sequence

from hybrid_index.config.embedding.models import EmbeddingConfig
from hybrid_index.config.logging import get_logger
from hybrid_index.services.embedder.base import BaseEmbeddingStrategy
from hybrid_index.services.errors import EmbeddingDimensionMismatch, EmbeddingMismatch, UpstreamFailure

logger = get_logger(__name__)


def require_uniform_dimension(vectors: Sequence[Sequence[float]], stage: str) -> int:
    """
    Return the shared dimension of a batch. An empty vector, or one whose length differs
    from the first, raises EmbeddingDimensionMismatch. An empty batch has dimension 0.
    """
    if not vectors:
        return 0
    dimension = len(vectors[0])
    for vector in vectors:
        if not vector or len(vector) != dimension:
            raise EmbeddingDimensionMismatch(expected=dimension, received=len(vector), stage=stage)
    return dimension


def embed_texts(
    strategy: BaseEmbeddingStrategy,
    texts: list[str],
    model: str,
    task_type: str,
    stage: str = "chunks",
) -> list[list[float]]:
    """
    Embed texts in one call. Provider exceptions become UpstreamFailure (cause kept);
    a result whose length differs from len(texts) raises EmbeddingMismatch, and an empty
    or ragged batch raises EmbeddingDimensionMismatch.
    """
    if not texts:
        return []
    try:
        vectors = strategy.embed(texts, model, task_type)
    except Exception as e:
        logger.warning(
            "Embedding call failed",
            extra={"strategy": strategy.strategy_name, "stage": stage, "error_type": type(e).__name__},
        )
        raise UpstreamFailure(f"Embedding provider {strategy.strategy_name!r} failed", cause=e) from e
    if vectors is None or len(vectors) != len(texts):
        received = 0 if vectors is None else len(vectors)
        raise EmbeddingMismatch(expected=len(texts), received=received, stage=stage)
    vectors = [list(v) for v in vectors]
    require_uniform_dimension(vectors, stage)
    return vectors


class DenseEmbedder:
    """Binds a strategy to a model and task type. Used for windows, chunks and questions."""

    def __init__(self, strategy: BaseEmbeddingStrategy, config: EmbeddingConfig) -> None:
        self.strategy = strategy
        self.config = config

    def embed_windows(self, windows: list[str]) -> list[list[float]]:
        return embed_texts(self.strategy, windows, self.config.model, self.config.task_type, stage="windows")

    def embed_chunks(self, chunks: list[str]) -> list[list[float]]:
        return embed_texts(self.strategy, chunks, self.config.model, self.config.task_type, stage="chunks")

    def embed_query(self, text: str) -> list[float]:
        """Embed a single question with the query task type."""
        try:
            vectors = embed_texts(
                self.strategy, [text], self.config.model, self.config.query_task_type, stage="query"
            )
        except EmbeddingDimensionMismatch as e:
            raise UpstreamFailure("Failed to embed question: empty vector returned", cause=e) from e
        return vectors[0]

    @classmethod
    def with_overrides(
        cls,
        strategy: BaseEmbeddingStrategy,
        config: EmbeddingConfig,
        model: str | None = None,
        task_type: str | None = None,
    ) -> "DenseEmbedder":
        """Per-request model/task type on top of the configured profile. None keeps the profile value."""
        update = {k: v for k, v in {"model": model, "task_type": task_type}.items() if v}
        return cls(strategy, config.model_copy(update=update) if update else config)
