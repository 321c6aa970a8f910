"""Sentence Transformers (local) embedding strategy."""

from sentence_transformers import SentenceTransformer

from hybrid_index.services.embedder.base import BaseEmbeddingStrategy

# Prompt names used by retrieval models that ship query/document prompts (e5, bge, gte...).
TASK_TYPE_TO_PROMPT_NAME = {
    "RETRIEVAL_QUERY": "query",
    "RETRIEVAL_DOCUMENT": "document",
}


class SentenceTransformersEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    Local Sentence Transformers; no API key. Models are loaded lazily and kept per name.
    The task type selects the model's query/document prompt when the model defines one.
    Output vectors are L2-normalized so dot product and cosine rank identically.
    """

    def __init__(self, batch_size: int = 32) -> None:
        self._models: dict[str, SentenceTransformer] = {}
        self._batch_size = batch_size

    @property
    def strategy_name(self) -> str:
        return "sentence_transformers"

    def _load(self, model_name: str) -> SentenceTransformer:
        if model_name not in self._models:
            self._models[model_name] = SentenceTransformer(model_name)
        return self._models[model_name]

    def embed(self, texts: list[str], model: str, task_type: str) -> list[list[float]]:
        encoder = self._load(model)
        prompt_name = TASK_TYPE_TO_PROMPT_NAME.get(task_type)
        if prompt_name not in (getattr(encoder, "prompts", None) or {}):
            prompt_name = None
        vectors = encoder.encode(
            texts,
            batch_size=self._batch_size,
            prompt_name=prompt_name,
            normalize_embeddings=True,
            show_progress_bar=False,
            convert_to_numpy=True,
        )
        return [v.tolist() for v in vectors]
