"""OpenAI Embedding API strategy."""

from openai import OpenAI

from hybrid_index.services.embedder.base import BaseEmbeddingStrategy


class OpenAIEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    OpenAI Embeddings API. Models: text-embedding-3-small, text-embedding-3-large, etc.
    task_type has no OpenAI equivalent and is ignored.
    """

    def __init__(self, api_key: str, batch_size: int = 100) -> None:
        if not api_key:
            raise ValueError("OpenAI API key is required (set in config or OPENAI_API_KEY)")
        self._client = OpenAI(api_key=api_key)
        self._batch_size = min(batch_size, 2048)  # API limit per request

    @property
    def strategy_name(self) -> str:
        return "openai"

    def embed(self, texts: list[str], model: str, task_type: str) -> list[list[float]]:
        if not texts:
            return []
        all_embeddings: list[list[float]] = []
        for i in range(0, len(texts), self._batch_size):
            batch = texts[i : i + self._batch_size]
            response = self._client.embeddings.create(model=model, input=batch)
            # Preserve order by index
            by_index = {e.index: e.embedding for e in response.data}
            all_embeddings.extend(by_index[j] for j in sorted(by_index))
        return all_embeddings
