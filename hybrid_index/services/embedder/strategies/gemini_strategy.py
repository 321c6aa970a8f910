"""Google Gemini embedding strategy (google-genai SDK)."""

from google import genai
from google.genai import types

from hybrid_index.services.embedder.base import BaseEmbeddingStrategy


class GeminiEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    Gemini embed_content with a task type (RETRIEVAL_DOCUMENT for chunks and windows,
    RETRIEVAL_QUERY for questions). All texts go out in a single request.
    """

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("Gemini API key is required (set GOOGLE_API_KEY)")
        self._client = genai.Client(api_key=api_key)

    @property
    def strategy_name(self) -> str:
        return "gemini"

    def embed(self, texts: list[str], model: str, task_type: str) -> list[list[float]]:
        if not texts:
            return []
        response = self._client.models.embed_content(
            model=model,
            contents=texts,
            config=types.EmbedContentConfig(task_type=task_type),
        )
        return [list(e.values or []) for e in response.embeddings or []]
