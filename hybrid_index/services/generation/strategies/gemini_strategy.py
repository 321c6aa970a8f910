"""Gemini text generation (google-genai SDK)."""

from google import genai

from hybrid_index.services.generation.base import BaseGenerationStrategy


class GeminiGenerationStrategy(BaseGenerationStrategy):
    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("Gemini API key is required (set GOOGLE_API_KEY)")
        self._client = genai.Client(api_key=api_key)

    @property
    def strategy_name(self) -> str:
        return "gemini"

    def generate(self, prompt: str, model: str) -> str:
        response = self._client.models.generate_content(model=model, contents=prompt)
        return (response.text or "").strip()
