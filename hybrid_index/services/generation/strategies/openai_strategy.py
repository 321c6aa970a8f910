"""OpenAI chat-completions text generation."""

from openai import OpenAI

from hybrid_index.services.generation.base import BaseGenerationStrategy


class OpenAIGenerationStrategy(BaseGenerationStrategy):
    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("OpenAI API key is required (set OPENAI_API_KEY)")
        self._client = OpenAI(api_key=api_key)

    @property
    def strategy_name(self) -> str:
        return "openai"

    def generate(self, prompt: str, model: str) -> str:
        response = self._client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()
