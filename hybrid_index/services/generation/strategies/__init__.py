"""Answer-generation strategy implementations."""

from typing import Callable

from hybrid_index.config.settings import Settings
from hybrid_index.services.generation.base import BaseGenerationStrategy
from hybrid_index.services.generation.strategies.gemini_strategy import GeminiGenerationStrategy
from hybrid_index.services.generation.strategies.openai_strategy import OpenAIGenerationStrategy

STRATEGY_REGISTRY: dict[str, Callable[[Settings], BaseGenerationStrategy]] = {
    "gemini": lambda s: GeminiGenerationStrategy(api_key=s.google_api_key),
    "openai": lambda s: OpenAIGenerationStrategy(api_key=s.openai_api_key),
}


def build_generation_strategy(settings: Settings) -> BaseGenerationStrategy:
    """Construct the generation strategy named by settings.generation_strategy."""
    factory = STRATEGY_REGISTRY.get(settings.generation_strategy)
    if factory is None:
        raise ValueError(f"Unknown generation strategy: {settings.generation_strategy!r}")
    return factory(settings)
