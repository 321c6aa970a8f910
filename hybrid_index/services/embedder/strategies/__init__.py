"""Embedding strategy implementations and construction from config."""

from typing import Callable

from hybrid_index.config.embedding.models import EmbeddingConfig
from hybrid_index.config.settings import Settings
from hybrid_index.services.embedder.base import BaseEmbeddingStrategy
from hybrid_index.services.embedder.strategies.bedrock_strategy import BedrockEmbeddingStrategy
from hybrid_index.services.embedder.strategies.gemini_strategy import GeminiEmbeddingStrategy
from hybrid_index.services.embedder.strategies.mock_strategy import MockEmbeddingStrategy
from hybrid_index.services.embedder.strategies.openai_strategy import OpenAIEmbeddingStrategy
from hybrid_index.services.embedder.strategies.sentence_transformers_strategy import (
    SentenceTransformersEmbeddingStrategy,
)

STRATEGY_REGISTRY: dict[str, Callable[[EmbeddingConfig, Settings], BaseEmbeddingStrategy]] = {
    "gemini": lambda cfg, s: GeminiEmbeddingStrategy(api_key=cfg.api_key or s.google_api_key),
    "openai": lambda cfg, s: OpenAIEmbeddingStrategy(
        api_key=cfg.api_key or s.openai_api_key, batch_size=cfg.batch_size
    ),
    "sentence_transformers": lambda cfg, s: SentenceTransformersEmbeddingStrategy(batch_size=cfg.batch_size),
    "bedrock": lambda cfg, s: BedrockEmbeddingStrategy(region=cfg.region or s.aws_region),
    "mock": lambda cfg, s: MockEmbeddingStrategy(),
}


def build_embedding_strategy(config: EmbeddingConfig, settings: Settings) -> BaseEmbeddingStrategy:
    """Construct the embedding strategy named by config.strategy. Raises ValueError if unknown."""
    factory = STRATEGY_REGISTRY.get(config.strategy)
    if factory is None:
        raise ValueError(f"Unknown embedding strategy: {config.strategy!r}")
    return factory(config, settings)
