"""
Shared test fixtures.

Provides: scripted embedding strategies, a mocked async OpenSearch client, a mocked object
store, and a FastAPI TestClient whose collaborators are replaced through dependency_overrides.
"""

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from hybrid_index.config.embedding.models import EmbeddingConfig
from hybrid_index.services.embedder.base import BaseEmbeddingStrategy
from hybrid_index.services.embedder.dense import DenseEmbedder
from hybrid_index.services.generation.base import BaseGenerationStrategy


class ScriptedEmbeddingStrategy(BaseEmbeddingStrategy):
    """Returns whatever the script function produces for each batch; records every call."""

    def __init__(self, script: Callable[[list[str]], list[list[float]]]):
        self.script = script
        self.calls: list[tuple[list[str], str, str]] = []

    @property
    def strategy_name(self) -> str:
        return "scripted"

    def embed(self, texts: list[str], model: str, task_type: str) -> list[list[float]]:
        self.calls.append((list(texts), model, task_type))
        return self.script(texts)


class StaticGenerationStrategy(BaseGenerationStrategy):
    def __init__(self, answer: str = "The cat sat (1)."):
        self.answer = answer
        self.prompts: list[tuple[str, str]] = []

    @property
    def strategy_name(self) -> str:
        return "static"

    def generate(self, prompt: str, model: str) -> str:
        self.prompts.append((prompt, model))
        return self.answer


def constant_vectors(dim: int = 4) -> Callable[[list[str]], list[list[float]]]:
    """Every text gets the same unit vector."""
    return lambda texts: [[1.0] + [0.0] * (dim - 1) for _ in texts]


@pytest.fixture
def embedding_config() -> EmbeddingConfig:
    return EmbeddingConfig(strategy="mock", model="mock-8")


@pytest.fixture
def constant_strategy() -> ScriptedEmbeddingStrategy:
    return ScriptedEmbeddingStrategy(constant_vectors())


@pytest.fixture
def constant_embedder(constant_strategy, embedding_config) -> DenseEmbedder:
    return DenseEmbedder(constant_strategy, embedding_config)


@pytest.fixture
def opensearch_client() -> MagicMock:
    """Async OpenSearch client double: every awaited call is an AsyncMock."""
    client = MagicMock()
    client.indices.exists = AsyncMock(return_value=False)
    client.indices.create = AsyncMock(return_value={"acknowledged": True})
    client.indices.delete = AsyncMock(return_value={"acknowledged": True})
    client.indices.get_mapping = AsyncMock(return_value={})
    client.indices.put_alias = AsyncMock(return_value={"acknowledged": True})
    client.indices.refresh = AsyncMock(return_value={})
    client.search = AsyncMock(return_value={"hits": {"hits": []}})
    client.ping = AsyncMock(return_value=True)
    client.close = AsyncMock()
    return client


@pytest.fixture
def object_store() -> MagicMock:
    store = MagicMock()
    store.key_prefix = "vector-data"
    store.upload = MagicMock(side_effect=lambda data, content_type, key: f"s3://test-bucket/{key}")
    return store
