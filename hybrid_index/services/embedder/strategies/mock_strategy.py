"""Mock embedding strategy for tests and offline runs. Produces deterministic fake vectors."""

import hashlib
import re

from hybrid_index.services.embedder.base import BaseEmbeddingStrategy

MOCK_DEFAULT_DIM = 384


def _mock_dimension_for_model(model: str) -> int:
    match = re.search(r"(\d+)$", model)
    return int(match.group(1)) if match else MOCK_DEFAULT_DIM


class MockEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    Deterministic fake embeddings: SHA-256 of the text seeds a unit vector, so equal texts
    always embed equally across processes. Dimension comes from a trailing number in the
    model name (e.g. mock-384), default 384.
    """

    @property
    def strategy_name(self) -> str:
        return "mock"

    def embed(self, texts: list[str], model: str, task_type: str) -> list[list[float]]:
        dim = _mock_dimension_for_model(model)
        result: list[list[float]] = []
        for t in texts:
            seed = int.from_bytes(hashlib.sha256(t.encode("utf-8")).digest()[:8], "big")
            vec = [float((seed + j * 7919) % 1000) / 1000.0 + 0.001 for j in range(dim)]
            norm = sum(x * x for x in vec) ** 0.5
            result.append([x / norm for x in vec])
        return result
