"""Base embedding strategy and contract."""

from abc import ABC, abstractmethod


class BaseEmbeddingStrategy(ABC):
    """
    Abstract embedding provider. One batched call per embed(); returns one vector per text
    in the same order. Count validation is the caller's job (see services/embedder/dense.py).
    """

    @abstractmethod
    def embed(self, texts: list[str], model: str, task_type: str) -> list[list[float]]:
        """Embed a list of texts with the given model and task type."""
        ...

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """Strategy identifier, e.g. 'gemini', 'openai'."""
        ...
