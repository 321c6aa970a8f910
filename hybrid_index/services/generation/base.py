"""Base answer-generation strategy and contract."""

from abc import ABC, abstractmethod


class BaseGenerationStrategy(ABC):
    """Single text completion. May return "" on an empty-but-successful response."""

    @abstractmethod
    def generate(self, prompt: str, model: str) -> str:
        ...

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        ...
