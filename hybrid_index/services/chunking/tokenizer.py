"""Token counting for chunk statistics (tiktoken cl100k_base)."""

from functools import lru_cache

import tiktoken


@lru_cache(maxsize=1)
def _get_encoding() -> tiktoken.Encoding:
    return tiktoken.get_encoding("cl100k_base")


def count_tokens(text: str) -> int:
    """Return the cl100k_base token count for text; 0 for empty text."""
    if not text:
        return 0
    return len(_get_encoding().encode(text))
