"""
Breakpoint detection: embed sentence windows, measure adjacent cosine distance,
and flag boundaries whose distance exceeds a percentile threshold.
"""

import math
from typing import Callable, Sequence

from hybrid_index.services.embedder.dense import require_uniform_dimension
from hybrid_index.services.errors import EmbeddingMismatch, InvalidInput

EmbedFn = Callable[[list[str]], list[list[float]]]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """dot(a, b) / (|a| * |b|); 0.0 when either norm is zero. Extra trailing dimensions are ignored."""
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / math.sqrt(norm_a * norm_b)


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """1 - cosine similarity, clamped to [0, 2] against rounding."""
    return min(2.0, max(0.0, 1.0 - cosine_similarity(a, b)))


def adjacent_distances(vectors: Sequence[Sequence[float]]) -> list[float]:
    """Distance between each consecutive pair; N vectors give N - 1 distances."""
    return [cosine_distance(vectors[i], vectors[i + 1]) for i in range(len(vectors) - 1)]


def percentile_threshold(values: Sequence[float], percentile: float) -> float:
    """
    Linear-interpolated quantile over a sorted copy (position = (n - 1) * p).
    Returns 0.0 for an empty input.
    """
    if not values:
        return 0.0
    ordered = sorted(values)
    pos = (len(ordered) - 1) * (percentile / 100)
    base = math.floor(pos)
    rest = pos - base
    if base + 1 < len(ordered):
        return ordered[base] + rest * (ordered[base + 1] - ordered[base])
    return ordered[base]


def detect_breakpoints(
    windows: list[str],
    percentile: float,
    embed: EmbedFn,
) -> tuple[list[float], list[int]]:
    """
    Batch-embed all windows once, then return (distances, breakpoints) where breakpoint i
    means distance_i is strictly greater than the percentile threshold.
    A single window needs no embedding and yields no distances and no breakpoints.
    Raises EmbeddingMismatch if the embedder returns the wrong number of vectors, and
    EmbeddingDimensionMismatch if any vector is empty or differs in dimension.
    """
    if not 0 < percentile < 100:
        raise InvalidInput(f"percentile must be in (0, 100), got {percentile}")
    if len(windows) < 2:
        return [], []
    vectors = embed(windows)
    if len(vectors) != len(windows):
        raise EmbeddingMismatch(expected=len(windows), received=len(vectors), stage="windows")
    require_uniform_dimension(vectors, "windows")
    distances = adjacent_distances(vectors)
    threshold = percentile_threshold(distances, percentile)
    breakpoints = [i for i, d in enumerate(distances) if d > threshold]
    return distances, breakpoints
