"""
Sparse TF-IDF vectors over a batch-scoped vocabulary.

Index assignment depends on the batch: the same text vectorized in a different batch gets
different indices, so sparse vectors from separate batches must not be compared by raw index.
"""

import math
import re
from collections import Counter

from hybrid_index.config.logging import get_logger
from hybrid_index.services.models import SparseVector

logger = get_logger(__name__)

MIN_WEIGHT = 1e-6

_SPLIT_RE = re.compile(r"[^a-z0-9]+")


def tokenize(text: str) -> list[str]:
    """Lowercase, split on runs of non-alphanumerics, drop tokens of length <= 1."""
    if not text:
        return []
    return [t for t in _SPLIT_RE.split(text.lower()) if len(t) > 1]


def build_vocabulary(docs: list[str]) -> dict[str, int]:
    """Map each token to an id in first-seen order across the batch."""
    vocab: dict[str, int] = {}
    for doc in docs:
        for token in tokenize(doc):
            if token not in vocab:
                vocab[token] = len(vocab)
    return vocab


def term_frequency(doc: str, vocab: dict[str, int]) -> Counter:
    """Raw in-document count of each vocabulary token."""
    return Counter(t for t in tokenize(doc) if t in vocab)


def inverse_document_frequency(doc_term_freqs: list[Counter], doc_count: int) -> dict[str, float]:
    """Smoothed idf(t) = ln((N + 1) / (df(t) + 1)) + 1, always > 0."""
    df: Counter = Counter()
    for tf in doc_term_freqs:
        df.update(term for term, count in tf.items() if count > 0)
    return {term: math.log((doc_count + 1) / (freq + 1)) + 1.0 for term, freq in df.items()}


def vectorize(chunks: list[str]) -> list[SparseVector]:
    """
    TF-IDF sparse vector per chunk, computed jointly over the batch. Indices ascend with
    matching values; weights <= 1e-6 are dropped; a chunk with no tokens yields an empty vector.
    """
    if not chunks:
        return []
    vocab = build_vocabulary(chunks)
    doc_term_freqs = [term_frequency(doc, vocab) for doc in chunks]
    idf = inverse_document_frequency(doc_term_freqs, len(chunks))

    vectors: list[SparseVector] = []
    for tf in doc_term_freqs:
        weighted = sorted(
            (vocab[term], count * idf[term])
            for term, count in tf.items()
            if count > 0 and count * idf[term] > MIN_WEIGHT
        )
        vectors.append(
            SparseVector(indices=[i for i, _ in weighted], values=[w for _, w in weighted])
        )
    logger.info(
        "Sparse vectors built",
        extra={"document_count": len(chunks), "vocabulary_size": len(vocab)},
    )
    return vectors


def sparse_dimension(vectors: list[SparseVector]) -> int:
    """Highest referenced index + 1 across the batch; 0 when every vector is empty."""
    return max((v.indices[-1] + 1 for v in vectors if v.indices), default=0)
