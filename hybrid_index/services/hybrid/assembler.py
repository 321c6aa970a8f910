"""
Hybrid record assembly: dense + sparse vectors + text → ProcessedChunk, and JSON-lines
serialization for index ingestion. One record per line:

    {"id": ..., "embedding": [...], "sparse_embedding": {"indices": [...], "values": [...]},
     "metadata": {"text": ...}}

A record that fails to serialize is logged and dropped; the rest of the batch is kept.
"""

import json
from typing import Any

from hybrid_index.config.logging import get_logger
from hybrid_index.services.embedder.dense import require_uniform_dimension
from hybrid_index.services.errors import EmbeddingMismatch, InvalidInput, SerializationFailure
from hybrid_index.services.models import ProcessedChunk, SparseVector
from hybrid_index.utils.ids import generate_unique_chunk_ids

logger = get_logger(__name__)


def assemble(
    chunk_texts: list[str],
    dense_vectors: list[list[float]],
    sparse_vectors: list[SparseVector],
) -> list[ProcessedChunk]:
    """
    Zip texts with their dense and sparse vectors, in order, under fresh unique ids.
    Dense vectors must be non-empty and share one dimension.
    """
    if len(dense_vectors) != len(chunk_texts):
        raise EmbeddingMismatch(expected=len(chunk_texts), received=len(dense_vectors), stage="assemble")
    if len(sparse_vectors) != len(chunk_texts):
        raise InvalidInput(
            f"Got {len(sparse_vectors)} sparse vectors for {len(chunk_texts)} chunks"
        )
    require_uniform_dimension(dense_vectors, "assemble")
    ids = generate_unique_chunk_ids(len(chunk_texts))
    records: list[ProcessedChunk] = []
    for record_id, text, dense, sparse in zip(ids, chunk_texts, dense_vectors, sparse_vectors):
        records.append(
            ProcessedChunk(id=record_id, text=text, dense_embedding=dense, sparse_embedding=sparse)
        )
    return records


def to_index_record(chunk: ProcessedChunk) -> dict[str, Any]:
    """Map a ProcessedChunk to its ingestion record."""
    return {
        "id": chunk.id,
        "embedding": chunk.dense_embedding,
        "sparse_embedding": {
            "indices": chunk.sparse_embedding.indices,
            "values": chunk.sparse_embedding.values,
        },
        "metadata": {"text": chunk.text},
    }


def _serialize_record(chunk: ProcessedChunk) -> str:
    try:
        return json.dumps(to_index_record(chunk), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationFailure(chunk.id, cause=e) from e


def serialize_json_lines(records: list[ProcessedChunk]) -> str:
    """One JSON object per line, in input order, no trailing newline. Bad records are dropped."""
    lines: list[str] = []
    for record in records:
        try:
            lines.append(_serialize_record(record))
        except SerializationFailure as e:
            logger.warning(
                "Dropping record that failed to serialize",
                extra={"chunk_id": e.record_id, "error": str(e.cause)},
            )
    if len(lines) != len(records):
        logger.warning(
            "JSON lines serialization dropped records",
            extra={"input_count": len(records), "serialized_count": len(lines)},
        )
    return "\n".join(lines)


def parse_json_line(line: str) -> ProcessedChunk:
    """Read one serialized record back. Raises ValueError on malformed input."""
    data = json.loads(line)
    sparse = data.get("sparse_embedding") or {}
    return ProcessedChunk(
        id=data.get("id"),
        text=(data.get("metadata") or {}).get("text", ""),
        dense_embedding=data.get("embedding") or [],
        sparse_embedding=SparseVector(
            indices=sparse.get("indices") or [],
            values=sparse.get("values") or [],
        ),
    )
