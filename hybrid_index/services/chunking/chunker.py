"""
Semantic chunker: segment → windows → embed windows → adjacent distances → percentile
breakpoints → grouped chunk strings. Stateless between calls; the embedder is injected.
"""

from hybrid_index.config.chunking.models import SemanticChunkingConfig
from hybrid_index.config.logging import get_logger
from hybrid_index.services.chunking.breakpoints import detect_breakpoints
from hybrid_index.services.chunking.grouper import group_sentences
from hybrid_index.services.chunking.segmenter import build_windows, segment
from hybrid_index.services.embedder.dense import DenseEmbedder
from hybrid_index.services.models import ChunkingResult

logger = get_logger(__name__)


class SemanticChunker:
    """Splits a transcript into semantically coherent chunks using window embeddings."""

    def __init__(self, embedder: DenseEmbedder, config: SemanticChunkingConfig) -> None:
        self.embedder = embedder
        self.config = config

    def chunk(self, text: str) -> ChunkingResult:
        """
        Chunk text. Never returns zero chunks: empty input gives one empty chunk.
        Raises EmbeddingMismatch / UpstreamFailure from the window embedding call.
        """
        sentences = segment(text)
        windows = build_windows(sentences, self.config.buffer_size)
        distances, breakpoints = detect_breakpoints(
            [w.combined_text for w in windows],
            self.config.percentile,
            self.embedder.embed_windows,
        )
        chunks = group_sentences(sentences, breakpoints)
        logger.info(
            "Semantic chunking complete",
            extra={
                "sentence_count": len(sentences),
                "breakpoint_count": len(breakpoints),
                "chunk_count": len(chunks),
                "buffer_size": self.config.buffer_size,
                "percentile": self.config.percentile,
            },
        )
        return ChunkingResult(
            sentences=sentences,
            distances=distances,
            breakpoints=breakpoints,
            chunks=chunks,
        )
