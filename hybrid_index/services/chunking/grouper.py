"""Group sentences between breakpoints into chunk strings."""

from hybrid_index.services.models import Sentence


def group_sentences(sentences: list[Sentence], breakpoints: list[int]) -> list[str]:
    """
    Emit the space-joined range [previous_end + 1, breakpoint] for each breakpoint in ascending
    order, with the final sentence index appended so every sentence lands in exactly one chunk.
    Empty groups from duplicate or out-of-range breakpoints are dropped.
    """
    if not sentences:
        return []
    last = len(sentences) - 1
    ends = sorted({bp for bp in breakpoints if 0 <= bp < last} | {last})
    chunks: list[str] = []
    start = 0
    for end in ends:
        group = sentences[start : end + 1]
        if group:
            chunks.append(" ".join(s.text for s in group))
        start = end + 1
    return chunks
