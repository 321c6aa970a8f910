"""Sentence segmentation and context windows for semantic chunking."""

import re

from hybrid_index.services.models import Sentence, SentenceWindow

# A run of text ending in . ! or ? that is followed by whitespace or end of input.
_SENTENCE_RE = re.compile(r"\S.*?[.!?](?=\s|$)", re.DOTALL)


def segment(text: str) -> list[Sentence]:
    """
    Split text into ordered sentences on . ! ? followed by whitespace or end-of-string.
    Trailing text without a terminator becomes the last sentence. Never returns an empty list:
    input with no terminator (including empty input) yields one sentence equal to the trimmed input.
    """
    text = text or ""
    parts: list[str] = []
    last_end = 0
    for match in _SENTENCE_RE.finditer(text):
        sentence = match.group().strip()
        if sentence:
            parts.append(sentence)
        last_end = match.end()
    tail = text[last_end:].strip()
    if tail:
        parts.append(tail)
    if not parts:
        parts = [text.strip()]
    return [Sentence(index=i, text=s) for i, s in enumerate(parts)]


def build_window(sentences: list[Sentence], index: int, buffer_size: int) -> str:
    """Join sentence index with up to buffer_size neighbors per side; clamped at both ends."""
    if buffer_size < 0:
        raise ValueError(f"buffer_size must be >= 0, got {buffer_size}")
    start = max(0, index - buffer_size)
    end = min(len(sentences) - 1, index + buffer_size)
    return " ".join(s.text for s in sentences[start : end + 1])


def build_windows(sentences: list[Sentence], buffer_size: int) -> list[SentenceWindow]:
    """One window per sentence, in sentence order."""
    return [
        SentenceWindow(index=s.index, combined_text=build_window(sentences, s.index, buffer_size))
        for s in sentences
    ]
