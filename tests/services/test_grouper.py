"""Grouping sentences into chunks between breakpoints."""

import pytest

from hybrid_index.services.chunking.grouper import group_sentences
from hybrid_index.services.models import Sentence


@pytest.fixture
def sentences() -> list[Sentence]:
    return [Sentence(index=i, text=f"S{i}.") for i in range(6)]


def test_no_breakpoints_gives_one_chunk(sentences):
    assert group_sentences(sentences, []) == ["S0. S1. S2. S3. S4. S5."]


def test_breakpoints_split_after_index(sentences):
    assert group_sentences(sentences, [1, 3]) == ["S0. S1.", "S2. S3.", "S4. S5."]


def test_chunk_count_is_breakpoints_plus_one(sentences):
    for breakpoints in ([], [0], [2], [0, 1, 2, 3, 4]):
        assert len(group_sentences(sentences, breakpoints)) == len(breakpoints) + 1


def test_every_sentence_lands_in_exactly_one_chunk(sentences):
    chunks = group_sentences(sentences, [0, 2, 4])
    assert " ".join(chunks) == " ".join(s.text for s in sentences)


def test_unsorted_duplicate_and_out_of_range_breakpoints(sentences):
    assert group_sentences(sentences, [3, 1, 3, 5, 42, -1]) == ["S0. S1.", "S2. S3.", "S4. S5."]


def test_empty_sentence_list():
    assert group_sentences([], [0]) == []
