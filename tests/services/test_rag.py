"""Question embedding, retrieval, prompt construction and answer generation."""

import pytest

from conftest import StaticGenerationStrategy
from hybrid_index.services.errors import InvalidInput, UpstreamFailure
from hybrid_index.services.models import RetrievedChunk, SparseVector
from hybrid_index.services.retrieval.rag import (
    NO_CONTEXT_ANSWER,
    build_prompt,
    embed_question,
    generate_answer,
    retrieve_chunks,
)


@pytest.mark.asyncio
async def test_embed_question_uses_query_task_type(constant_embedder, constant_strategy):
    vector = await embed_question("What did the cat do?", constant_embedder)
    assert vector
    assert constant_strategy.calls[0][2] == "RETRIEVAL_QUERY"


@pytest.mark.asyncio
async def test_embed_question_rejects_blank(constant_embedder):
    with pytest.raises(InvalidInput):
        await embed_question("  ", constant_embedder)


@pytest.mark.asyncio
async def test_retrieve_chunks_parses_hits(opensearch_client):
    opensearch_client.search.return_value = {
        "hits": {"hits": [{"_id": "c1", "_score": 2.5, "_source": {"metadata": {"text": "cats sleep"}}}]}
    }
    chunks, raw = await retrieve_chunks(opensearch_client, "idx-endpoint", [0.1, 0.2], top_k=3)
    assert chunks == [RetrievedChunk(id="c1", text="cats sleep", distance=2.5)]
    assert raw is opensearch_client.search.return_value
    assert opensearch_client.search.call_args.kwargs["index"] == "idx-endpoint"


@pytest.mark.asyncio
async def test_retrieve_chunks_rejects_ragged_sparse_query(opensearch_client):
    with pytest.raises(InvalidInput):
        await retrieve_chunks(
            opensearch_client, "e", [0.1], top_k=1, sparse_query=SparseVector(indices=[1, 2], values=[0.5])
        )
    opensearch_client.search.assert_not_awaited()


def test_build_prompt_numbers_context():
    prompt = build_prompt("Why?", [RetrievedChunk(text="first"), RetrievedChunk(text="second")])
    assert "(1) first" in prompt
    assert "(2) second" in prompt
    assert "Question: Why?" in prompt
    assert NO_CONTEXT_ANSWER in prompt


@pytest.mark.asyncio
async def test_generate_answer_returns_text():
    generator = StaticGenerationStrategy("Cats nap (1).")
    assert await generate_answer("prompt", generator, "model-x") == "Cats nap (1)."
    assert generator.prompts == [("prompt", "model-x")]


@pytest.mark.asyncio
async def test_generate_answer_empty_is_not_an_error():
    assert await generate_answer("prompt", StaticGenerationStrategy(""), "m") == ""


@pytest.mark.asyncio
async def test_generate_answer_wraps_provider_errors():
    class Failing(StaticGenerationStrategy):
        def generate(self, prompt, model):
            raise RuntimeError("503 from provider")

    with pytest.raises(UpstreamFailure):
        await generate_answer("prompt", Failing(), "m")
