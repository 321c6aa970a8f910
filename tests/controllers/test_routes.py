"""HTTP surface with collaborators replaced through dependency_overrides."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from opensearchpy.exceptions import ConnectionError as OSConnectionError

from conftest import ScriptedEmbeddingStrategy, StaticGenerationStrategy
from hybrid_index.config.embedding.models import EmbeddingConfig
from hybrid_index.config.settings import Settings
from hybrid_index.controllers.deps import AppResources, get_app_settings, get_resources
from hybrid_index.main import app
from hybrid_index.services.embedder.strategies.mock_strategy import MockEmbeddingStrategy

TRANSCRIPT = "The cat sat. The cat slept. Stocks fell sharply today. Markets are volatile."
BULK_PATH = "hybrid_index.services.indexing.publisher.bulk_index_records"

HITS = {
    "hits": {
        "hits": [
            {"_id": "chunk_1", "_score": 3.2, "_source": {"metadata": {"text": "The cat sat. The cat slept."}}},
            {"_id": "chunk_2", "_score": 1.1, "_source": {"metadata": {"text": "Markets are volatile."}}},
        ]
    }
}


@pytest.fixture
def resources(opensearch_client, object_store) -> AppResources:
    return AppResources(
        opensearch=opensearch_client,
        object_store=object_store,
        embedding_config=EmbeddingConfig(strategy="mock", model="mock-8"),
        embedding_strategy=MockEmbeddingStrategy(),
        generator=StaticGenerationStrategy("The cat sat (1)."),
    )


@pytest.fixture
def client(resources):
    app.dependency_overrides[get_resources] = lambda: resources
    app.dependency_overrides[get_app_settings] = lambda: Settings(_env_file=None)
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready(client, opensearch_client):
    assert client.get("/ready").status_code == 200
    opensearch_client.ping.return_value = False
    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["opensearch"] == {"ok": False, "error": "connection_failed"}


def test_chunk_returns_chunks_with_vectors(client):
    response = client.post("/chunk", json={"transcript": TRANSCRIPT, "buffer_size": 1, "percentile": 50})
    assert response.status_code == 200
    body = response.json()
    assert body["chunk_count"] == len(body["chunks"]) == len(body["breakpoints"]) + 1
    assert [d["index"] for d in body["distances"]] == [0, 1, 2]
    assert " ".join(c["text"] for c in body["chunks"]) == TRANSCRIPT
    assert all(len(c["vector"]) == 8 and c["token_count"] > 0 for c in body["chunks"])


def test_chunk_empty_transcript_is_422(client):
    response = client.post("/chunk", json={"transcript": "   "})
    assert response.status_code == 422
    assert "transcript" in response.json()["detail"]


def test_chunk_percentile_out_of_range_is_422(client):
    assert client.post("/chunk", json={"transcript": TRANSCRIPT, "percentile": 150}).status_code == 422


def test_chunk_embedding_mismatch_is_502(client, resources):
    resources.embedding_strategy = ScriptedEmbeddingStrategy(lambda texts: [[1.0, 0.0]])
    response = client.post("/chunk", json={"transcript": TRANSCRIPT})
    assert response.status_code == 502
    assert "returned 1 vectors for 4 inputs" in response.json()["detail"]


def test_index_empty_chunk_vector_is_502_and_uploads_nothing(client, resources, object_store):
    windows = [[1.0, 0.0], [1.0, 0.01], [0.0, 1.0], [0.0, 1.0]]
    resources.embedding_strategy = ScriptedEmbeddingStrategy(
        lambda texts: windows if len(texts) == 4 else [[0.1, 0.2, 0.3], []]
    )
    response = client.post("/index", json={"transcript": TRANSCRIPT, "buffer_size": 1, "percentile": 50})
    assert response.status_code == 502
    assert "empty vector" in response.json()["detail"]
    object_store.upload.assert_not_called()


def test_index_transcript(client, object_store, opensearch_client):
    with patch(BULK_PATH, new=AsyncMock(side_effect=lambda c, name, records: (len(records), []))):
        response = client.post("/index", json={"transcript": TRANSCRIPT, "indexing_profile": "cosine"})
    assert response.status_code == 200
    body = response.json()
    assert body["index_name"].startswith("hybrid-index-")
    assert body["endpoint_name"] == f"{body['index_name']}-endpoint"
    assert body["storage_uri"].startswith("s3://test-bucket/vector-data-")
    assert body["index_info"]["dimension"] == 8
    assert body["index_info"]["similarity"] == "cosine"
    assert body["index_info"]["sparse_dimension"] > 0
    assert body["chunk_count"] >= 1
    object_store.upload.assert_called_once()
    opensearch_client.indices.put_alias.assert_awaited_once()


def test_index_precomputed_embeddings_needs_no_provider(client, resources):
    resources.embedding_strategy = None
    payload = {
        "index_name": "talk-42",
        "embeddings": [
            {"chunk": "cats nap all day", "vector": [0.1, 0.2, 0.3]},
            {"chunk": "markets fell", "vector": [0.3, 0.2, 0.1]},
        ],
    }
    with patch(BULK_PATH, new=AsyncMock(return_value=(2, []))):
        response = client.post("/index", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["index_name"] == "talk-42"
    assert body["endpoint_name"] == "talk-42-endpoint"
    assert body["chunk_count"] == 2
    assert body["index_info"] == {"dimension": 3, "sparse_dimension": 6, "similarity": "dot_product"}


def test_index_transcript_without_provider_is_503(client, resources):
    resources.embedding_strategy = None
    assert client.post("/index", json={"transcript": TRANSCRIPT}).status_code == 503


def test_index_requires_transcript_or_embeddings(client):
    assert client.post("/index", json={"index_name": "x"}).status_code == 422


def test_index_ragged_embeddings_is_422(client):
    payload = {"embeddings": [{"chunk": "a b", "vector": [0.1]}, {"chunk": "c d", "vector": [0.1, 0.2]}]}
    assert client.post("/index", json=payload).status_code == 422


def test_index_unknown_profile_is_400(client):
    response = client.post("/index", json={"transcript": TRANSCRIPT, "indexing_profile": "hamming"})
    assert response.status_code == 400


def test_index_unexpected_error_is_500(client, object_store):
    object_store.upload.side_effect = RuntimeError("disk on fire")
    response = client.post("/index", json={"transcript": TRANSCRIPT})
    assert response.status_code == 500
    assert response.json() == {"detail": "An internal error occurred."}


def test_query_returns_parsed_chunks_and_raw_prediction(client, opensearch_client):
    opensearch_client.search.return_value = HITS
    response = client.post(
        "/query",
        json={
            "endpoint": "talk-42-endpoint",
            "dense_query": [0.1, 0.2, 0.3],
            "sparse_query": {"indices": [0, 2], "values": [1.2, 0.4]},
            "top_k": 2,
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["chunks"][0] == {"id": "chunk_1", "text": "The cat sat. The cat slept.", "distance": 3.2}
    assert body["prediction"] == HITS
    search_body = opensearch_client.search.call_args.kwargs["body"]
    assert search_body["size"] == 2
    assert len(search_body["query"]["bool"]["should"]) == 3


def test_query_top_k_above_max_is_422(client):
    response = client.post("/query", json={"endpoint": "e", "dense_query": [0.1], "top_k": 50})
    assert response.status_code == 422


def test_query_ragged_sparse_is_422(client):
    payload = {"endpoint": "e", "dense_query": [0.1], "sparse_query": {"indices": [1, 2], "values": [0.1]}}
    assert client.post("/query", json=payload).status_code == 422


def test_query_connection_failure_is_503(client, opensearch_client):
    opensearch_client.search.side_effect = OSConnectionError("N/A", "connection refused", None)
    response = client.post("/query", json={"endpoint": "e", "dense_query": [0.1]})
    assert response.status_code == 503


def test_rag_answers_from_retrieved_context(client, opensearch_client, resources):
    opensearch_client.search.return_value = HITS
    response = client.post("/rag", json={"endpoint": "talk-42-endpoint", "question": "What did the cat do?"})
    assert response.status_code == 200
    body = response.json()
    assert body["answer"] == "The cat sat (1)."
    assert [c["id"] for c in body["chunks"]] == ["chunk_1", "chunk_2"]
    prompt, model = resources.generator.prompts[0]
    assert "(1) The cat sat. The cat slept." in prompt
    assert model == "gemini-1.5-pro-preview"
    assert opensearch_client.search.call_args.kwargs["body"]["size"] == 5


def test_rag_llm_model_override_and_empty_answer(client, opensearch_client, resources):
    resources.generator = StaticGenerationStrategy("")
    response = client.post("/rag", json={"endpoint": "e", "question": "Why?", "llm_model": "gpt-4o", "top_k": 2})
    assert response.status_code == 200
    assert response.json()["answer"] == ""
    assert resources.generator.prompts[0][1] == "gpt-4o"


def test_rag_without_generator_is_503(client, resources):
    resources.generator = None
    assert client.post("/rag", json={"endpoint": "e", "question": "Why?"}).status_code == 503
