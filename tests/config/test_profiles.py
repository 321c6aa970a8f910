"""Static profile loading and resolution."""

import pytest

from hybrid_index.config.chunking.static import get_active_profile_name, resolve_chunking_config
from hybrid_index.config.embedding.static import resolve_embedding_config
from hybrid_index.config.indexing.static import resolve_indexing_config
from hybrid_index.config.settings import Settings


def test_active_chunking_profile_defaults():
    config = resolve_chunking_config("active")
    assert get_active_profile_name() == "default"
    assert config.buffer_size == 1
    assert config.percentile == 90


def test_chunking_overrides_ignore_none():
    config = resolve_chunking_config("default", {"percentile": 75, "buffer_size": None})
    assert config.percentile == 75
    assert config.buffer_size == 1


@pytest.mark.parametrize("override", [{"percentile": 0}, {"percentile": 100}, {"buffer_size": -1}])
def test_chunking_overrides_are_validated(override):
    with pytest.raises(ValueError):
        resolve_chunking_config("default", override)


def test_unknown_chunking_profile():
    with pytest.raises(ValueError):
        resolve_chunking_config("missing")


def test_active_embedding_profile_is_gemini():
    config = resolve_embedding_config("active")
    assert config.strategy == "gemini"
    assert config.model == "gemini-embedding-exp-03-07"
    assert config.task_type == "RETRIEVAL_DOCUMENT"
    assert config.query_task_type == "RETRIEVAL_QUERY"


def test_embedding_strategy_name_maps_to_profile():
    assert resolve_embedding_config("mock").model == "mock-384"
    assert resolve_embedding_config("mock", {"model": "mock-8"}).model == "mock-8"


def test_indexing_resolution_by_similarity_profile_and_inline():
    assert resolve_indexing_config("cosine").similarity == "cosine"
    assert resolve_indexing_config("cosine_dense_graph").hnsw_config.m == 32
    inline = resolve_indexing_config({"similarity": "l2", "hnsw_config": {"m": 8}})
    assert inline.hnsw_config.m == 8
    assert inline.hnsw_config.ef_construction == 200


@pytest.mark.parametrize("value", ["hamming", {"similarity": "hamming"}])
def test_indexing_rejects_unknown(value):
    with pytest.raises(ValueError):
        resolve_indexing_config(value)


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.default_top_k == 5
    assert settings.max_top_k == 20
    assert settings.generation_model == "gemini-1.5-pro-preview"
    assert settings.s3_key_prefix == "vector-data"
