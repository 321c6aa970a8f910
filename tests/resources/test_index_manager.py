"""Hybrid index creation and endpoint deployment."""

import pytest
from opensearchpy.exceptions import RequestError, TransportError

from hybrid_index.config.indexing.static import resolve_indexing_config
from hybrid_index.resources.opensearch.index_manager import build_index_body, create_hybrid_index, deploy_endpoint
from hybrid_index.services.errors import UpstreamFailure


def test_index_body_maps_dense_sparse_and_text():
    body = build_index_body(768, resolve_indexing_config("dot_product"))
    props = body["mappings"]["properties"]
    assert body["settings"]["index"]["knn"] is True
    assert props["embedding"]["dimension"] == 768
    assert props["embedding"]["method"]["space_type"] == "innerproduct"
    assert props["sparse_embedding"] == {"type": "rank_features"}
    assert props["metadata"]["properties"]["text"]["type"] == "text"


def test_index_body_rejects_zero_dimension():
    with pytest.raises(ValueError):
        build_index_body(0, resolve_indexing_config("cosine"))


@pytest.mark.asyncio
async def test_create_new_index(opensearch_client):
    assert await create_hybrid_index(opensearch_client, "idx", 4, resolve_indexing_config("cosine")) is True
    opensearch_client.indices.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_existing_index_with_same_dimension_is_reused(opensearch_client):
    opensearch_client.indices.exists.return_value = True
    opensearch_client.indices.get_mapping.return_value = {
        "idx": {"mappings": {"properties": {"embedding": {"dimension": 4}}}}
    }
    assert await create_hybrid_index(opensearch_client, "idx", 4, resolve_indexing_config("cosine")) is False
    opensearch_client.indices.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_existing_index_with_other_dimension_is_recreated(opensearch_client):
    opensearch_client.indices.exists.return_value = True
    opensearch_client.indices.get_mapping.return_value = {
        "idx": {"mappings": {"properties": {"embedding": {"dimension": 8}}}}
    }
    assert await create_hybrid_index(opensearch_client, "idx", 4, resolve_indexing_config("cosine")) is True
    opensearch_client.indices.delete.assert_awaited_once_with(index="idx")
    opensearch_client.indices.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_failure_is_upstream_failure(opensearch_client):
    opensearch_client.indices.create.side_effect = RequestError(
        400, "illegal_argument_exception", {"error": {"reason": "bad mapping"}}
    )
    with pytest.raises(UpstreamFailure, match="bad mapping"):
        await create_hybrid_index(opensearch_client, "idx", 4, resolve_indexing_config("cosine"))


@pytest.mark.asyncio
async def test_deploy_endpoint_puts_alias(opensearch_client):
    assert await deploy_endpoint(opensearch_client, "idx", "idx-endpoint") == "idx-endpoint"
    opensearch_client.indices.put_alias.assert_awaited_once_with(index="idx", name="idx-endpoint")


@pytest.mark.asyncio
async def test_deploy_endpoint_failure(opensearch_client):
    opensearch_client.indices.put_alias.side_effect = TransportError(500, "boom", {})
    with pytest.raises(UpstreamFailure):
        await deploy_endpoint(opensearch_client, "idx", "idx-endpoint")
