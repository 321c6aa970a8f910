"""S3 object store uploads."""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from hybrid_index.resources.storage.s3 import S3ObjectStore
from hybrid_index.services.errors import UpstreamFailure


@pytest.fixture
def s3_client() -> MagicMock:
    with patch("hybrid_index.resources.storage.s3.boto3.client") as factory:
        client = MagicMock()
        factory.return_value = client
        yield client


def test_upload_returns_s3_uri(s3_client):
    store = S3ObjectStore(bucket="vectors", region="us-east-1")
    uri = store.upload(b"{}", "application/jsonl", "vector-data-1.jsonl")
    assert uri == "s3://vectors/vector-data-1.jsonl"
    s3_client.put_object.assert_called_once_with(
        Bucket="vectors", Key="vector-data-1.jsonl", Body=b"{}", ContentType="application/jsonl"
    )


def test_upload_client_error_is_upstream_failure(s3_client):
    s3_client.put_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
    )
    store = S3ObjectStore(bucket="vectors")
    with pytest.raises(UpstreamFailure) as exc:
        store.upload(b"{}", "application/jsonl", "k.jsonl")
    assert isinstance(exc.value.cause, ClientError)


def test_upload_without_bucket(s3_client):
    with pytest.raises(UpstreamFailure):
        S3ObjectStore(bucket="").upload(b"{}", "application/jsonl", "k.jsonl")
    s3_client.put_object.assert_not_called()
