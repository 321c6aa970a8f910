"""S3 object store for JSON-lines ingestion artifacts."""

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hybrid_index.config.logging import get_logger
from hybrid_index.config.settings import Settings
from hybrid_index.config.storage.s3 import get_s3_config
from hybrid_index.services.errors import UpstreamFailure

logger = get_logger(__name__)


class S3ObjectStore:
    """Uploads bytes to one bucket and returns s3:// locators. No retries."""

    def __init__(self, bucket: str, region: str | None = None, key_prefix: str = "vector-data") -> None:
        """
        Initialize the store.

        Args:
            bucket: Destination bucket name
            region: AWS region of the bucket
            key_prefix: Prefix for generated object keys
        """
        self.bucket = bucket
        self.key_prefix = key_prefix
        self._s3_client = boto3.client("s3", region_name=region)

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStore":
        cfg = get_s3_config(settings)
        return cls(bucket=cfg["bucket"], region=cfg["region"], key_prefix=cfg["key_prefix"])

    def upload(self, data: bytes, content_type: str, key: str) -> str:
        """
        Upload data under key.

        Returns:
            str: s3://bucket/key locator

        Raises:
            UpstreamFailure: If the bucket is not configured or the upload fails
        """
        if not self.bucket:
            raise UpstreamFailure("Object storage bucket is not configured (set S3_BUCKET)")
        try:
            self._s3_client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 upload failed", extra={"bucket": self.bucket, "key": key, "error": str(e)})
            raise UpstreamFailure(f"Upload to s3://{self.bucket}/{key} failed", cause=e) from e
        uri = f"s3://{self.bucket}/{key}"
        logger.info("Uploaded object", extra={"uri": uri, "size_bytes": len(data)})
        return uri
