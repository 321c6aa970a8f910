"""S3 object storage config (read from settings). Read-only; no business logic."""

from hybrid_index.config.settings import Settings


def get_s3_config(settings: Settings) -> dict:
    """Return bucket, key prefix and region for the JSON-lines object store."""
    return {
        "bucket": settings.s3_bucket,
        "key_prefix": settings.s3_key_prefix,
        "region": settings.aws_region,
    }
