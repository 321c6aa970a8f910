"""OpenSearch connection config (read from settings). Read-only; no business logic."""

from hybrid_index.config.settings import Settings


def get_opensearch_config(settings: Settings) -> dict:
    """Return OpenSearch connection parameters from settings for use by resources."""
    return {
        "host": settings.opensearch_host,
        "username": settings.opensearch_username,
        "password": settings.opensearch_password,
        "use_ssl": settings.opensearch_use_ssl,
        "verify_certs": settings.opensearch_verify_certs,
        "timeout": settings.opensearch_timeout,
    }
