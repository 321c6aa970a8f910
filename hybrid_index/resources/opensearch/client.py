"""Async OpenSearch client construction and shutdown. The caller owns the client's lifetime."""

from opensearchpy import AsyncOpenSearch

from hybrid_index.config.logging import get_logger
from hybrid_index.config.settings import Settings
from hybrid_index.config.storage.opensearch import get_opensearch_config

logger = get_logger(__name__)


def create_opensearch_client(settings: Settings) -> AsyncOpenSearch:
    """Build an async OpenSearch client from settings."""
    cfg = get_opensearch_config(settings)
    client = AsyncOpenSearch(
        hosts=[cfg["host"]],
        http_auth=(cfg["username"], cfg["password"]),
        use_ssl=cfg["use_ssl"],
        verify_certs=cfg["verify_certs"],
        timeout=cfg["timeout"],
    )
    logger.info(
        "OpenSearch async client initialized",
        extra={"host": cfg["host"], "timeout": cfg["timeout"]},
    )
    return client


async def close_opensearch_client(client: AsyncOpenSearch) -> None:
    """Close the client and release connections. Call on app shutdown."""
    try:
        await client.close()
        logger.info("OpenSearch async client closed")
    except Exception as e:
        logger.warning("Error closing OpenSearch client", extra={"error": str(e)})
