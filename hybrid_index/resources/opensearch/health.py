"""Async OpenSearch health check. Used by /ready; no business logic."""

from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import ConnectionError as OSConnectionError
from opensearchpy.exceptions import ConnectionTimeout as OSConnectionTimeout
from opensearchpy.exceptions import OpenSearchException

from hybrid_index.config.logging import get_logger

logger = get_logger(__name__)


async def ping_opensearch(client: AsyncOpenSearch) -> dict[str, Any]:
    """
    Ping OpenSearch. Returns dict with 'ok' bool and optional 'error' string.
    Does not leak internal details.
    """
    try:
        ok = await client.ping()
        return {"ok": True} if ok else {"ok": False, "error": "connection_failed"}
    except OSConnectionTimeout as e:
        logger.warning("OpenSearch ping timeout", extra={"error": type(e).__name__})
        return {"ok": False, "error": "connection_timeout"}
    except (OSConnectionError, OpenSearchException) as e:
        logger.warning("OpenSearch ping failed", extra={"error": type(e).__name__})
        return {"ok": False, "error": "connection_failed"}
