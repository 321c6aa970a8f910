"""FastAPI app entry: config, logging, client lifetime, health, and error mapping."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from opensearchpy import AsyncOpenSearch

from hybrid_index.config.logging import configure_logging, get_logger
from hybrid_index.config.settings import get_settings
from hybrid_index.controllers.deps import build_resources, close_resources, get_opensearch
from hybrid_index.controllers.routes.chunk import router as chunk_router
from hybrid_index.controllers.routes.index import router as index_router
from hybrid_index.controllers.routes.query import router as query_router
from hybrid_index.controllers.routes.rag import router as rag_router
from hybrid_index.resources.opensearch.health import ping_opensearch
from hybrid_index.services.errors import EmbeddingMismatch, InvalidInput, PipelineError, UpstreamFailure

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging and clients. Shutdown: close clients."""
    settings = get_settings()
    configure_logging()
    logger.info("Application starting", extra={"app_name": settings.app_name, "environment": settings.environment})
    app.state.resources = build_resources(settings)
    yield
    logger.info("Application shutting down")
    await close_resources(app.state.resources)
    logger.info("Shutdown complete")


app = FastAPI(
    title="Hybrid Index Service",
    description="Semantic chunking, hybrid (dense + TF-IDF) indexing and retrieval for transcripts",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(chunk_router)
app.include_router(index_router)
app.include_router(query_router)
app.include_router(rag_router)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up. Does not check dependencies."""
    return {"status": "ok"}


@app.get("/ready")
async def ready(opensearch: AsyncOpenSearch = Depends(get_opensearch)):
    """Readiness: verifies OpenSearch connectivity."""
    result = await ping_opensearch(opensearch)
    ok = result.get("ok", False)
    body = {
        "status": "ok" if ok else "degraded",
        "opensearch": {"ok": ok, "error": result.get("error")},
    }
    return JSONResponse(content=body, status_code=200 if ok else 503)


def _is_connection_error(exc: BaseException | None) -> bool:
    if exc is None:
        return False
    exc_name = type(exc).__name__
    return "Connection" in exc_name or "Timeout" in exc_name or "connection" in str(type(exc).__module__).lower()


@app.exception_handler(InvalidInput)
async def invalid_input_handler(_request: Request, exc: InvalidInput):
    logger.info("Rejected invalid input", extra={"error": str(exc)})
    return JSONResponse(content={"detail": str(exc)}, status_code=422)


@app.exception_handler(EmbeddingMismatch)
async def embedding_mismatch_handler(_request: Request, exc: EmbeddingMismatch):
    logger.error(
        "Embedding mismatch",
        extra={"stage": exc.stage, "expected": exc.expected, "received": exc.received},
    )
    return JSONResponse(content={"detail": str(exc)}, status_code=502)


@app.exception_handler(UpstreamFailure)
async def upstream_failure_handler(_request: Request, exc: UpstreamFailure):
    """Dependency failures: 503 when the cause is a connection/timeout, 502 otherwise."""
    cause_name = type(exc.cause).__name__ if exc.cause is not None else None
    if _is_connection_error(exc.cause):
        logger.warning("Dependency unavailable", extra={"error": str(exc), "cause": cause_name})
        return JSONResponse(
            content={"detail": "A dependency is temporarily unavailable. Please retry later."},
            status_code=503,
        )
    logger.error("Upstream failure", extra={"error": str(exc), "cause": cause_name})
    return JSONResponse(content={"detail": str(exc)}, status_code=502)


@app.exception_handler(PipelineError)
async def pipeline_error_handler(_request: Request, exc: PipelineError):
    logger.error("Pipeline error", extra={"error": str(exc), "error_type": type(exc).__name__})
    return JSONResponse(content={"detail": str(exc)}, status_code=500)


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: connection failures and timeouts get clear, non-leaking messages."""
    exc_name = type(exc).__name__
    # Do not leak stack traces or internal details to the client
    if _is_connection_error(exc):
        logger.warning("Connection or timeout error", extra={"error": exc_name})
        return JSONResponse(
            content={"detail": "A dependency is temporarily unavailable. Please retry later."},
            status_code=503,
        )
    logger.exception("Unhandled error")
    return JSONResponse(
        content={"detail": "An internal error occurred."},
        status_code=500,
    )


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("hybrid_index.main:app", host=settings.host, port=settings.port, reload=settings.debug)
