"""FastAPI MCP Server for NEI project metadata."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from . import __version__
from .api.deps import get_engine, sanitize_error_message
from .config import Settings, get_settings
from .engine import NeiEngine
from .errors import InvalidParams, SyncFailure, UnknownTool
from .mcp_transport import router as mcp_router
from .models import (
    HealthResponse,
    MCPRequest,
    MCPResponse,
    ReadyResponse,
    UsageInfo,
)
from .services import NeiClient, ProjectCacheStore

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> NeiEngine:
    """Wire the client, cache store and engine from settings."""
    client = NeiClient(settings.server_url, timeout=settings.request_timeout)
    store = ProjectCacheStore(
        client,
        snapshot_path=settings.cache_file,
        expansion_policy=settings.datatype_expansion,
        detail_base_url=settings.detail_base_url,
    )
    return NeiEngine(store, settings.project_id)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Startup
    logger.info(f"Starting NEI MCP Server v{__version__}")

    # An engine may be injected before startup (tests, embedding)
    if getattr(app.state, "engine", None) is None:
        settings = get_settings()
        app.state.engine = build_engine(settings)
        preload = settings.preload
    else:
        preload = False

    if preload:
        try:
            cache = await app.state.engine.load()
            logger.info(f"Project {cache.key} loaded: {cache.stats()}")
        except SyncFailure as e:
            # The sync tool can retry later
            logger.warning(f"Initial project load failed: {e}")

    yield
    # Shutdown
    logger.info("NEI MCP Server stopped")


app = FastAPI(
    title="NEI MCP Server",
    description="MCP endpoint for NEI project interfaces, datatypes and groups",
    version=__version__,
    lifespan=lifespan,
)

# Mount MCP JSON-RPC transport
app.include_router(mcp_router)


# ============ EXCEPTION HANDLERS ============


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent response format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "usage": {"latency_ms": 0},
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with sanitized error messages."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An internal server error occurred. Please try again.",
            "usage": {"latency_ms": 0},
        },
    )


# ============ HEALTH ENDPOINTS ============


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Health check endpoint (lightweight liveness check)."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(UTC),
    )


@app.get("/ready", tags=["Health"])
async def readiness_check(engine: Annotated[NeiEngine, Depends(get_engine)]):
    """Readiness check - ready once a project cache is resident."""
    cache = engine.cache
    response = ReadyResponse(
        status="ready" if cache is not None else "not_ready",
        version=__version__,
        checks={"project_cache": cache is not None},
        synced_at=cache.synced_at if cache is not None else None,
    )
    return JSONResponse(
        content=response.model_dump(mode="json"),
        status_code=200 if cache is not None else 503,
    )


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": "NEI MCP Server",
        "version": __version__,
        "mcp": "/mcp",
        "docs": "/docs",
        "health": "/health",
    }


# ============ REST TOOL ENDPOINT ============


@app.post("/v1/tools", response_model=MCPResponse, tags=["MCP"])
async def tool_endpoint(
    request: MCPRequest,
    engine: Annotated[NeiEngine, Depends(get_engine)],
) -> MCPResponse:
    """
    Execute an NEI tool.

    Args:
        request: The tool name and parameters
        engine: Engine created at startup

    Returns:
        MCPResponse with result or error

    Raises:
        HTTPException: 400 for an unknown tool, 422 for invalid parameters
    """
    start_time = time.perf_counter()

    try:
        result = await engine.execute(request.tool, request.params)
    except UnknownTool as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except InvalidParams as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except Exception as e:
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        return MCPResponse(
            success=False,
            error=sanitize_error_message(e),
            usage=UsageInfo(latency_ms=latency_ms),
        )

    latency_ms = int((time.perf_counter() - start_time) * 1000)
    logger.debug(f"{request.tool} finished in {latency_ms}ms")

    return MCPResponse(
        success=not result.is_error,
        result=None if result.is_error else result.data,
        error=result.data.get("error") if result.is_error else None,
        usage=UsageInfo(
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            latency_ms=latency_ms,
        ),
    )


# ============ MAIN ============


def main():
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    uvicorn.run(
        "nei_mcp.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
