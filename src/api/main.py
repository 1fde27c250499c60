"""FastAPI application entry point for the dashboard relay."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse
from api.routes import health_router, relay_router
from api.routes.relay import CORS_HEADERS
from core.config import API_DEBUG, API_VERSION, LOG_LEVEL, REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared upstream client on startup, close it on shutdown."""
    app.state.upstream_client = httpx.AsyncClient(
        follow_redirects=True,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )

    yield

    await app.state.upstream_client.aclose()


app = FastAPI(
    title="Dashboard Relay",
    description="Forwards dashboard requests to the remote data endpoints with CORS headers",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Report unexpected exceptions as JSON the browser can still read."""
    logger.exception(f"Unhandled error for {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=str(exc) or "Internal server error").model_dump(),
        headers=CORS_HEADERS,
    )


# Include routers
app.include_router(health_router)
app.include_router(relay_router)


# Entry point for uvicorn (run from src/: python -m api.main)
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    logging.basicConfig(level=LOG_LEVEL)
    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
