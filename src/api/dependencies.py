"""FastAPI dependencies for shared resources."""

import httpx
from fastapi import Request


async def get_upstream_client(request: Request) -> httpx.AsyncClient:
    """Shared HTTP client for forwarding requests, created in the app lifespan."""
    return request.app.state.upstream_client
