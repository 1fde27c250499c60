"""API route modules."""

from .health import router as health_router
from .relay import router as relay_router

__all__ = ["health_router", "relay_router"]
