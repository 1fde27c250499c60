"""API Pydantic models."""

from .responses import ErrorMessages, ErrorResponse, HealthResponse

__all__ = ["HealthResponse", "ErrorResponse", "ErrorMessages"]
