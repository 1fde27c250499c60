"""Pydantic response models for relay endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy"
    version: str
    timestamp: str  # ISO 8601 UTC


class ErrorResponse(BaseModel):
    """Error body returned by the relay itself (never by the target)."""

    error: str


class ErrorMessages:
    """Relay error messages."""

    MISSING_TARGET = "Missing target"
    INVALID_TARGET = "Invalid target"
