"""Core schemas for webhook responses."""

from src.core.schemas.responses import ErrorResponse, HealthResponse

__all__ = ["ErrorResponse", "HealthResponse"]
