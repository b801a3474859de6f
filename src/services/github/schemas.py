"""Pydantic schemas for GitHub webhook responses."""

from pydantic import BaseModel


class PingResponse(BaseModel):
    """Response schema for GitHub ping event."""

    message: str = "pong"
    zen: str = ""


class ReviewStartedResponse(BaseModel):
    """Response schema when review is started."""

    message: str = "Review started"
    pr: str
    action: str | None = None


class ActionNotSupportedResponse(BaseModel):
    """Response schema for unsupported webhook actions."""

    message: str
    supported_actions: list[str] = ["opened", "synchronize", "reopened"]
