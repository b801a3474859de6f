"""GitHub service."""

from src.services.github.service import (
    PullRequestService,
    filter_excluded,
    is_excluded,
)

__all__ = [
    "PullRequestService",
    "filter_excluded",
    "is_excluded",
]
