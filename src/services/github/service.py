"""GitHub service - business logic layer."""

import asyncio
from fnmatch import fnmatch
from pathlib import PurePosixPath

from github import Github

from src.core.logging import get_logger
from src.core.retry import RetryPolicy
from src.services.github.client import (
    create_file_comment,
    fetch_pr_files,
    fetch_pull_request,
    get_github_client,
)
from src.services.reviewer.schemas import ChangedFile, ReviewComment

logger = get_logger("github.service")


def is_excluded(path: str, patterns: list[str]) -> bool:
    """Match a path, or its basename, against glob patterns."""
    name = PurePosixPath(path).name
    return any(fnmatch(path, pattern) or fnmatch(name, pattern) for pattern in patterns)


def filter_excluded(files: list[ChangedFile], patterns: list[str]) -> list[ChangedFile]:
    """Drop files whose path matches any exclude pattern."""
    if not patterns:
        return list(files)

    kept = []
    for f in files:
        if is_excluded(f.filename, patterns):
            logger.info(f"Excluding {f.filename}")
            continue
        kept.append(f)
    return kept


class PullRequestService:
    """Lists PR files and posts review comments through PyGithub.

    PyGithub is blocking, so every call runs in a worker thread.
    """

    def __init__(self, client: Github | None = None, retry_policy: RetryPolicy | None = None) -> None:
        self.client = client or get_github_client()
        self.retry_policy = retry_policy or RetryPolicy()

    async def list_changed_files(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        exclude_patterns: list[str],
    ) -> list[ChangedFile]:
        """Get changed files from a PR, minus excluded paths."""
        logger.info(f"Fetching files: {owner}/{repo}#{pull_number}")

        def fetch() -> list[ChangedFile]:
            pr = fetch_pull_request(self.client, owner, repo, pull_number)
            return fetch_pr_files(pr)

        files = await self.retry_policy.run(lambda: asyncio.to_thread(fetch))
        logger.info(f"Found {len(files)} files in PR")

        return filter_excluded(files, exclude_patterns)

    async def create_review_comment(self, comment: ReviewComment) -> None:
        """Post a file-level review comment."""
        try:
            await self.retry_policy.run(
                lambda: asyncio.to_thread(create_file_comment, self.client, comment)
            )
        except Exception as e:
            logger.error(f"Failed to comment on {comment.path}: {e}")
            raise
