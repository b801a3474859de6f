"""GitHub API client - data layer."""

import hashlib
import hmac
from typing import Optional

from github import Auth, Github
from github.PullRequest import PullRequest
from loguru import logger

from src.config import settings
from src.core.exceptions import ConfigurationError
from src.services.reviewer.schemas import ChangedFile, ReviewComment

_github_client: Optional[Github] = None


def verify_webhook_signature(payload: bytes, signature: str) -> bool:
    """Verify GitHub webhook signature using HMAC-SHA256."""
    if not settings.github_webhook_secret:
        logger.warning("No webhook secret configured, skipping verification")
        return True

    expected = hmac.new(
        settings.github_webhook_secret.encode(),
        payload,
        hashlib.sha256,
    ).hexdigest()

    expected_signature = f"sha256={expected}"
    return hmac.compare_digest(expected_signature, signature)


def get_github_client(token: Optional[str] = None) -> Github:
    """Get a GitHub client authenticated with the action's token."""
    global _github_client

    if token is None and _github_client:
        return _github_client

    token = token or settings.github_token
    if not token:
        raise ConfigurationError("github_token not configured")

    client = Github(auth=Auth.Token(token))
    if token == settings.github_token:
        _github_client = client

    logger.info("GitHub client initialized")
    return client


def fetch_pull_request(client: Github, owner: str, repo: str, pr_number: int) -> PullRequest:
    """Fetch a pull request from GitHub API."""
    repository = client.get_repo(f"{owner}/{repo}")
    return repository.get_pull(pr_number)


def fetch_pr_files(pr: PullRequest) -> list[ChangedFile]:
    """Fetch changed files from a PR. Binary and rename-only files have no patch."""
    return [
        ChangedFile(
            filename=f.filename,
            patch=f.patch,
            status=f.status,
            additions=f.additions,
            deletions=f.deletions,
        )
        for f in pr.get_files()
    ]


def create_file_comment(client: Github, comment: ReviewComment) -> None:
    """Create a review comment anchored to a whole file."""
    repository = client.get_repo(f"{comment.owner}/{comment.repo}")
    pr = repository.get_pull(comment.pull_number)
    commit = repository.get_commit(comment.commit_sha)

    pr.create_review_comment(
        body=comment.body,
        commit=commit,
        path=comment.path,
        subject_type=comment.subject_type,
    )
    logger.info(f"Created {comment.subject_type} comment on {comment.path}")
