"""Reviewer service - orchestration layer."""

from typing import Protocol

from src.core.exceptions import UnsupportedEventError
from src.core.logging import get_logger
from src.services.reviewer.generator import ReviewGenerator
from src.services.reviewer.schemas import (
    ChangedFile,
    PullRequestEvent,
    ReviewComment,
    ReviewResult,
    RunSummary,
)

logger = get_logger("reviewer.service")

PULL_REQUEST_EVENTS = ("pull_request",)
REVIEW_MODES = ("file", "chunk")


class FileLister(Protocol):
    async def list_changed_files(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        exclude_patterns: list[str],
    ) -> list[ChangedFile]: ...


class CommentPoster(Protocol):
    async def create_review_comment(self, comment: ReviewComment) -> None: ...


def dispatch_event(event_name: str | None, payload: dict) -> PullRequestEvent:
    """Extract the pull request from an event payload.

    Raises:
        UnsupportedEventError: For anything but a pull_request event
    """
    if event_name not in PULL_REQUEST_EVENTS:
        raise UnsupportedEventError(event_name)

    pr = payload.get("pull_request", {})
    repo = payload.get("repository", {})

    return PullRequestEvent(
        owner=repo.get("owner", {}).get("login"),
        repo=repo.get("name"),
        pull_number=payload.get("number", pr.get("number")),
        head_sha=pr.get("head", {}).get("sha"),
    )


class ReviewOrchestrator:
    """Reviews every eligible file of a PR and posts one comment per result.

    Files are handled one at a time in the order the lister returns them.
    The first failure aborts the run; files after it are not reviewed.
    """

    def __init__(
        self,
        files: FileLister,
        comments: CommentPoster,
        generator: ReviewGenerator,
        review_mode: str = "file",
    ) -> None:
        if review_mode not in REVIEW_MODES:
            raise ValueError(f"review_mode must be one of {REVIEW_MODES}, got {review_mode!r}")
        self.files = files
        self.comments = comments
        self.generator = generator
        self.review_mode = review_mode

    async def run(self, event: PullRequestEvent, exclude_patterns: list[str]) -> RunSummary:
        logger.info(
            f"Starting review: {event.label} sha={event.head_sha} mode={self.review_mode}"
        )

        files = await self.files.list_changed_files(
            event.owner, event.repo, event.pull_number, exclude_patterns
        )

        # Binary and rename-only files come without a patch
        reviewable_files = [f for f in files if f.patch is not None]
        skipped = len(files) - len(reviewable_files)
        if skipped:
            logger.info(f"Skipping {skipped} files without a patch")

        if not reviewable_files:
            logger.info("No files with patches to review")

        posted = 0
        for file in reviewable_files:
            for result in await self._review(file):
                await self.comments.create_review_comment(
                    ReviewComment(
                        owner=event.owner,
                        repo=event.repo,
                        pull_number=event.pull_number,
                        commit_sha=event.head_sha,
                        path=file.filename,
                        body=result.text,
                        subject_type="file",
                    )
                )
                posted += 1

        logger.info(f"Review completed: {len(reviewable_files)} files, {posted} comments")

        return RunSummary(
            pr=event.label,
            files_reviewed=len(reviewable_files),
            comments_posted=posted,
        )

    async def _review(self, file: ChangedFile) -> list[ReviewResult]:
        if self.review_mode == "chunk":
            return await self.generator.review_chunks(file)
        return [await self.generator.review(file)]


def build_review_orchestrator() -> ReviewOrchestrator:
    """Wire the orchestrator to OpenAI and GitHub from settings."""
    from src.config import settings
    from src.core.llm import get_chat_llm
    from src.core.retry import RetryPolicy
    from src.services.github.service import PullRequestService

    github = PullRequestService(
        retry_policy=RetryPolicy(
            max_attempts=settings.max_review_attempts,
            base_delay=settings.retry_base_delay,
            jitter_ratio=settings.retry_jitter_ratio,
        )
    )
    generator = ReviewGenerator(
        llm=get_chat_llm(),
        max_attempts=settings.max_review_attempts,
        base_delay=settings.retry_base_delay,
        jitter_ratio=settings.retry_jitter_ratio,
        max_concurrency=settings.chunk_concurrency,
    )
    return ReviewOrchestrator(
        files=github,
        comments=github,
        generator=generator,
        review_mode=settings.review_mode,
    )
