"""Pydantic schemas for reviewer service."""

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel, ConfigDict

from src.core.prompts import render_review_prompt, render_review_system_prompt


class ChangedFile(BaseModel):
    """A file touched by the pull request."""

    filename: str
    patch: str | None = None
    status: str | None = None
    additions: int = 0
    deletions: int = 0


class DiffChunk(BaseModel):
    """One hunk of a unified diff, header line included in ``content``."""

    model_config = ConfigDict(frozen=True)

    content: str
    header: str
    source_start: int
    source_length: int
    target_start: int
    target_length: int


class ReviewRequest(BaseModel):
    """Input to a single model invocation."""

    model_config = ConfigDict(frozen=True)

    language: str
    diff_text: str

    def to_messages(self) -> list[BaseMessage]:
        return [
            SystemMessage(content=render_review_system_prompt()),
            HumanMessage(content=render_review_prompt(language=self.language, diff=self.diff_text)),
        ]


class ReviewResult(BaseModel):
    """Review text produced for a file, or for one chunk of it."""

    filename: str
    text: str
    chunk_index: int | None = None


class PullRequestEvent(BaseModel):
    """The parts of a pull_request event the pipeline needs."""

    owner: str
    repo: str
    pull_number: int
    head_sha: str

    @property
    def label(self) -> str:
        return f"{self.owner}/{self.repo}#{self.pull_number}"


class ReviewComment(BaseModel):
    """Payload for a file-level review comment."""

    owner: str
    repo: str
    pull_number: int
    commit_sha: str
    path: str
    body: str
    subject_type: str = "file"


class RunSummary(BaseModel):
    """Outcome of a completed review run."""

    pr: str
    files_reviewed: int
    comments_posted: int
