#!/usr/bin/env python3
"""Run a PR review locally against a real pull request."""
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from src.config import settings
from src.services.reviewer.schemas import PullRequestEvent
from src.services.reviewer.service import build_review_orchestrator


async def main(owner: str, repo: str, pr_number: int, head_sha: str):
    orchestrator = build_review_orchestrator()
    result = await orchestrator.run(
        PullRequestEvent(owner=owner, repo=repo, pull_number=pr_number, head_sha=head_sha),
        settings.exclude_patterns,
    )
    print(f"Review result: {result}")

if __name__ == "__main__":
    if len(sys.argv) != 5:
        sys.exit("usage: run_review.py OWNER REPO PR_NUMBER HEAD_SHA")
    asyncio.run(main(sys.argv[1], sys.argv[2], int(sys.argv[3]), sys.argv[4]))
