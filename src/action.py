"""GitHub Actions entry point - reviews the PR that triggered the workflow."""

import asyncio
import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from src.config import settings
from src.core.logging import get_logger
from src.services.reviewer.service import build_review_orchestrator, dispatch_event

logger = get_logger("action")


@dataclass
class ActionContext:
    """Workflow run context exposed by the Actions runner."""

    event_name: str | None
    payload: dict = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "ActionContext":
        payload = {}
        event_path = os.environ.get("GITHUB_EVENT_PATH")
        if event_path and Path(event_path).exists():
            payload = json.loads(Path(event_path).read_text(encoding="utf-8"))

        return cls(event_name=os.environ.get("GITHUB_EVENT_NAME"), payload=payload)


def set_failed(message: str) -> None:
    """Mark the step failed with a workflow error annotation."""
    logger.error(message)
    print(f"::error::{message}", flush=True)


async def run(context: ActionContext | None = None) -> int:
    """Run the review and return the process exit code."""
    context = context or ActionContext.from_env()

    try:
        event = dispatch_event(context.event_name, context.payload)
        logger.info(
            f"repoName: {event.repo} pull_number: {event.pull_number} "
            f"owner: {event.owner} sha: {event.head_sha}"
        )

        orchestrator = build_review_orchestrator()
        summary = await orchestrator.run(event, settings.exclude_patterns)
    except Exception as e:
        set_failed(str(e))
        return 1

    logger.info(f"Review result: {summary.model_dump()}")
    return 0


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
