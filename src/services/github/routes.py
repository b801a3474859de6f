"""GitHub webhook routes."""

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from loguru import logger

from src.config import settings
from src.services.github.client import verify_webhook_signature
from src.services.github.schemas import (
    ActionNotSupportedResponse,
    PingResponse,
    ReviewStartedResponse,
)
from src.services.reviewer.schemas import PullRequestEvent
from src.services.reviewer.service import build_review_orchestrator, dispatch_event

router = APIRouter()

REVIEWED_ACTIONS = ["opened", "synchronize", "reopened"]


@router.post("/webhook/github")
async def github_webhook(request: Request, background_tasks: BackgroundTasks):
    """Handle GitHub webhook events."""
    event = request.headers.get("X-GitHub-Event")
    signature = request.headers.get("X-Hub-Signature-256", "")
    delivery_id = request.headers.get("X-GitHub-Delivery")

    logger.info(f"Webhook received: event={event}, delivery={delivery_id}")

    body = await request.body()

    if not verify_webhook_signature(body, signature):
        logger.warning("Invalid webhook signature")
        raise HTTPException(status_code=401, detail="Invalid signature")

    payload = await request.json()

    if event == "ping":
        return PingResponse(zen=payload.get("zen", ""))

    # Raises UnsupportedEventError for anything that isn't a pull request
    pr_event = dispatch_event(event, payload)

    action = payload.get("action")
    logger.info(f"PR event: {action} on {pr_event.label}")

    if action not in REVIEWED_ACTIONS:
        return ActionNotSupportedResponse(
            message=f"Action {action} not reviewed",
            supported_actions=REVIEWED_ACTIONS,
        )

    background_tasks.add_task(run_review, pr_event)

    return ReviewStartedResponse(pr=pr_event.label, action=action)


async def run_review(event: PullRequestEvent):
    """Run the review in background."""
    try:
        orchestrator = build_review_orchestrator()
        result = await orchestrator.run(event, settings.exclude_patterns)
        logger.info(f"Review completed: {result.model_dump()}")
    except Exception as e:
        logger.error(f"Review failed for {event.label}: {e}")
