"""Shared fixtures for the review pipeline tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from src.services.reviewer.generator import ReviewGenerator
from src.services.reviewer.schemas import PullRequestEvent
from tests.fakes import no_sleep


@pytest.fixture
def pr_event() -> PullRequestEvent:
    return PullRequestEvent(owner="acme", repo="shop", pull_number=42, head_sha="abc123")


@pytest.fixture
def llm() -> MagicMock:
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content="Looks solid."))
    return model


@pytest.fixture
def make_generator():
    def factory(llm, **kwargs) -> ReviewGenerator:
        kwargs.setdefault("sleep", no_sleep)
        return ReviewGenerator(llm=llm, **kwargs)

    return factory
