"""LLM client using OpenAI chat models."""

from typing import Optional

from langchain_openai import ChatOpenAI

from src.config import settings
from src.core.exceptions import ConfigurationError
from src.core.logging import get_logger

logger = get_logger("llm")


def get_chat_llm(
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    api_key: Optional[str] = None,
) -> ChatOpenAI:
    """Get a chat LLM instance, defaulting to the configured model."""
    api_key = api_key or settings.openai_api_key
    if not api_key:
        raise ConfigurationError("openai_api_key not configured")

    model = model or settings.model_name
    temperature = settings.model_temperature if temperature is None else temperature

    logger.info(f"[LLM] Using OpenAI model {model} (temperature={temperature})")

    # Retries are handled by the review pipeline, not the SDK.
    return ChatOpenAI(
        model=model,
        api_key=api_key,
        temperature=temperature,
        max_retries=0,
    )


def response_text(message) -> str:
    """Flatten a chat model response into plain text."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content)
