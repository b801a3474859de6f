"""Shared library utilities."""

from src.core.language import LanguageDetector
from src.core.llm import get_chat_llm
from src.core.logging import get_logger
from src.core.retry import RetryPolicy, with_retry

__all__ = [
    "get_chat_llm",
    "get_logger",
    "LanguageDetector",
    "RetryPolicy",
    "with_retry",
]
