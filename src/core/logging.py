"""
Logging configuration for the PR review action.

Three outputs, picked from settings:
- inside a GitHub Actions job: plain lines, with DEBUG and WARNING records
  turned into ``::debug::`` / ``::warning::`` workflow commands so retries
  show up as annotations on the run;
- development: colourised human format;
- anywhere else (the webhook service): JSON records.
"""

import sys
from typing import Optional

from loguru import logger

from src.config import Settings, settings

# ERROR is left out: the action prints its own ::error:: line on failure
WORKFLOW_COMMANDS = {"DEBUG": "::debug::", "WARNING": "::warning::"}

DEVELOPMENT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<blue>{extra[logger_name]}</blue>:<blue>{function}</blue>:<blue>{line}</blue> - "
    "<level>{message}</level>"
)


def _workflow_format(record) -> str:
    # The runner timestamps every line already
    command = WORKFLOW_COMMANDS.get(record["level"].name, "")
    return command + "{extra[logger_name]} - {message}\n{exception}"


def log_mode(config: Settings) -> str:
    """Name the output style for the given settings."""
    if config.github_actions:
        return "actions"
    if config.environment == "development":
        return "development"
    return "json"


def configure_logging(config: Optional[Settings] = None, sink=sys.stderr) -> int:
    """Replace every loguru handler with one matching the run environment.

    Returns:
        The loguru handler id, so callers can remove it again.
    """
    config = config or settings
    logger.remove()

    log_level = "DEBUG" if config.debug else "INFO"
    mode = log_mode(config)

    if mode == "actions":
        return logger.add(sink, format=_workflow_format, level=log_level, colorize=False)

    if mode == "development":
        return logger.add(
            sink,
            format=DEVELOPMENT_FORMAT,
            level=log_level,
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    return logger.add(sink, level=log_level, serialize=True)


logger.configure(extra={"logger_name": "app"})
configure_logging()


def get_logger(name: Optional[str] = None):
    """Get a logger instance with optional name binding."""
    if name:
        return logger.bind(logger_name=name)
    return logger
