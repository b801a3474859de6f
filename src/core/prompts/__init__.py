"""Prompt templates using Jinja2."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

PROMPTS_DIR = Path(__file__).parent
_env = Environment(
    loader=FileSystemLoader(PROMPTS_DIR),
    undefined=StrictUndefined,
    keep_trailing_newline=False,
)


def render_review_system_prompt() -> str:
    """Render the reviewer persona and rubric."""
    template = _env.get_template("review_system.jinja2")
    return template.render()


def render_review_prompt(language: str, diff: str) -> str:
    """Render the human review prompt for one diff."""
    template = _env.get_template("review_human.jinja2")
    return template.render(language=language, diff=diff)
