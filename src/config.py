"""Configuration for the PR review action."""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


def _input(name: str) -> AliasChoices:
    """Accept both the GitHub Actions `INPUT_<NAME>` form and the bare name."""
    return AliasChoices(f"INPUT_{name}", name)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8080, validation_alias="PORT")
    github_actions: bool = Field(default=False, validation_alias="GITHUB_ACTIONS")

    # LLM - OpenAI
    openai_api_key: Optional[str] = Field(default=None, validation_alias=_input("OPENAI_API_KEY"))
    model_name: str = Field(default="gpt-4o-mini", validation_alias=_input("MODEL_NAME"))
    model_temperature: float = Field(default=0.0, validation_alias=_input("MODEL_TEMPERATURE"))

    # GitHub
    github_token: Optional[str] = Field(default=None, validation_alias=_input("GITHUB_TOKEN"))
    github_webhook_secret: Optional[str] = Field(default=None, validation_alias="GITHUB_WEBHOOK_SECRET")

    # Review Configuration
    exclude_files: str = Field(default="", validation_alias=_input("EXCLUDE_FILES"))
    review_mode: str = Field(default="file", validation_alias=_input("REVIEW_MODE"))
    max_review_attempts: int = Field(default=3, ge=1, validation_alias="MAX_REVIEW_ATTEMPTS")
    retry_base_delay: float = Field(default=1.0, ge=0, validation_alias="RETRY_BASE_DELAY")
    retry_jitter_ratio: float = Field(default=0.5, ge=0, validation_alias="RETRY_JITTER_RATIO")
    chunk_concurrency: int = Field(default=5, ge=1, validation_alias="CHUNK_CONCURRENCY")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"
        protected_namespaces = ()

    @property
    def exclude_patterns(self) -> list[str]:
        """Comma separated `exclude_files` as a list of glob patterns."""
        return [p.strip() for p in self.exclude_files.split(",") if p.strip()]


settings = Settings()
