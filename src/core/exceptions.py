"""Exceptions raised by the review pipeline."""


class ReviewPipelineError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class LanguageDetectionError(ReviewPipelineError):
    """No language label could be resolved for a file."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Could not detect language for {filename}", {"filename": filename})


class MalformedPatchError(ReviewPipelineError):
    """A patch could not be turned into reviewable chunks."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"Malformed patch for {filename}: {reason}", {"filename": filename})


class UnsupportedEventError(ReviewPipelineError):
    """The triggering event is not a pull request event."""

    def __init__(self, event_name: str | None) -> None:
        self.event_name = event_name
        super().__init__(
            f"This action only works on pull_request events. Got: {event_name}",
            {"event_name": event_name},
        )


class ConfigurationError(ReviewPipelineError):
    """Required settings or credentials are missing."""
