"""Provider-independent interface for producing raw schema responses."""

from __future__ import annotations

from abc import ABC, abstractmethod

from schemacraft.models.generation import Progress, ProgressCallback, PromptConfig


class LLMError(RuntimeError):
    """Raised when a response caller cannot produce output."""


class UpstreamError(LLMError):
    """Raised when the generation endpoint answers with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"OpenAI API error: {status_code} {message}")
        self.status_code = status_code
        self.message = message


class NetworkError(LLMError):
    """Raised when the generation endpoint cannot be reached."""


def notify(on_progress: ProgressCallback | None, progress: Progress) -> None:
    if on_progress is not None:
        on_progress(progress)


class ResponseCaller(ABC):
    """Turns a prompt into raw model text, reporting progress as it goes."""

    @abstractmethod
    def complete(
        self,
        prompt: PromptConfig,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        """Return the raw response text for a prompt."""
