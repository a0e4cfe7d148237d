"""Response callers and factory helpers."""

from schemacraft.config import Settings
from schemacraft.llm.base import LLMError, NetworkError, ResponseCaller, UpstreamError
from schemacraft.llm.mock import MockResponseCaller
from schemacraft.llm.openai_caller import OpenAIResponseCaller


def create_response_caller(settings: Settings, *, mock: bool | None = None) -> ResponseCaller:
    """Create the mock or live caller for current settings."""
    use_mock = settings.use_mock_llm if mock is None else mock
    if use_mock:
        return MockResponseCaller(step_delay_seconds=settings.mock_step_delay_seconds)
    return OpenAIResponseCaller(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        timeout_seconds=settings.openai_timeout_seconds,
        progress_interval_seconds=settings.progress_interval_seconds,
    )


__all__ = [
    "LLMError",
    "MockResponseCaller",
    "NetworkError",
    "OpenAIResponseCaller",
    "ResponseCaller",
    "UpstreamError",
    "create_response_caller",
]
