"""OpenAI implementation of the response caller interface."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from http.client import HTTPException
from urllib import error, request

from schemacraft.config import (
    DEFAULT_OPENAI_BASE_URL,
    DEFAULT_OPENAI_MODEL,
    ConfigurationError,
)
from schemacraft.llm.base import NetworkError, ResponseCaller, UpstreamError, notify
from schemacraft.llm.progress import ProgressTicker
from schemacraft.models.generation import Progress, ProgressCallback, PromptConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenAIResponseCaller(ResponseCaller):
    """Generate schema responses using the OpenAI Chat Completions API.

    One request per call, bounded by ``timeout_seconds`` and never retried.
    """

    api_key: str
    model: str = DEFAULT_OPENAI_MODEL
    base_url: str = DEFAULT_OPENAI_BASE_URL
    timeout_seconds: float = 60.0
    progress_interval_seconds: float = 0.5

    def complete(
        self,
        prompt: PromptConfig,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        if not self.api_key.strip():
            raise ConfigurationError(
                "OpenAI API key not found. Please set the OPENAI_API_KEY environment variable."
            )

        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": prompt.system_instruction},
                {"role": "user", "content": prompt.user_instruction},
            ],
            "temperature": prompt.temperature,
            "max_tokens": prompt.max_tokens,
        }
        endpoint = self.base_url.rstrip("/") + "/chat/completions"
        req = request.Request(
            endpoint,
            method="POST",
            data=json.dumps(body).encode("utf-8"),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )

        logger.info(
            "Requesting %s completion (mode=%s, max_tokens=%d).",
            self.model,
            prompt.mode.value,
            prompt.max_tokens,
        )
        with ProgressTicker(on_progress, interval_seconds=self.progress_interval_seconds):
            payload = self._send(req)

        notify(
            on_progress,
            Progress(
                step_name="complete",
                percent_complete=100,
                message="Schema generation complete!",
            ),
        )
        return self._extract_message_content(payload)

    def _send(self, req: request.Request) -> dict[str, object]:
        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as response:
                status = getattr(response, "status", 200)
                body = response.read()
        except error.HTTPError as exc:
            raise UpstreamError(exc.code, self._error_message(exc)) from exc
        except error.URLError as exc:
            raise NetworkError(f"OpenAI request failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise NetworkError("OpenAI request timed out.") from exc
        except HTTPException as exc:
            raise NetworkError(f"OpenAI response was interrupted: {exc!r}") from exc
        except OSError as exc:
            raise NetworkError(f"OpenAI request failed: {exc}") from exc

        try:
            raw = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UpstreamError(status, "response was not valid UTF-8") from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise UpstreamError(status, "response was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise UpstreamError(status, "response was not a JSON object")
        return payload

    @staticmethod
    def _error_message(exc: error.HTTPError) -> str:
        details = ""
        if getattr(exc, "fp", None) is not None:
            details = exc.read().decode("utf-8", errors="replace")
        try:
            parsed = json.loads(details)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict):
            upstream = parsed.get("error")
            if isinstance(upstream, dict) and upstream.get("message"):
                return str(upstream["message"])
        return str(exc.reason or details or "request failed")

    @staticmethod
    def _extract_message_content(payload: dict[str, object]) -> str:
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""

        first = choices[0]
        if not isinstance(first, dict):
            return ""

        message = first.get("message")
        if not isinstance(message, dict):
            return ""

        content = message.get("content")
        return content if isinstance(content, str) else ""
