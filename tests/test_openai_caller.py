import io
import json
import threading
from http.client import IncompleteRead
from unittest.mock import MagicMock, patch
from urllib import error

import pytest

from schemacraft.config import ConfigurationError
from schemacraft.llm import NetworkError, OpenAIResponseCaller, UpstreamError
from schemacraft.pipeline import generate_schema
from schemacraft.prompts import build_prompt

URLOPEN = "schemacraft.llm.openai_caller.request.urlopen"


def _response(payload, status=200):
    response = MagicMock()
    response.__enter__.return_value = response
    response.status = status
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    response.read.return_value = body
    return response


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def caller():
    return OpenAIResponseCaller(
        api_key="sk-test",
        model="gpt-4",
        base_url="https://llm.example.test/v1",
        timeout_seconds=12,
        progress_interval_seconds=0.001,
    )


def test_request_carries_prompt_and_sampling_settings(caller, blog_input):
    prompt = build_prompt(blog_input)
    with patch(URLOPEN, return_value=_response(_completion("```sql\nSELECT 1;\n```"))) as urlopen:
        raw = caller.complete(prompt)

    assert raw == "```sql\nSELECT 1;\n```"
    req = urlopen.call_args.args[0]
    assert req.full_url == "https://llm.example.test/v1/chat/completions"
    assert req.get_method() == "POST"
    assert req.get_header("Authorization") == "Bearer sk-test"
    assert urlopen.call_args.kwargs["timeout"] == 12

    body = json.loads(req.data.decode("utf-8"))
    assert body["model"] == "gpt-4"
    assert body["temperature"] == prompt.temperature
    assert body["max_tokens"] == prompt.max_tokens
    assert body["messages"] == [
        {"role": "system", "content": prompt.system_instruction},
        {"role": "user", "content": prompt.user_instruction},
    ]


def test_missing_api_key_fails_before_any_request(blog_input):
    caller = OpenAIResponseCaller(api_key="  ")
    with patch(URLOPEN) as urlopen:
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            caller.complete(build_prompt(blog_input))

    urlopen.assert_not_called()


def test_http_error_becomes_upstream_error(caller, blog_input):
    http_error = error.HTTPError(
        "https://llm.example.test/v1/chat/completions",
        429,
        "Too Many Requests",
        {},
        io.BytesIO(b'{"error": {"message": "Rate limit reached"}}'),
    )
    with patch(URLOPEN, side_effect=http_error):
        with pytest.raises(UpstreamError) as excinfo:
            caller.complete(build_prompt(blog_input))

    assert excinfo.value.status_code == 429
    assert excinfo.value.message == "Rate limit reached"
    assert str(excinfo.value) == "OpenAI API error: 429 Rate limit reached"


def test_http_error_without_json_body_uses_reason(caller, blog_input):
    http_error = error.HTTPError(
        "https://llm.example.test/v1/chat/completions",
        500,
        "Internal Server Error",
        {},
        io.BytesIO(b"<html>oops</html>"),
    )
    with patch(URLOPEN, side_effect=http_error):
        with pytest.raises(UpstreamError) as excinfo:
            caller.complete(build_prompt(blog_input))

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Internal Server Error"


def test_unreachable_host_becomes_network_error(caller, blog_input):
    with patch(URLOPEN, side_effect=error.URLError("Name or service not known")):
        with pytest.raises(NetworkError, match="Name or service not known"):
            caller.complete(build_prompt(blog_input))


def test_timeout_becomes_network_error(caller, blog_input):
    with patch(URLOPEN, side_effect=TimeoutError("timed out")):
        with pytest.raises(NetworkError, match="timed out"):
            caller.complete(build_prompt(blog_input))


def test_invalid_json_body_is_upstream_error(caller, blog_input):
    with patch(URLOPEN, return_value=_response(b"not json")):
        with pytest.raises(UpstreamError, match="not valid JSON"):
            caller.complete(build_prompt(blog_input))


def test_missing_choices_yield_empty_text(caller, blog_input):
    with patch(URLOPEN, return_value=_response({"choices": []})):
        assert caller.complete(build_prompt(blog_input)) == ""


def test_progress_rises_and_ends_at_complete(caller, blog_input):
    seen = []
    ticked = threading.Event()

    def record(progress):
        seen.append(progress)
        if len(seen) >= 3:
            ticked.set()

    def slow_response(*args, **kwargs):
        ticked.wait(timeout=5)
        return _response(_completion("SELECT 1;"))

    with patch(URLOPEN, side_effect=slow_response):
        caller.complete(build_prompt(blog_input), record)

    percents = [item.percent_complete for item in seen]
    assert len(percents) >= 4
    assert percents == sorted(percents)
    assert all(value <= 95 for value in percents[:-1])
    assert percents[-1] == 100
    assert seen[-1].step_name == "complete"

    delivered = len(seen)
    threading.Event().wait(0.05)
    assert len(seen) == delivered


def test_failed_call_stops_progress(caller, blog_input):
    seen = []
    with patch(URLOPEN, side_effect=error.URLError("refused")):
        with pytest.raises(NetworkError):
            caller.complete(build_prompt(blog_input), seen.append)

    delivered = len(seen)
    threading.Event().wait(0.05)
    assert len(seen) == delivered
    assert all(item.percent_complete < 100 for item in seen)


def test_truncated_body_becomes_network_error(caller, blog_input):
    response = _response(b"")
    response.read.side_effect = IncompleteRead(b"partial")
    with patch(URLOPEN, return_value=response):
        with pytest.raises(NetworkError, match="interrupted"):
            caller.complete(build_prompt(blog_input))


def test_non_utf8_body_becomes_upstream_error(caller, blog_input):
    with patch(URLOPEN, return_value=_response(b"\xff\xfe{}", status=200)):
        with pytest.raises(UpstreamError) as excinfo:
            caller.complete(build_prompt(blog_input))

    assert excinfo.value.status_code == 200
    assert "UTF-8" in excinfo.value.message


def test_transport_failures_reach_pipeline_as_outcomes(caller, blog_input):
    truncated = _response(b"")
    truncated.read.side_effect = IncompleteRead(b"partial")

    with patch(URLOPEN, return_value=truncated):
        outcome = generate_schema(blog_input, caller)
    assert not outcome.success
    assert outcome.error_kind == "network"

    with patch(URLOPEN, return_value=_response(b"\xff\xfe{}")):
        outcome = generate_schema(blog_input, caller)
    assert not outcome.success
    assert outcome.error_kind == "upstream"
