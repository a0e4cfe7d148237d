from schemacraft.llm.mock import (
    IMPROVED_SCHEMA_RESULT,
    MOCK_STEPS,
    NEW_SCHEMA_RESULT,
    MockResponseCaller,
)
from schemacraft.parsing import parse_response
from schemacraft.prompts import build_prompt


def test_progress_steps_in_order(mock_caller, blog_input):
    seen = []

    mock_caller.complete(build_prompt(blog_input), seen.append)

    assert [step.percent_complete for step in seen] == [10, 25, 40, 70, 90, 100]
    assert [step.step_name for step in seen] == [step.step_name for step in MOCK_STEPS]
    assert seen[-1].step_name == "complete"


def test_new_schema_request_gets_blog_schema(mock_caller, blog_input):
    raw = mock_caller.complete(build_prompt(blog_input))
    result = parse_response(raw)

    assert "CREATE TABLE users" in result.sql_text
    assert result == NEW_SCHEMA_RESULT


def test_uploaded_sql_gets_improved_schema(mock_caller, upload_input, analysis_input):
    for generation_input in (upload_input, analysis_input):
        result = parse_response(mock_caller.complete(build_prompt(generation_input)))

        assert result.explanation_text.startswith("Improved")
        assert result == IMPROVED_SCHEMA_RESULT


def test_runs_without_callback(blog_input):
    raw = MockResponseCaller(step_delay_seconds=0).complete(build_prompt(blog_input))
    assert "```sql" in raw


def test_same_prompt_gives_same_text(mock_caller, blog_input):
    prompt = build_prompt(blog_input)
    assert mock_caller.complete(prompt) == mock_caller.complete(prompt)
