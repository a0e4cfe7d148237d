import json

import pytest

from schemacraft import __version__
from schemacraft.cli import main

BLOG = "blog with users and posts"


@pytest.fixture
def env(clean_env):
    clean_env.setenv("MOCK_STEP_DELAY_SECONDS", "0")
    return clean_env


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_mock_generate_prints_schema_and_progress(env, capsys):
    assert main(["generate", "-d", BLOG, "--mock"]) == 0

    captured = capsys.readouterr()
    assert "CREATE TABLE users" in captured.out
    assert "Estimated cost: ~$5-15/month" in captured.out
    assert "100.0%" in captured.err


def test_mock_generate_as_json(env, capsys):
    env.setenv("SCHEMACRAFT_USE_MOCK", "true")

    assert main(["generate", "-d", BLOG, "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is True
    assert payload["mode"] == "new_schema"
    assert len(payload["result"]["suggestions"]) == 4


def test_generate_with_sql_file_uses_improvement(env, capsys, tmp_path):
    sql_file = tmp_path / "blog.sql"
    sql_file.write_text("CREATE TABLE users (id SERIAL PRIMARY KEY);\n", encoding="utf-8")

    assert main(["generate", "--sql-file", str(sql_file), "--mock", "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["mode"] == "analysis"
    assert payload["result"]["explanation_text"].startswith("Improved")


def test_live_generate_without_key_is_configuration_error(env, capsys):
    assert main(["generate", "-d", BLOG]) == 2
    assert "configuration" in capsys.readouterr().err


def test_invalid_input_is_rejected(env, capsys):
    assert main(["validate-input", "-d", "short"]) == 1
    assert "too short" in capsys.readouterr().out


def test_valid_input(env, capsys):
    assert main(["validate-input", "-d", BLOG]) == 0
    assert "Input is valid." in capsys.readouterr().out


def test_build_prompt_shows_mode(env, capsys):
    assert main(["build-prompt", "-d", BLOG]) == 0

    out = capsys.readouterr().out
    assert "- mode: new_schema" in out
    assert "- max_tokens: 2500" in out


def test_blueprint_command(capsys, tmp_path):
    sql_file = tmp_path / "schema.sql"
    sql_file.write_text(
        "CREATE TABLE users (id SERIAL PRIMARY KEY);\n"
        "CREATE TABLE posts (id SERIAL PRIMARY KEY, user_id INT REFERENCES users(id));\n",
        encoding="utf-8",
    )

    assert main(["blueprint", str(sql_file), "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["table_count"] == 2
    assert payload["relation_count"] == 1


def test_examples_listing(capsys):
    assert main(["examples"]) == 0
    assert "- blog:" in capsys.readouterr().out
    assert main(["examples", "nope"]) == 1


def test_config_check_reports_bad_values(env, capsys):
    env.setenv("OPENAI_BASE_URL", "not-a-url")

    assert main(["config-check"]) == 2
    assert "openai_base_url" in capsys.readouterr().err


def test_project_commands_need_database(env, capsys):
    assert main(["list-projects", "--owner", "owner-1"]) == 2
    assert "DATABASE_DSN" in capsys.readouterr().err


def test_save_requires_owner(env, capsys):
    assert main(["generate", "-d", BLOG, "--mock", "--save"]) == 2
