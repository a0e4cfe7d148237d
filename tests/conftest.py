import pytest

from schemacraft.llm.mock import MockResponseCaller
from schemacraft.models.generation import GenerationContext, GenerationInput

BLOG_SQL = """CREATE TABLE users (
    id SERIAL PRIMARY KEY,
    email VARCHAR(255)
);

CREATE TABLE posts (
    id SERIAL PRIMARY KEY,
    user_id INTEGER,
    title TEXT
);"""


@pytest.fixture
def mock_caller() -> MockResponseCaller:
    return MockResponseCaller(step_delay_seconds=0)


@pytest.fixture
def blog_input() -> GenerationInput:
    return GenerationInput(description="blog with users and posts")


@pytest.fixture
def upload_input() -> GenerationInput:
    return GenerationInput(
        description="Add indexes and foreign keys",
        uploaded_sql_text=BLOG_SQL,
        context_flags=GenerationContext(
            is_improvement=True, file_size=len(BLOG_SQL), file_name="blog.sql"
        ),
    )


@pytest.fixture
def analysis_input() -> GenerationInput:
    return GenerationInput(uploaded_sql_text=BLOG_SQL)


ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "OPENAI_TIMEOUT_SECONDS",
    "PROGRESS_INTERVAL_SECONDS",
    "MOCK_STEP_DELAY_SECONDS",
    "SCHEMACRAFT_USE_MOCK",
    "DATABASE_DSN",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
