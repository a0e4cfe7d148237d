from contextlib import contextmanager
from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from schemacraft.db import ProjectStore, StorageError
from schemacraft.db.queries import (
    DELETE_PROJECT_QUERY,
    INSERT_PROJECT_QUERY,
    LIST_PROJECTS_QUERY,
    SEARCH_PROJECTS_QUERY,
)
from schemacraft.models.records import NewSchemaProject, SchemaProjectUpdate

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _project_row(**overrides):
    row = {
        "id": uuid4(),
        "user_id": "owner-1",
        "name": "Blog",
        "description": "blog with users and posts",
        "input_type": "prompt",
        "original_prompt": "blog with users and posts",
        "uploaded_sql": None,
        "generated_sql": "CREATE TABLE users (id SERIAL PRIMARY KEY);",
        "ai_explanation": "Users table.",
        "ai_suggestions": "Add indexes",
        "tags": ["blog", "users"],
        "is_favorite": False,
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


@pytest.fixture
def cursor():
    cur = MagicMock()
    cur.__enter__.return_value = cur
    return cur


@pytest.fixture
def conn(cursor):
    connection = MagicMock()
    connection.cursor.return_value = cursor
    return connection


@pytest.fixture
def store(conn):
    @contextmanager
    def fake_connect(dsn):
        assert dsn == "postgresql://localhost/schemacraft"
        yield conn

    return ProjectStore(
        "postgresql://localhost/schemacraft", connection_factory=fake_connect
    )


def test_list_projects_maps_rows(store, cursor):
    cursor.fetchall.return_value = [_project_row(), _project_row(name="Shop")]

    projects = store.list_projects("owner-1")

    assert [project.name for project in projects] == ["Blog", "Shop"]
    cursor.execute.assert_called_once_with(LIST_PROJECTS_QUERY, {"user_id": "owner-1"})


def test_get_missing_project_returns_none(store, cursor):
    cursor.fetchone.return_value = None
    assert store.get_project(uuid4()) is None


def test_search_escapes_like_wildcards(store, cursor):
    cursor.fetchall.return_value = []

    store.search_projects("owner-1", " 100%_off ")

    cursor.execute.assert_called_once_with(
        SEARCH_PROJECTS_QUERY,
        {"user_id": "owner-1", "pattern": "%100\\%\\_off%", "term": "100%_off"},
    )


def test_blank_search_lists_everything(store, cursor):
    cursor.fetchall.return_value = [_project_row()]

    assert len(store.search_projects("owner-1", "   ")) == 1
    assert cursor.execute.call_args.args[0] == LIST_PROJECTS_QUERY


def test_create_project_returns_saved_row(store, cursor):
    row = _project_row()
    cursor.fetchone.return_value = row
    new_project = NewSchemaProject(
        user_id="owner-1",
        name="Blog",
        input_type="prompt",
        generated_sql=row["generated_sql"],
        tags=["blog"],
    )

    created = store.create_project(new_project)

    assert created.id == row["id"]
    query, params = cursor.execute.call_args.args
    assert query == INSERT_PROJECT_QUERY
    assert params["input_type"] == "prompt"
    assert params["tags"] == ["blog"]


def test_create_project_without_row_is_storage_error(store, cursor):
    cursor.fetchone.return_value = None
    new_project = NewSchemaProject(
        user_id="owner-1", name="Blog", input_type="prompt", generated_sql="x"
    )

    with pytest.raises(StorageError):
        store.create_project(new_project)


def test_update_sends_only_set_fields(store, cursor):
    project_id = uuid4()
    cursor.fetchone.return_value = _project_row(id=project_id, name="Renamed")

    updated = store.update_project(project_id, SchemaProjectUpdate(name="Renamed"))

    assert updated.name == "Renamed"
    params = cursor.execute.call_args.args[1]
    assert params == {"name": "Renamed", "id": project_id}


def test_delete_reports_whether_a_row_was_removed(store, cursor):
    project_id = uuid4()
    cursor.rowcount = 1
    assert store.delete_project(project_id) is True
    cursor.execute.assert_called_once_with(DELETE_PROJECT_QUERY, {"id": project_id})

    cursor.rowcount = 0
    assert store.delete_project(project_id) is False


def test_project_with_history(store, cursor):
    project_id = uuid4()
    cursor.fetchone.return_value = _project_row(id=project_id)
    cursor.fetchall.return_value = [
        {
            "id": uuid4(),
            "project_id": project_id,
            "prompt_used": "prompt",
            "sql_generated": "CREATE TABLE users (id INT);",
            "ai_model": "gpt-4",
            "generation_time_ms": 900,
            "tokens_used": None,
            "created_at": NOW,
        }
    ]

    project = store.get_project_with_history(project_id)

    assert project.id == project_id
    assert len(project.generation_history) == 1
    assert project.generation_history[0].ai_model == "gpt-4"


def test_init_schema_runs_ddl(store, conn):
    store.init_schema()
    conn.execute.assert_called_once()
