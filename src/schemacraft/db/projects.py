"""CRUD and search over saved schema projects and their generation history."""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import Any, Callable
from uuid import UUID

from psycopg import sql

from schemacraft.db.connection import StorageError, connect
from schemacraft.db.queries import (
    CREATE_TABLES_DDL,
    DELETE_PROJECT_QUERY,
    GET_PROJECT_QUERY,
    INSERT_HISTORY_QUERY,
    INSERT_PROJECT_QUERY,
    LIST_HISTORY_QUERY,
    LIST_PROJECTS_QUERY,
    PROJECT_COLUMNS,
    SEARCH_PROJECTS_QUERY,
    SET_FAVORITE_QUERY,
)
from schemacraft.models.records import (
    GenerationHistory,
    NewGenerationHistory,
    NewSchemaProject,
    ProjectWithHistory,
    SchemaProject,
    SchemaProjectUpdate,
)

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[str], AbstractContextManager[Any]]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ProjectStore:
    """Row-oriented access to ``schema_projects`` and ``generation_history``."""

    def __init__(
        self,
        database_dsn: str,
        *,
        connection_factory: ConnectionFactory = connect,
    ) -> None:
        self._dsn = database_dsn
        self._connect = connection_factory

    def _fetch_all(self, query: Any, params: dict[str, object]) -> list[dict[str, Any]]:
        with self._connect(self._dsn) as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return list(cur.fetchall())

    def _fetch_one(
        self, query: Any, params: dict[str, object]
    ) -> dict[str, Any] | None:
        with self._connect(self._dsn) as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return cur.fetchone()

    def _execute(self, query: Any, params: dict[str, object]) -> int:
        with self._connect(self._dsn) as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return cur.rowcount

    def init_schema(self) -> None:
        with self._connect(self._dsn) as conn:
            conn.execute(CREATE_TABLES_DDL)
        logger.info("Project storage tables are ready.")

    def list_projects(self, user_id: str) -> list[SchemaProject]:
        rows = self._fetch_all(LIST_PROJECTS_QUERY, {"user_id": user_id})
        return [SchemaProject.model_validate(row) for row in rows]

    def get_project(self, project_id: UUID) -> SchemaProject | None:
        row = self._fetch_one(GET_PROJECT_QUERY, {"id": project_id})
        return SchemaProject.model_validate(row) if row else None

    def get_project_with_history(self, project_id: UUID) -> ProjectWithHistory | None:
        with self._connect(self._dsn) as conn:
            with conn.cursor() as cur:
                cur.execute(GET_PROJECT_QUERY, {"id": project_id})
                row = cur.fetchone()
                if not row:
                    return None
                cur.execute(LIST_HISTORY_QUERY, {"project_id": project_id})
                history = list(cur.fetchall())
        return ProjectWithHistory.model_validate(
            {
                **row,
                "generation_history": [
                    GenerationHistory.model_validate(item) for item in history
                ],
            }
        )

    def search_projects(self, user_id: str, term: str) -> list[SchemaProject]:
        normalized = term.strip()
        if not normalized:
            return self.list_projects(user_id)
        rows = self._fetch_all(
            SEARCH_PROJECTS_QUERY,
            {
                "user_id": user_id,
                "pattern": f"%{_escape_like(normalized)}%",
                "term": normalized,
            },
        )
        return [SchemaProject.model_validate(row) for row in rows]

    def create_project(self, project: NewSchemaProject) -> SchemaProject:
        params = project.model_dump(mode="json")
        row = self._fetch_one(INSERT_PROJECT_QUERY, params)
        if row is None:
            raise StorageError("Project insert returned no row.")
        created = SchemaProject.model_validate(row)
        logger.info("Saved schema project %s for %s.", created.id, created.user_id)
        return created

    def update_project(
        self,
        project_id: UUID,
        updates: SchemaProjectUpdate,
    ) -> SchemaProject | None:
        """Apply the set fields of ``updates`` and bump ``updated_at``."""
        changes = updates.model_dump(exclude_unset=True, mode="json")
        assignments = [
            sql.SQL("{} = {}").format(sql.Identifier(column), sql.Placeholder(column))
            for column in changes
        ]
        assignments.append(sql.SQL("updated_at = now()"))
        query = sql.SQL(
            "UPDATE schema_projects SET {assignments} WHERE id = {id} RETURNING {columns}"
        ).format(
            assignments=sql.SQL(", ").join(assignments),
            id=sql.Placeholder("id"),
            columns=sql.SQL(PROJECT_COLUMNS),
        )
        row = self._fetch_one(query, {**changes, "id": project_id})
        return SchemaProject.model_validate(row) if row else None

    def delete_project(self, project_id: UUID) -> bool:
        return self._execute(DELETE_PROJECT_QUERY, {"id": project_id}) > 0

    def set_favorite(self, project_id: UUID, is_favorite: bool) -> bool:
        affected = self._execute(
            SET_FAVORITE_QUERY,
            {"id": project_id, "is_favorite": is_favorite},
        )
        return affected > 0

    def add_generation_history(self, entry: NewGenerationHistory) -> GenerationHistory:
        row = self._fetch_one(INSERT_HISTORY_QUERY, entry.model_dump())
        if row is None:
            raise StorageError("Generation history insert returned no row.")
        return GenerationHistory.model_validate(row)

