"""PostgreSQL connection helpers for project storage."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import psycopg
from psycopg.rows import dict_row


class StorageError(RuntimeError):
    """Raised when a project storage operation fails."""


@contextmanager
def connect(database_dsn: str) -> Iterator[psycopg.Connection]:
    """Open a connection that returns rows as dicts and commits on success."""
    try:
        with psycopg.connect(
            database_dsn,
            connect_timeout=5,
            row_factory=dict_row,
        ) as conn:
            yield conn
    except psycopg.Error as exc:
        raise StorageError(f"Could not complete database operation: {exc}") from exc
