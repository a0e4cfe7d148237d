"""SQL parsing helpers backed by SQLGlot."""

from __future__ import annotations

import logging

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError, TokenError

logger = logging.getLogger(__name__)


class SQLParseError(RuntimeError):
    """Raised when SQL cannot be parsed safely."""


def parse_postgres_sql(sql: str) -> list[exp.Expression]:
    """Parse a SQL script using PostgreSQL dialect semantics."""
    normalized = sql.strip()
    if not normalized:
        raise SQLParseError("SQL cannot be empty.")

    try:
        statements = sqlglot.parse(normalized, read="postgres")
    except (ParseError, TokenError) as exc:
        raise SQLParseError(f"Invalid SQL: {exc}") from exc
    return [statement for statement in statements if statement is not None]


def parse_postgres_sql_lenient(sql: str) -> tuple[list[exp.Expression], int]:
    """Parse what can be parsed; return statements and the count skipped.

    Model output is not guaranteed to be valid SQL, so when the script as a
    whole fails each ``;``-separated chunk is retried on its own.
    """
    try:
        return parse_postgres_sql(sql), 0
    except SQLParseError as exc:
        logger.debug("Falling back to per-statement parsing: %s", exc)

    statements: list[exp.Expression] = []
    skipped = 0
    for chunk in sql.split(";"):
        if not chunk.strip():
            continue
        try:
            statements.extend(parse_postgres_sql(chunk))
        except SQLParseError:
            skipped += 1
    return statements, skipped
