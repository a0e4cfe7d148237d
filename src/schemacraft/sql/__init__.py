"""SQL parsing and blueprint extraction."""

from schemacraft.sql.blueprint import (
    ColumnBlueprint,
    IndexBlueprint,
    SchemaBlueprint,
    TableBlueprint,
    build_blueprint,
)
from schemacraft.sql.parser import (
    SQLParseError,
    parse_postgres_sql,
    parse_postgres_sql_lenient,
)

__all__ = [
    "ColumnBlueprint",
    "IndexBlueprint",
    "SchemaBlueprint",
    "TableBlueprint",
    "SQLParseError",
    "build_blueprint",
    "parse_postgres_sql",
    "parse_postgres_sql_lenient",
]
