"""Table/column listing of generated DDL for the blueprint view."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlglot import exp

from schemacraft.sql.parser import parse_postgres_sql_lenient

FOREIGN_KEY_PREFIX = "FK: "


@dataclass(frozen=True)
class ColumnBlueprint:
    name: str
    data_type: str
    constraints: list[str] = field(default_factory=list)

    @property
    def references(self) -> list[str]:
        return [
            item[len(FOREIGN_KEY_PREFIX):]
            for item in self.constraints
            if item.startswith(FOREIGN_KEY_PREFIX)
        ]

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "type": self.data_type,
            "constraints": list(self.constraints),
        }


@dataclass(frozen=True)
class TableBlueprint:
    name: str
    columns: list[ColumnBlueprint] = field(default_factory=list)

    def column(self, name: str) -> ColumnBlueprint | None:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "columns": [column.to_dict() for column in self.columns],
        }


@dataclass(frozen=True)
class IndexBlueprint:
    name: str
    table: str
    columns: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "table": self.table, "columns": list(self.columns)}


@dataclass(frozen=True)
class SchemaBlueprint:
    """Tables and indexes declared by a DDL script."""

    tables: list[TableBlueprint] = field(default_factory=list)
    indexes: list[IndexBlueprint] = field(default_factory=list)
    skipped_statements: int = 0

    @property
    def table_count(self) -> int:
        return len(self.tables)

    @property
    def relation_count(self) -> int:
        return sum(
            1 for table in self.tables for column in table.columns if column.references
        )

    @property
    def table_names(self) -> list[str]:
        return [table.name for table in self.tables]

    def table(self, name: str) -> TableBlueprint | None:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "table_count": self.table_count,
            "relation_count": self.relation_count,
            "tables": [table.to_dict() for table in self.tables],
            "indexes": [index.to_dict() for index in self.indexes],
            "skipped_statements": self.skipped_statements,
        }


def _identifier_name(node: exp.Expression) -> str:
    if isinstance(node, exp.Ordered):
        node = node.this
    return node.name


def _reference_target(reference: exp.Reference) -> str:
    target = reference.this
    if isinstance(target, exp.Schema):
        table_name = target.this.name if target.this is not None else ""
        columns = [_identifier_name(item) for item in target.expressions]
        if columns:
            return f"{table_name}.{', '.join(columns)}"
        return table_name
    return target.name if target is not None else ""


def _describe_constraint(constraint: exp.Expression) -> str | None:
    kind = constraint
    if isinstance(constraint, exp.ColumnConstraint):
        kind = constraint.args.get("kind")
    if kind is None:
        return constraint.sql(dialect="postgres")
    if isinstance(kind, exp.PrimaryKeyColumnConstraint):
        return "Primary Key"
    if isinstance(kind, exp.NotNullColumnConstraint):
        return None if kind.args.get("allow_null") else "Not Null"
    if isinstance(kind, exp.UniqueColumnConstraint):
        return "Unique"
    if isinstance(kind, exp.DefaultColumnConstraint):
        return f"Default: {kind.this.sql(dialect='postgres')}"
    if isinstance(kind, exp.Reference):
        return f"{FOREIGN_KEY_PREFIX}{_reference_target(kind)}"
    return kind.sql(dialect="postgres")


def _table_level_constraints(schema: exp.Schema) -> dict[str, list[str]]:
    extra: dict[str, list[str]] = {}
    for primary_key in schema.find_all(exp.PrimaryKey):
        for item in primary_key.expressions:
            extra.setdefault(_identifier_name(item), []).append("Primary Key")
    for foreign_key in schema.find_all(exp.ForeignKey):
        reference = foreign_key.args.get("reference")
        if not isinstance(reference, exp.Reference):
            continue
        target = f"{FOREIGN_KEY_PREFIX}{_reference_target(reference)}"
        for item in foreign_key.expressions:
            extra.setdefault(_identifier_name(item), []).append(target)
    return extra


def _table_blueprint(create: exp.Create) -> TableBlueprint | None:
    target = create.this
    if isinstance(target, exp.Schema):
        table = target.this
        definitions = target.expressions
    else:
        table = target
        definitions = []
    if table is None or not table.name:
        return None

    extra = _table_level_constraints(target) if isinstance(target, exp.Schema) else {}
    columns: list[ColumnBlueprint] = []
    for definition in definitions:
        if not isinstance(definition, exp.ColumnDef):
            continue
        data_type = definition.args.get("kind")
        constraints = [
            described
            for described in (
                _describe_constraint(item)
                for item in definition.args.get("constraints") or []
            )
            if described
        ]
        for item in extra.get(definition.name, []):
            if item not in constraints:
                constraints.append(item)
        columns.append(
            ColumnBlueprint(
                name=definition.name,
                data_type=(
                    data_type.sql(dialect="postgres") if data_type is not None else ""
                ),
                constraints=constraints,
            )
        )
    return TableBlueprint(name=table.name, columns=columns)


def _index_blueprint(create: exp.Create) -> IndexBlueprint | None:
    index = create.this
    if not isinstance(index, exp.Index):
        return None

    table = index.args.get("table")
    params = index.args.get("params")
    source = params if params is not None else index
    columns = [_identifier_name(item) for item in source.args.get("columns") or []]
    return IndexBlueprint(
        name=index.name,
        table=table.name if table is not None else "",
        columns=columns,
    )


def build_blueprint(sql_text: str) -> SchemaBlueprint:
    """List the tables, columns and indexes created by a DDL script.

    Statements that cannot be parsed are counted in ``skipped_statements``;
    bad SQL never raises.
    """
    if not sql_text or not sql_text.strip():
        return SchemaBlueprint()

    statements, skipped = parse_postgres_sql_lenient(sql_text)
    tables: list[TableBlueprint] = []
    indexes: list[IndexBlueprint] = []
    for statement in statements:
        if not isinstance(statement, exp.Create):
            continue
        kind = (statement.args.get("kind") or "").upper()
        if kind == "TABLE":
            table = _table_blueprint(statement)
            if table is not None:
                tables.append(table)
        elif kind == "INDEX":
            index = _index_blueprint(statement)
            if index is not None:
                indexes.append(index)

    return SchemaBlueprint(tables=tables, indexes=indexes, skipped_statements=skipped)
