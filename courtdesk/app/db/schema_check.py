"""Startup check that the live database matches the ORM schema."""

from sqlalchemy import MetaData, inspect
from sqlalchemy.engine import Engine


class SchemaMismatchError(RuntimeError):
    """Raised when the database is missing tables or columns the models expect."""


def find_schema_mismatches(engine: Engine, metadata: MetaData) -> list[str]:
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())
    problems: list[str] = []
    for table in metadata.sorted_tables:
        if table.name not in existing_tables:
            problems.append(f"missing table {table.name}")
            continue
        live_columns = {column["name"] for column in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name not in live_columns:
                problems.append(f"missing column {table.name}.{column.name}")
    return problems


def verify_schema(engine: Engine, metadata: MetaData) -> None:
    problems = find_schema_mismatches(engine, metadata)
    if problems:
        raise SchemaMismatchError("Database schema does not match models: " + "; ".join(problems))
