"""Project storage for schemacraft."""

from schemacraft.db.connection import StorageError, connect
from schemacraft.db.projects import ProjectStore

__all__ = [
    "ProjectStore",
    "StorageError",
    "connect",
]
