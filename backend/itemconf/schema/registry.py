"""Schema length registry — column length bounds for rule providers.

Column definitions come from a JSON table map ({table: {column: {type, length}}}).
The bundled tables.json is used unless DB_SCHEMA_FILE points elsewhere.
A lookup that cannot be resolved is a configuration defect and raises.
"""

import json
from pathlib import Path
from typing import Optional, Union

import structlog

from itemconf.config import get_settings

logger = structlog.get_logger()

BUNDLED_SCHEMA = Path(__file__).parent / "tables.json"


class SchemaLookupError(LookupError):
    """Raised when a (table, column) pair has no length bound."""

    def __init__(self, table: str, column: str, reason: str):
        self.table = table
        self.column = column
        super().__init__(f'Cannot resolve length of "{table}.{column}": {reason}.')


class SchemaRegistry:
    """Read-only view over table column definitions."""

    def __init__(self, tables: dict[str, dict[str, dict]]):
        self._tables = tables

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SchemaRegistry":
        """Load a column table map from a JSON file."""
        path = Path(path)
        tables = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(tables, dict):
            raise ValueError(f"Schema file {path} must contain a JSON object")

        logger.debug("schema_loaded", path=str(path), tables=len(tables))
        return cls(tables)

    def get_field_length(self, table: str, column: str) -> int:
        """Return the length bound of a character column.

        Raises:
            SchemaLookupError: unknown table or column, or a column
                without a length (ids, integers)
        """
        columns = self._tables.get(table)
        if columns is None:
            raise SchemaLookupError(table, column, "unknown table")

        definition = columns.get(column)
        if definition is None:
            raise SchemaLookupError(table, column, "unknown column")

        length = definition.get("length")
        if not isinstance(length, int) or length <= 0:
            raise SchemaLookupError(table, column, f"column of type '{definition.get('type')}' has no length")

        return length

    def has_field(self, table: str, column: str) -> bool:
        return column in self._tables.get(table, {})

    def tables(self) -> list[str]:
        return list(self._tables.keys())


# Cache the registry to avoid re-reading from disk
_registry_cache: dict[str, SchemaRegistry] = {}


def get_schema_registry(path: Optional[Union[str, Path]] = None) -> SchemaRegistry:
    """Return the cached registry for a schema file.

    Args:
        path: Schema file. Defaults to DB_SCHEMA_FILE, then the bundled tables.json

    Returns:
        SchemaRegistry loaded from that file
    """
    path = Path(path or get_settings().DB_SCHEMA_FILE or BUNDLED_SCHEMA)
    key = str(path.resolve())

    if key not in _registry_cache:
        _registry_cache[key] = SchemaRegistry.from_file(path)

    return _registry_cache[key]
