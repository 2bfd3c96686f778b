"""Schema length registry — storage-layer bounds consulted by rule providers."""

from itemconf.schema.registry import SchemaRegistry, SchemaLookupError, get_schema_registry

__all__ = ["SchemaRegistry", "SchemaLookupError", "get_schema_registry"]
