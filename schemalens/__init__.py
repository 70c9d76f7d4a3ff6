"""schemalens - canonical schema inspection for SQL and analytics backends."""

from .database import Column, ColumnType, ForeignKey, Index, Schema, Table
from .dialects import Dialect, get_dialect
from .errors import ConfigError, DatabaseError, NotNullError, SchemaLensError

__version__ = "0.1.0"

__all__ = [
    "Column",
    "ColumnType",
    "ForeignKey",
    "Index",
    "Schema",
    "Table",
    "Dialect",
    "get_dialect",
    "ConfigError",
    "DatabaseError",
    "NotNullError",
    "SchemaLensError",
]
