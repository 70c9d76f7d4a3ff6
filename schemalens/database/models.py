"""Canonical schema models produced by every schema inspector."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

# Closed vocabulary of canonical column types
CANONICAL_TYPES = frozenset({
    "integer",
    "bigInteger",
    "text",
    "string",
    "boolean",
    "date",
    "time",
    "datetime",
    "decimal",
    "double",
    "jsonb",
    "specificType",
})


@dataclass
class ColumnType:
    """Result of mapping a raw backend type onto the canonical vocabulary."""
    type: str
    args: List[Any] = field(default_factory=list)
    modifiers: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Column:
    """Represents a table column in canonical form."""
    name: str
    type: str
    args: List[Any] = field(default_factory=list)
    default_to: Optional[str] = None
    not_nullable: bool = False
    unsigned: bool = False


@dataclass
class Index:
    """Represents a secondary index."""
    name: str
    columns: List[str] = field(default_factory=list)
    unique: bool = False
    type: Optional[str] = None


@dataclass
class ForeignKey:
    """Represents a foreign key constraint."""
    name: str
    columns: List[str]
    referenced_table: str
    referenced_columns: List[str]
    on_update: Optional[str] = None
    on_delete: Optional[str] = None


@dataclass
class Table:
    """Represents a database table."""
    name: str
    columns: List[Column] = field(default_factory=list)
    indexes: List[Index] = field(default_factory=list)
    foreign_keys: List[ForeignKey] = field(default_factory=list)

    def get_column(self, column_name: str) -> Optional[Column]:
        """Find a column by name."""
        for column in self.columns:
            if column.name == column_name:
                return column
        return None

    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]


@dataclass
class Schema:
    """Result of one inspection run."""
    tables: List[Table] = field(default_factory=list)

    def get_table(self, table_name: str) -> Optional[Table]:
        """Find a table by name."""
        for table in self.tables:
            if table.name == table_name:
                return table
        return None

    def table_names(self) -> List[str]:
        return [table.name for table in self.tables]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the schema to plain data (for JSON output)."""
        return asdict(self)
