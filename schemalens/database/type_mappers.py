"""Backend-specific type mapping strategies.

Each backend reports column metadata in its own row shape and type
vocabulary. Rows are parsed into a per-backend raw descriptor right where
they come off the wire, then a ``TypeMapper`` turns the descriptor into a
canonical ``Column``.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from .models import Column, ColumnType

_ROOT_TYPE_PATTERN = re.compile(r"[^(), ]+")

# Marker left in default expressions that call a sequence generator
SEQUENCE_MARKER = "nextval("


def root_type_token(raw_type: Optional[str]) -> Optional[str]:
    """Extract the lower-cased leading identifier of a raw type string.

    ``"character(255)"`` gives ``"character"``. Returns None when the string
    holds no identifier at all.
    """
    if not raw_type:
        return None
    match = _ROOT_TYPE_PATTERN.search(raw_type.lower())
    return match.group(0) if match else None


def is_literal_null(expression: Optional[str]) -> bool:
    """Whether a default expression carries no value."""
    return expression is None or expression.strip() == "" or expression.strip().upper() == "NULL"


@dataclass
class BigQueryRawColumn:
    """Row of ``information_schema.columns``."""
    column_name: str
    data_type: str
    character_maximum_length: Optional[int] = None
    column_default: Optional[str] = None
    is_nullable: str = "YES"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "BigQueryRawColumn":
        return cls(
            column_name=row["column_name"],
            data_type=row.get("data_type") or "",
            character_maximum_length=row.get("character_maximum_length"),
            column_default=row.get("column_default"),
            is_nullable=row.get("is_nullable", "YES"),
        )


@dataclass
class ClickHouseRawColumn:
    """Row of ``DESCRIBE TABLE``."""
    name: str
    data_type: str
    default_expression: Optional[str] = None
    is_nullable: int = 1

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ClickHouseRawColumn":
        # DESCRIBE reports the type as ``type`` and encodes nullability in it,
        # possibly nested as in LowCardinality(Nullable(String))
        data_type = row.get("data_type") or row.get("type") or ""
        if row.get("is_nullable") is not None:
            is_nullable = int(row["is_nullable"])
        else:
            is_nullable = 1 if "Nullable(" in data_type else 0
        return cls(
            name=row["name"],
            data_type=data_type,
            default_expression=row.get("default_expression"),
            is_nullable=is_nullable,
        )


class TypeMapper(ABC):
    """Abstract base class for mapping raw column descriptors.

    Subclasses provide ``TYPE_TABLE``, keyed by root type token. Each entry
    builds the canonical ``ColumnType`` from the raw descriptor, so
    arguments such as string length can be read from the row.
    """

    TYPE_TABLE: Dict[str, Callable[[Any], ColumnType]] = {}

    def map_type(self, raw: Any) -> ColumnType:
        """Map a raw descriptor onto the canonical type vocabulary.

        Unknown or missing root tokens fall back to ``specificType`` with
        the raw type string as its only argument.
        """
        root = root_type_token(raw.data_type)
        factory = self.TYPE_TABLE.get(root) if root else None
        if factory is None:
            return ColumnType(type="specificType", args=[raw.data_type])
        return factory(raw)

    @abstractmethod
    def is_sequence_default(self, expression: Optional[str]) -> bool:
        """Whether a default expression is an identity/sequence generator."""
        pass

    def derive_default(self, expression: Optional[str]) -> Optional[str]:
        """Default value to report for a column, None for generators."""
        if is_literal_null(expression) or self.is_sequence_default(expression):
            return None
        return expression

    @abstractmethod
    def to_column(self, raw: Any) -> Column:
        """Convert a raw descriptor into a canonical Column."""
        pass

    def _build_column(
        self,
        name: str,
        column_type: ColumnType,
        default_expression: Optional[str],
        not_nullable: bool,
    ) -> Column:
        column = Column(
            name=name,
            type=column_type.type,
            args=list(column_type.args),
            default_to=self.derive_default(default_expression),
            not_nullable=not_nullable,
            unsigned=False,
        )
        if column_type.modifiers:
            column = replace(column, **column_type.modifiers)
        return column


def _datetime(raw: Any) -> ColumnType:
    return ColumnType("datetime", [{"use_tz": False, "precision": 6}])


def _time(raw: Any) -> ColumnType:
    return ColumnType("time", [{"precision": 3}])


def _plain(type_name: str, *args: Any) -> Callable[[Any], ColumnType]:
    return lambda raw: ColumnType(type_name, list(args))


class BigQueryTypeMapper(TypeMapper):
    """Type mapper for BigQuery ``information_schema`` rows."""

    TYPE_TABLE = {
        "integer": _plain("integer"),
        "text": _plain("text", "longtext"),
        "boolean": _plain("boolean"),
        "character": lambda raw: ColumnType("string", [raw.character_maximum_length]),
        "timestamp": _datetime,
        "date": _plain("date"),
        "time": _time,
        "numeric": _plain("decimal", 10, 2),
        "real": _plain("double"),
        "double": _plain("double"),
        "bigint": _plain("bigInteger"),
        "jsonb": _plain("jsonb"),
    }

    def is_sequence_default(self, expression: Optional[str]) -> bool:
        """Sequence-backed defaults surface as ``nextval(...)`` calls."""
        return bool(expression) and SEQUENCE_MARKER in expression.lower()

    def to_column(self, raw: BigQueryRawColumn) -> Column:
        return self._build_column(
            name=raw.column_name,
            column_type=self.map_type(raw),
            default_expression=raw.column_default,
            not_nullable=raw.is_nullable == "NO",
        )


class ClickHouseTypeMapper(TypeMapper):
    """Type mapper for ClickHouse ``DESCRIBE TABLE`` rows.

    ClickHouse reports no character length, so ``varchar`` columns carry the
    column's default expression as their argument instead.
    """

    TYPE_TABLE = {
        "int": _plain("integer"),
        "int32": _plain("integer"),
        "int64": _plain("integer"),
        "text": _plain("text", "longtext"),
        "bool": _plain("boolean"),
        "varchar": lambda raw: ColumnType("string", [raw.default_expression]),
        "timestamp": _datetime,
        "date": _plain("date"),
        "time": _time,
        "decimal": _plain("decimal", 10, 2),
        "float": _plain("double"),
        "double": _plain("double"),
        "bigint": _plain("bigInteger"),
        "json": _plain("jsonb"),
    }

    def is_sequence_default(self, expression: Optional[str]) -> bool:
        """ClickHouse has no sequences; only a ``nextval(...)`` call counts."""
        return bool(expression) and SEQUENCE_MARKER in expression.lower()

    def to_column(self, raw: ClickHouseRawColumn) -> Column:
        return self._build_column(
            name=raw.name,
            column_type=self.map_type(raw),
            default_expression=raw.default_expression,
            not_nullable=raw.is_nullable == 0,
        )
