"""Schema inspection module for schemalens.

This module turns backend metadata catalogs into the canonical
Schema/Table/Column model, with implementations for BigQuery and
ClickHouse.
"""

from .models import CANONICAL_TYPES, ColumnType, Column, Index, ForeignKey, Table, Schema
from .base import SchemaInspector
from .executors import (
    CatalogQuery,
    QueryExecutor,
    BigQueryExecutor,
    ClickHouseExecutor,
    quote_identifier,
)
from .type_mappers import (
    TypeMapper,
    BigQueryTypeMapper,
    ClickHouseTypeMapper,
    BigQueryRawColumn,
    ClickHouseRawColumn,
    root_type_token,
)
from .bigquery import BigQuerySchemaInspector
from .clickhouse import ClickHouseSchemaInspector

__all__ = [
    # Data models
    "CANONICAL_TYPES",
    "ColumnType",
    "Column",
    "Index",
    "ForeignKey",
    "Table",
    "Schema",
    # Query execution
    "CatalogQuery",
    "QueryExecutor",
    "BigQueryExecutor",
    "ClickHouseExecutor",
    "quote_identifier",
    # Type mappers
    "TypeMapper",
    "BigQueryTypeMapper",
    "ClickHouseTypeMapper",
    "BigQueryRawColumn",
    "ClickHouseRawColumn",
    "root_type_token",
    # Inspectors
    "SchemaInspector",
    "BigQuerySchemaInspector",
    "ClickHouseSchemaInspector",
]
