"""BigQuery schema inspector."""

import logging
from typing import List

from .base import SchemaInspector
from .executors import CatalogQuery, quote_identifier
from .models import Column
from .type_mappers import BigQueryRawColumn, BigQueryTypeMapper

logger = logging.getLogger(__name__)


class BigQuerySchemaInspector(SchemaInspector):
    """Reads BigQuery's ``information_schema`` views.

    BigQuery has neither secondary indexes nor enforced foreign keys, so
    both lookups keep the empty defaults.
    """

    DEFAULT_SCHEMA = "public"

    def __init__(self, config, executor):
        super().__init__(config, executor)
        self._type_mapper = BigQueryTypeMapper()

    def _catalog_view(self, view: str) -> str:
        # INFORMATION_SCHEMA must be qualified with a dataset
        return f"{quote_identifier(self.get_database_schema())}.INFORMATION_SCHEMA.{view}"

    async def get_tables(self) -> List[str]:
        """Get base tables (views excluded) of the active dataset."""
        query = (
            CatalogQuery(self._catalog_view("TABLES"))
            .where("table_schema", self.get_database_schema())
            .where("table_type", "BASE TABLE")
        )
        for system_table in sorted(self.SYSTEM_TABLES):
            query.where_not("table_name", system_table)
        query.select("table_name")

        rows = await self.executor.fetch_all(query)
        return [row["table_name"] for row in rows]

    async def get_columns(self, table_name: str) -> List[Column]:
        query = (
            CatalogQuery(self._catalog_view("COLUMNS"))
            .where("table_schema", self.get_database_schema())
            .where("table_name", table_name)
            .select(
                "data_type",
                "column_name",
                "character_maximum_length",
                "column_default",
                "is_nullable",
            )
        )

        rows = await self.executor.fetch_all(query)
        logger.debug("Fetched %d columns for %s", len(rows), table_name)
        return [self._type_mapper.to_column(BigQueryRawColumn.from_row(row)) for row in rows]
