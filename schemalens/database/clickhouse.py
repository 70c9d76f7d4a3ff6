"""ClickHouse schema inspector."""

import logging
from typing import List

from .base import SchemaInspector
from .executors import quote_identifier
from .models import Column
from .type_mappers import ClickHouseRawColumn, ClickHouseTypeMapper

logger = logging.getLogger(__name__)


class ClickHouseSchemaInspector(SchemaInspector):
    """Reads ClickHouse metadata with ``SHOW TABLES`` and ``DESCRIBE TABLE``.

    ClickHouse has no traditional secondary indexes and no foreign keys.
    """

    DEFAULT_SCHEMA = "default"

    def __init__(self, config, executor):
        super().__init__(config, executor)
        self._type_mapper = ClickHouseTypeMapper()

    async def get_tables(self) -> List[str]:
        database = quote_identifier(self.get_database_schema())
        rows = await self.executor.fetch_all(f"SHOW TABLES FROM {database}")
        # SHOW TABLES cannot filter, so system tables are dropped here
        return [row["name"] for row in rows if row["name"] not in self.SYSTEM_TABLES]

    async def get_columns(self, table_name: str) -> List[Column]:
        database = quote_identifier(self.get_database_schema())
        rows = await self.executor.fetch_all(
            f"DESCRIBE TABLE {database}.{quote_identifier(table_name)}"
        )
        logger.debug("Fetched %d columns for %s", len(rows), table_name)
        return [self._type_mapper.to_column(ClickHouseRawColumn.from_row(row)) for row in rows]
