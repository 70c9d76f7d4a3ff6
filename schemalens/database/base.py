"""Abstract base class for schema inspection."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List

from ..config import DatabaseConfig
from .executors import QueryExecutor
from .models import Column, ForeignKey, Index, Schema, Table

logger = logging.getLogger(__name__)


class SchemaInspector(ABC):
    """Abstract base class for schema inspection.

    Subclasses implement table and column discovery for one backend.
    Index and foreign key discovery default to empty lists, which is
    correct for backends without those catalogs.
    """

    # Override in subclasses with the backend's default namespace
    DEFAULT_SCHEMA: str = "public"

    # Tables that hold backend metadata rather than application data
    SYSTEM_TABLES: frozenset = frozenset({"geometry_columns", "spatial_ref_sys"})

    def __init__(self, config: DatabaseConfig, executor: QueryExecutor):
        self.config = config
        self.executor = executor

    def get_database_schema(self) -> str:
        """Namespace to inspect: configured override or backend default."""
        return self.config.get_schema_name() or self.DEFAULT_SCHEMA

    @abstractmethod
    async def get_tables(self) -> List[str]:
        """Get base table names in the active namespace.

        Returns:
            List of table names, system tables excluded
        """
        pass

    @abstractmethod
    async def get_columns(self, table_name: str) -> List[Column]:
        """Get all columns for a table.

        Args:
            table_name: Table name

        Returns:
            List of canonical Column objects
        """
        pass

    async def get_indexes(self, table_name: str) -> List[Index]:
        """Get secondary indexes for a table."""
        return []

    async def get_foreign_keys(self, table_name: str) -> List[ForeignKey]:
        """Get foreign keys for a table."""
        return []

    async def get_table(self, table_name: str) -> Table:
        """Fetch columns, indexes and foreign keys of a single table."""
        columns = await self.get_columns(table_name)
        indexes = await self.get_indexes(table_name)
        foreign_keys = await self.get_foreign_keys(table_name)

        return Table(
            name=table_name,
            columns=columns,
            indexes=indexes,
            foreign_keys=foreign_keys,
        )

    async def get_schema(self) -> Schema:
        """Inspect every table of the active namespace.

        Tables are fetched concurrently and returned in listing order. If any
        table fails, the remaining fetches are cancelled and the error
        propagates; no partial schema is returned.
        """
        table_names = await self.get_tables()
        logger.debug(
            "Inspecting %d tables in %s", len(table_names), self.get_database_schema()
        )

        tasks = [asyncio.ensure_future(self.get_table(name)) for name in table_names]
        try:
            tables = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Let cancelled tasks unwind before the error propagates
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return Schema(tables=list(tables))
