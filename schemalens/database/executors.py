"""Query execution for metadata lookups.

Inspectors only see the ``QueryExecutor`` interface. BigQuery queries are
built with ``CatalogQuery`` and bound as query parameters; ClickHouse
metadata comes from literal ``SHOW``/``DESCRIBE`` statements.
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple, Union

from ..config import ConnectionConfig

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def quote_identifier(name: str) -> str:
    """Wrap a database, dataset or table name in backticks."""
    escaped = name.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


class CatalogQuery:
    """Minimal builder for ``SELECT ... FROM <catalog table> WHERE ...``.

    Example:
        CatalogQuery("`public`.INFORMATION_SCHEMA.TABLES")
            .where("table_schema", "public")
            .where_not("table_name", "spatial_ref_sys")
            .select("table_name")
    """

    def __init__(self, table: str):
        self.table = table
        self.columns: List[str] = []
        self.conditions: List[Tuple[str, str, Any]] = []

    def where(self, column: str, value: Any) -> "CatalogQuery":
        self.conditions.append((column, "=", value))
        return self

    def where_not(self, column: str, value: Any) -> "CatalogQuery":
        self.conditions.append((column, "!=", value))
        return self

    def select(self, *columns: str) -> "CatalogQuery":
        self.columns.extend(columns)
        return self

    def compile(self, placeholder: str = "@{name}") -> Tuple[str, Dict[str, Any]]:
        """Render SQL with named parameters.

        Args:
            placeholder: Format string for a parameter reference, given ``name``

        Returns:
            Tuple of (sql, parameters)
        """
        columns = ", ".join(self.columns) if self.columns else "*"
        sql = f"SELECT {columns} FROM {self.table}"
        params: Dict[str, Any] = {}
        clauses = []
        for i, (column, operator, value) in enumerate(self.conditions):
            name = f"p{i}"
            params[name] = value
            clauses.append(f"{column} {operator} {placeholder.format(name=name)}")
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        return sql, params

    def __repr__(self) -> str:
        return f"CatalogQuery({self.compile()[0]!r})"


Query = Union[CatalogQuery, str]


class QueryExecutor(ABC):
    """Runs metadata queries and returns rows as dicts keyed by column name."""

    @abstractmethod
    async def fetch_all(self, query: Query) -> List[Row]:
        """Execute a query and return all rows.

        Args:
            query: A CatalogQuery or a literal SQL statement

        Returns:
            List of rows, each a mapping of column name to value
        """
        pass

    async def close(self) -> None:
        """Release the underlying client."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class BigQueryExecutor(QueryExecutor):
    """Builder-backed executor on top of google-cloud-bigquery."""

    def __init__(self, connection: ConnectionConfig, client: Any = None):
        self.connection = connection
        self._client = client

    def _get_client(self):
        if self._client is not None:
            return self._client
        try:
            from google.cloud import bigquery
        except ImportError:
            raise ImportError(
                "google-cloud-bigquery is required. "
                "Install it with: pip install 'schemalens[bigquery]'"
            )

        if self.connection.credentials_path:
            self._client = bigquery.Client.from_service_account_json(
                self.connection.credentials_path,
                project=self.connection.project_id,
            )
        else:
            self._client = bigquery.Client(project=self.connection.project_id)
        return self._client

    def _run(self, sql: str, params: Dict[str, Any]) -> List[Row]:
        from google.cloud import bigquery

        client = self._get_client()
        job_config = bigquery.QueryJobConfig(
            query_parameters=[
                bigquery.ScalarQueryParameter(name, "STRING", value)
                for name, value in params.items()
            ]
        )
        result = client.query(sql, job_config=job_config).result()
        return [dict(row.items()) for row in result]

    async def fetch_all(self, query: Query) -> List[Row]:
        if isinstance(query, CatalogQuery):
            sql, params = query.compile("@{name}")
        else:
            sql, params = query, {}
        logger.debug("BigQuery metadata query: %s %s", sql, params)
        # The BigQuery client is synchronous; keep it off the event loop
        return await asyncio.to_thread(self._run, sql, params)

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


class ClickHouseExecutor(QueryExecutor):
    """Literal-statement executor on top of clickhouse-connect's async client."""

    def __init__(self, connection: ConnectionConfig, client: Any = None):
        self.connection = connection
        self._client = client
        self._lock = asyncio.Lock()

    async def _get_client(self):
        async with self._lock:
            if self._client is not None:
                return self._client
            try:
                import clickhouse_connect
            except ImportError:
                raise ImportError(
                    "clickhouse-connect is required. "
                    "Install it with: pip install 'schemalens[clickhouse]'"
                )

            kwargs: Dict[str, Any] = {
                "host": self.connection.host or "localhost",
                "username": self.connection.user or "default",
                "password": self.connection.password or "",
            }
            if self.connection.port:
                kwargs["port"] = self.connection.port
            if self.connection.database:
                kwargs["database"] = self.connection.database
            self._client = await clickhouse_connect.get_async_client(**kwargs)
            return self._client

    async def fetch_all(self, query: Query) -> List[Row]:
        if isinstance(query, CatalogQuery):
            sql, params = query.compile("{{{name}:String}}")
        else:
            sql, params = query, None
        logger.debug("ClickHouse metadata statement: %s", sql)
        client = await self._get_client()
        result = await client.query(sql, parameters=params)
        return list(result.named_results())

    async def close(self) -> None:
        if self._client is not None:
            result = self._client.close()
            if inspect.isawaitable(result):
                await result
            self._client = None

