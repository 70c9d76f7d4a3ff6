"""Tests for the BigQuery and ClickHouse schema inspectors."""

import asyncio

import pytest

from schemalens.config import ConnectionConfig, DatabaseConfig
from schemalens.database.bigquery import BigQuerySchemaInspector
from schemalens.database.clickhouse import ClickHouseSchemaInspector
from schemalens.database.executors import CatalogQuery
from schemalens.database.models import Column, Schema
from tests.fixtures import FakeExecutor


class TestDatabaseSchema:
    """Test namespace resolution."""

    def test_bigquery_default(self, bigquery_config, fake_executor):
        assert BigQuerySchemaInspector(bigquery_config, fake_executor).get_database_schema() == "public"

    def test_clickhouse_default(self, fake_executor):
        config = DatabaseConfig(client="clickhouse")
        assert ClickHouseSchemaInspector(config, fake_executor).get_database_schema() == "default"

    def test_configured_override(self, fake_executor):
        config = DatabaseConfig(client="bigquery", connection=ConnectionConfig(schema_name="analytics"))
        assert BigQuerySchemaInspector(config, fake_executor).get_database_schema() == "analytics"

    def test_empty_override_uses_default(self, fake_executor):
        config = DatabaseConfig(client="clickhouse", connection=ConnectionConfig(schema_name=""))
        assert ClickHouseSchemaInspector(config, fake_executor).get_database_schema() == "default"


class TestBigQueryInspector:
    """Test BigQuery metadata discovery against a fake executor."""

    @pytest.mark.asyncio
    async def test_get_tables_filters_kind_and_system_tables(self, bigquery_config, fake_executor):
        fake_executor.on("INFORMATION_SCHEMA.TABLES", rows=[{"table_name": "users"}, {"table_name": "orders"}])
        inspector = BigQuerySchemaInspector(bigquery_config, fake_executor)

        tables = await inspector.get_tables()

        assert tables == ["users", "orders"]
        query = fake_executor.queries[0]
        assert isinstance(query, CatalogQuery)
        sql, params = query.compile()
        assert sql.startswith("SELECT table_name FROM `public`.INFORMATION_SCHEMA.TABLES WHERE ")
        assert ("table_schema", "=", "public") in query.conditions
        assert ("table_type", "=", "BASE TABLE") in query.conditions
        assert ("table_name", "!=", "geometry_columns") in query.conditions
        assert ("table_name", "!=", "spatial_ref_sys") in query.conditions
        assert "spatial_ref_sys" in params.values()

    @pytest.mark.asyncio
    async def test_users_scenario(self, bigquery_config, fake_executor, bigquery_users_rows):
        fake_executor.on("INFORMATION_SCHEMA.COLUMNS.*'users'", rows=bigquery_users_rows)
        inspector = BigQuerySchemaInspector(bigquery_config, fake_executor)

        columns = await inspector.get_columns("users")

        assert columns == [
            Column(name="id", type="bigInteger", args=[], default_to=None, not_nullable=True, unsigned=False),
            Column(name="email", type="string", args=[255], default_to=None, not_nullable=False, unsigned=False),
        ]

    @pytest.mark.asyncio
    async def test_columns_query_selects_descriptor_fields(self, bigquery_config, fake_executor):
        inspector = BigQuerySchemaInspector(bigquery_config, fake_executor)

        await inspector.get_columns("users")

        query = fake_executor.queries[0]
        assert query.table == "`public`.INFORMATION_SCHEMA.COLUMNS"
        assert query.columns == [
            "data_type",
            "column_name",
            "character_maximum_length",
            "column_default",
            "is_nullable",
        ]
        assert ("table_name", "=", "users") in query.conditions

    @pytest.mark.asyncio
    async def test_views_are_qualified_with_dataset(self, fake_executor):
        config = DatabaseConfig(client="bigquery", connection=ConnectionConfig(schema_name="analytics"))
        inspector = BigQuerySchemaInspector(config, fake_executor)

        await inspector.get_tables()
        await inspector.get_columns("users")

        tables_query, columns_query = fake_executor.queries
        assert tables_query.table == "`analytics`.INFORMATION_SCHEMA.TABLES"
        assert columns_query.table == "`analytics`.INFORMATION_SCHEMA.COLUMNS"
        assert ("table_schema", "=", "analytics") in columns_query.conditions

    @pytest.mark.asyncio
    async def test_sequence_default_is_dropped(self, bigquery_config, fake_executor):
        fake_executor.on("INFORMATION_SCHEMA.COLUMNS", rows=[
            {
                "column_name": "id",
                "data_type": "integer",
                "character_maximum_length": None,
                "column_default": "nextval('users_id_seq'::regclass)",
                "is_nullable": "NO",
            },
            {
                "column_name": "status",
                "data_type": "text",
                "character_maximum_length": None,
                "column_default": "'active'",
                "is_nullable": "NO",
            },
        ])
        inspector = BigQuerySchemaInspector(bigquery_config, fake_executor)

        id_column, status_column = await inspector.get_columns("users")

        assert id_column.default_to is None
        assert status_column.default_to == "'active'"
        assert status_column.args == ["longtext"]

    @pytest.mark.asyncio
    async def test_indexes_and_foreign_keys_are_empty(self, bigquery_config, fake_executor):
        inspector = BigQuerySchemaInspector(bigquery_config, fake_executor)

        assert await inspector.get_indexes("users") == []
        assert await inspector.get_foreign_keys("users") == []
        assert fake_executor.queries == []


class TestClickHouseInspector:
    """Test ClickHouse metadata discovery against a fake executor."""

    @pytest.mark.asyncio
    async def test_get_tables_issues_show_tables(self, clickhouse_config, fake_executor):
        fake_executor.on("^SHOW TABLES FROM `default`$", rows=[{"name": "events"}, {"name": "spatial_ref_sys"}])
        inspector = ClickHouseSchemaInspector(clickhouse_config, fake_executor)

        assert await inspector.get_tables() == ["events"]
        assert fake_executor.queries == ["SHOW TABLES FROM `default`"]

    @pytest.mark.asyncio
    async def test_get_columns_issues_describe(self, clickhouse_config, fake_executor, clickhouse_events_rows):
        fake_executor.on("^DESCRIBE TABLE `default`.`events`$", rows=clickhouse_events_rows)
        inspector = ClickHouseSchemaInspector(clickhouse_config, fake_executor)

        columns = await inspector.get_columns("events")

        assert [c.name for c in columns] == ["id", "payload", "label"]
        assert columns[0].type == "integer"
        assert columns[0].not_nullable is True
        assert columns[0].default_to is None
        assert columns[1].type == "jsonb"
        assert columns[1].not_nullable is False
        assert columns[2].type == "string"
        assert columns[2].args == ["'none'"]
        assert columns[2].default_to == "'none'"
        assert all(c.unsigned is False for c in columns)

    @pytest.mark.asyncio
    async def test_names_are_quoted(self, fake_executor):
        config = DatabaseConfig(client="clickhouse", connection=ConnectionConfig(schema_name="raw-logs"))
        inspector = ClickHouseSchemaInspector(config, fake_executor)

        await inspector.get_tables()
        await inspector.get_columns("my-table")
        await inspector.get_columns("odd`name")

        assert fake_executor.queries == [
            "SHOW TABLES FROM `raw-logs`",
            "DESCRIBE TABLE `raw-logs`.`my-table`",
            "DESCRIBE TABLE `raw-logs`.`odd\\`name`",
        ]

    @pytest.mark.asyncio
    async def test_indexes_and_foreign_keys_are_empty(self, clickhouse_config, fake_executor):
        inspector = ClickHouseSchemaInspector(clickhouse_config, fake_executor)

        assert await inspector.get_indexes("events") == []
        assert await inspector.get_foreign_keys("events") == []


class TestGetSchema:
    """Test the concurrent schema assembly."""

    @pytest.fixture
    def populated_executor(self, clickhouse_events_rows):
        executor = FakeExecutor()
        executor.on("^SHOW TABLES", rows=[
            {"name": "events"},
            {"name": "geometry_columns"},
            {"name": "sessions"},
        ])
        executor.on("DESCRIBE TABLE `default`.`events`", rows=clickhouse_events_rows, delay=0.02)
        executor.on("DESCRIBE TABLE `default`.`sessions`", rows=[
            {"name": "id", "data_type": "Int32", "default_expression": "", "is_nullable": 0},
        ])
        return executor

    @pytest.mark.asyncio
    async def test_assembles_tables_in_listing_order(self, clickhouse_config, populated_executor):
        inspector = ClickHouseSchemaInspector(clickhouse_config, populated_executor)

        schema = await inspector.get_schema()

        assert isinstance(schema, Schema)
        # events finishes last but keeps its listing position
        assert schema.table_names() == ["events", "sessions"]
        events = schema.get_table("events")
        assert events.column_names() == ["id", "payload", "label"]
        assert events.indexes == []
        assert events.foreign_keys == []
        assert schema.get_table("geometry_columns") is None

    @pytest.mark.asyncio
    async def test_is_idempotent(self, clickhouse_config, populated_executor):
        inspector = ClickHouseSchemaInspector(clickhouse_config, populated_executor)

        first = await inspector.get_schema()
        second = await inspector.get_schema()

        assert first == second
        assert first is not second

    @pytest.mark.asyncio
    async def test_empty_namespace(self, bigquery_config, fake_executor):
        schema = await BigQuerySchemaInspector(bigquery_config, fake_executor).get_schema()

        assert schema == Schema(tables=[])

    @pytest.mark.asyncio
    async def test_bigquery_schema(self, bigquery_config, fake_executor, bigquery_users_rows):
        fake_executor.on("INFORMATION_SCHEMA.TABLES", rows=[{"table_name": "users"}])
        fake_executor.on("INFORMATION_SCHEMA.COLUMNS.*'users'", rows=bigquery_users_rows)

        schema = await BigQuerySchemaInspector(bigquery_config, fake_executor).get_schema()

        users = schema.get_table("users")
        assert users.get_column("id").type == "bigInteger"
        assert users.get_column("email").args == [255]

    @pytest.mark.asyncio
    async def test_table_failure_fails_whole_schema(self, clickhouse_config):
        executor = FakeExecutor()
        executor.on("^SHOW TABLES", rows=[{"name": "broken"}, {"name": "slow"}])
        executor.on("DESCRIBE TABLE `default`.`broken`", error=RuntimeError("connection reset"))
        executor.on("DESCRIBE TABLE `default`.`slow`", delay=5)
        inspector = ClickHouseSchemaInspector(clickhouse_config, executor)

        with pytest.raises(RuntimeError, match="connection reset"):
            await inspector.get_schema()

        assert executor.cancelled == ["DESCRIBE TABLE `default`.`slow`"]

    @pytest.mark.asyncio
    async def test_listing_failure_propagates(self, clickhouse_config):
        executor = FakeExecutor()
        executor.on("^SHOW TABLES", error=ConnectionError("refused"))

        with pytest.raises(ConnectionError):
            await ClickHouseSchemaInspector(clickhouse_config, executor).get_schema()

    @pytest.mark.asyncio
    async def test_timeout_cancels_in_flight_fetches(self, clickhouse_config):
        executor = FakeExecutor()
        executor.on("^SHOW TABLES", rows=[{"name": "a"}, {"name": "b"}])
        executor.on("DESCRIBE TABLE", delay=5)
        inspector = ClickHouseSchemaInspector(clickhouse_config, executor)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(inspector.get_schema(), timeout=0.05)

        assert sorted(executor.cancelled) == ["DESCRIBE TABLE `default`.`a`", "DESCRIBE TABLE `default`.`b`"]
