"""Shared pytest fixtures for schemalens tests."""

import pytest

from schemalens.config import ConnectionConfig, DatabaseConfig
from tests.fixtures import FakeExecutor


@pytest.fixture
def fake_executor():
    """Create an executor with no canned responses."""
    return FakeExecutor()


@pytest.fixture
def bigquery_config():
    return DatabaseConfig(client="bigquery", connection=ConnectionConfig(project_id="test-project"))


@pytest.fixture
def clickhouse_config():
    return DatabaseConfig(
        client="clickhouse",
        connection=ConnectionConfig(host="localhost", user="default", database="default"),
    )


@pytest.fixture
def bigquery_users_rows():
    """information_schema.columns rows for a ``users`` table."""
    return [
        {
            "column_name": "id",
            "data_type": "bigint",
            "character_maximum_length": None,
            "column_default": None,
            "is_nullable": "NO",
        },
        {
            "column_name": "email",
            "data_type": "character(255)",
            "character_maximum_length": 255,
            "column_default": None,
            "is_nullable": "YES",
        },
    ]


@pytest.fixture
def clickhouse_events_rows():
    """DESCRIBE TABLE rows for an ``events`` table."""
    return [
        {"name": "id", "data_type": "Int64", "default_expression": "", "is_nullable": 0},
        {"name": "payload", "data_type": "JSON", "default_expression": "", "is_nullable": 1},
        {"name": "label", "data_type": "varchar", "default_expression": "'none'", "is_nullable": 0},
    ]
