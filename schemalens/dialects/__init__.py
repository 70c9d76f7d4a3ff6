"""Dialects and the registry that selects one from configuration."""

from typing import Dict, Optional, Type

from ..config import DatabaseConfig
from ..database.executors import QueryExecutor
from ..errors import ConfigError
from .base import Dialect, DialectState
from .bigquery import BigQueryDialect
from .clickhouse import ClickHouseDialect

DIALECTS: Dict[str, Type[Dialect]] = {
    "bigquery": BigQueryDialect,
    "clickhouse": ClickHouseDialect,
}


def register_dialect(name: str, dialect_class: Type[Dialect]) -> None:
    """Make a dialect available under ``name``."""
    DIALECTS[name.lower()] = dialect_class


def get_dialect(config: DatabaseConfig, executor: Optional[QueryExecutor] = None) -> Dialect:
    """Construct the dialect named by ``config.client``.

    Raises:
        ConfigError: If no dialect is registered under that name
    """
    dialect_class = DIALECTS.get(config.client.lower())
    if dialect_class is None:
        raise ConfigError(
            f"Unsupported client: {config.client}",
            details={"supported": sorted(DIALECTS)},
        )
    return dialect_class(config, executor=executor)


__all__ = [
    "Dialect",
    "DialectState",
    "BigQueryDialect",
    "ClickHouseDialect",
    "DIALECTS",
    "register_dialect",
    "get_dialect",
]
