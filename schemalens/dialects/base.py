"""Dialect capability interface."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import NoReturn

from ..config import DatabaseConfig
from ..database.base import SchemaInspector
from ..database.executors import QueryExecutor

logger = logging.getLogger(__name__)


class DialectState(str, Enum):
    """Lifecycle states of a dialect."""
    CONSTRUCTED = "constructed"
    INITIALIZED = "initialized"


class Dialect(ABC):
    """Capability bundle for one backend.

    A dialect owns exactly one schema inspector and one query executor.
    Construction is synchronous; ``initialize()`` must be awaited once
    before the inspector is used.
    """

    client: str = ""

    schema_inspector: SchemaInspector
    executor: QueryExecutor

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.state = DialectState.CONSTRUCTED

    @property
    def is_initialized(self) -> bool:
        return self.state is DialectState.INITIALIZED

    async def initialize(self) -> None:
        """Run backend setup once the client exists."""
        if self.is_initialized:
            logger.debug("%s dialect already initialized", self.client)
            return
        await self._setup()
        self.state = DialectState.INITIALIZED
        logger.debug("%s dialect initialized", self.client)

    @abstractmethod
    async def _setup(self) -> None:
        """Backend-specific setup, run by ``initialize()``."""
        pass

    @abstractmethod
    def use_returning(self) -> bool:
        """Whether writes may ask the backend for generated values."""
        pass

    @abstractmethod
    def uses_foreign_keys(self) -> bool:
        """Whether foreign key constraints should be emitted."""
        pass

    @abstractmethod
    def supports_unsigned(self) -> bool:
        """Whether the backend has unsigned numeric types."""
        pass

    @abstractmethod
    def can_add_increments(self) -> bool:
        """Whether auto-incrementing keys can be declared."""
        pass

    @abstractmethod
    def get_sql_type(self, type_name: str) -> str:
        """Backend type token for a canonical type."""
        pass

    @abstractmethod
    def transform_errors(self, error: BaseException) -> NoReturn:
        """Raise the canonical error for a native backend error."""
        pass

    async def close(self) -> None:
        """Release the executor's client."""
        await self.executor.close()

    async def __aenter__(self):
        try:
            await self.initialize()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
