"""BigQuery dialect."""

from typing import NoReturn, Optional

from ..config import DatabaseConfig
from ..database.bigquery import BigQuerySchemaInspector
from ..database.executors import BigQueryExecutor, QueryExecutor
from ..errors import NotNullError, transform_error_fallback, native_error_codes
from .base import Dialect


class BigQueryDialect(Dialect):
    """Dialect for Google BigQuery."""

    client = "bigquery"

    # Native error codes translated to a required-column error
    NOT_NULL_CODES = frozenset({"notFound"})

    def __init__(self, config: DatabaseConfig, executor: Optional[QueryExecutor] = None):
        super().__init__(config)
        self.executor = executor or BigQueryExecutor(config.connection)
        self.schema_inspector = BigQuerySchemaInspector(config, self.executor)

    async def _setup(self) -> None:
        # Nothing to prepare once the BigQuery client exists
        pass

    def use_returning(self) -> bool:
        return False

    def uses_foreign_keys(self) -> bool:
        return False

    def supports_unsigned(self) -> bool:
        return False

    def can_add_increments(self) -> bool:
        return False

    def get_sql_type(self, type_name: str) -> str:
        if type_name == "timestamp":
            return "datetime"
        return type_name

    def transform_errors(self, error: BaseException) -> NoReturn:
        if self.NOT_NULL_CODES.intersection(native_error_codes(error)):
            column = getattr(error, "column", None)
            raise NotNullError(column=str(column) if column is not None else None) from error
        transform_error_fallback(error)
