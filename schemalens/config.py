"""Configuration management for schemalens."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.schemalens/.env
    3. Package directory (where this file is located)
    """
    if os.path.exists(".env"):
        return ".env"

    user_env = Path.home() / ".schemalens" / ".env"
    if user_env.exists():
        return str(user_env)

    package_dir = Path(__file__).parent.parent
    package_env = package_dir / ".env"
    if package_env.exists():
        return str(package_env)

    return None


class ConnectionConfig(BaseModel):
    """Connection parameters handed to a dialect."""

    host: Optional[str] = None
    port: Optional[int] = None
    user: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None
    schema_name: Optional[str] = Field(
        default=None,
        description="Catalog/schema namespace to inspect; the dialect default when unset"
    )
    project_id: Optional[str] = None
    credentials_path: Optional[str] = None


class DatabaseConfig(BaseModel):
    """Selects a dialect and carries its connection parameters."""

    client: str
    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)

    def get_schema_name(self) -> Optional[str]:
        """Namespace override from configuration, if any."""
        return self.connection.schema_name or None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    client: str = Field(
        default="clickhouse",
        description="Dialect to use (bigquery or clickhouse)"
    )
    host: Optional[str] = Field(default=None, description="Backend host")
    port: Optional[int] = Field(default=None, description="Backend port")
    user: Optional[str] = Field(default=None, description="Backend user")
    password: Optional[str] = Field(default=None, description="Backend password")
    database: Optional[str] = Field(default=None, description="Target database/catalog")
    schema_name: Optional[str] = Field(
        default=None,
        description="Namespace override (BigQuery dataset, ClickHouse database)"
    )
    project_id: Optional[str] = Field(default=None, description="BigQuery project ID")
    credentials_path: Optional[str] = Field(
        default=None,
        description="Path to a BigQuery service account JSON file"
    )
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")

    class Config:
        env_prefix = "SCHEMALENS_"
        env_file = _find_env_file()
        env_file_encoding = "utf-8"

    def to_database_config(self) -> DatabaseConfig:
        """Build the dialect configuration from these settings."""
        return DatabaseConfig(
            client=self.client,
            connection=ConnectionConfig(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.database,
                schema_name=self.schema_name,
                project_id=self.project_id,
                credentials_path=self.credentials_path,
            ),
        )


# Global settings instance
settings = Settings()
