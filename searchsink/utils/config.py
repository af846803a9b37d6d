# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv.
"""

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before any settings are instantiated
load_dotenv()


class OpenSearchSettings(BaseSettings):
    """OpenSearch connection settings."""

    model_config = SettingsConfigDict(env_prefix="OPENSEARCH_")

    host: str = Field(default="localhost", description="OpenSearch host")
    port: int = Field(default=9200, description="OpenSearch port")
    user: Optional[str] = Field(default="admin", description="OpenSearch username")
    password: Optional[str] = Field(default="admin", description="OpenSearch password")
    use_ssl: bool = Field(default=True, description="Use SSL")
    verify_certs: bool = Field(
        default=True, description="Verify SSL certificates (False for local self-signed)"
    )
    timeout: int = Field(default=30, description="Request timeout in seconds")

    @property
    def hosts(self) -> list[dict]:
        """Build OpenSearch hosts configuration."""
        return [
            {
                "host": self.host,
                "port": self.port,
            }
        ]


class SinkSettings(BaseSettings):
    """Bulk sink settings."""

    model_config = SettingsConfigDict(env_prefix="SINK_")

    name: str = Field(default="opensearchSink", description="Sink name (dataflow step id)")
    parallelism: int = Field(
        default=2, ge=1, description="Preferred number of workers (contexts) per process"
    )
    refresh: Optional[Literal["true", "false", "wait_for"]] = Field(
        default=None, description="Refresh policy sent with every bulk request"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    opensearch: OpenSearchSettings = Field(default_factory=OpenSearchSettings)
    sink: SinkSettings = Field(default_factory=SinkSettings)

    # General settings
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()
