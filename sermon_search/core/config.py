"""
Sermon-Search-Service - Application Configuration

Pydantic Settings loaded from the environment with the SSS_ prefix.

Example:
    SSS_STORE_BACKEND=http SSS_STORE_URL=http://catalog:8090 uvicorn sermon_search.main:app
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with SSS_ prefix.
    Example: SSS_HOST=0.0.0.0, SSS_PORT=8084
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8084

    # Application metadata
    service_name: str = "sermon-search-service"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Tracing configuration
    tracing_enabled: bool = False
    tracing_console_export: bool = True

    # Document store ("memory" loads catalog_path, "http" calls store_url)
    store_backend: str = "memory"
    catalog_path: str = "./data/catalog.json"
    store_url: str = "http://localhost:8090"
    store_timeout: float = 30.0
    store_max_retries: int = 3
    store_retry_delay: float = 1.0

    # Search paging
    search_page_size: int = 50
    max_page_size: int = 100
    series_limit: int = 10
    transcript_page_size: int = 30

    # Snippets
    snippet_count: int = 3
    snippet_length: int = 150

    model_config = SettingsConfigDict(
        env_prefix="SSS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
