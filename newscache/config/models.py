"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("newscache", description="Database name")
    user: str = Field("newscache", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")
    url: Optional[str] = Field(None, description="Full connection URL, overrides the fields above")


class NewsAPIConfig(BaseModel):
    """Remote news API configuration."""

    base_url: str = Field("https://newsapi.org/v2", description="API base URL")
    api_key_env: Optional[str] = Field("NEWSAPI_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    country: str = Field("us", description="Country code for top headlines")
    request_timeout: float = Field(30.0, description="Per-request timeout in seconds", gt=0)
    resource_timeout: float = Field(60.0, description="Overall fetch timeout in seconds", gt=0)

    @field_validator("country")
    @classmethod
    def validate_country(cls, v: str) -> str:
        """Country codes are two lowercase letters."""
        v = v.strip().lower()
        if len(v) != 2 or not v.isalpha():
            raise ValueError(f"Country must be a two-letter code, got {v!r}")
        return v


class NetworkConfig(BaseModel):
    """Connectivity check configuration."""

    probe_timeout: float = Field(3.0, description="Reachability probe timeout in seconds", gt=0)
    force_offline: bool = Field(False, description="Always serve from the cache")


class FetchDefaults(BaseModel):
    """Default paging parameters."""

    page: int = Field(1, description="Default page", ge=1)
    page_size: int = Field(20, description="Default page size", ge=1, le=100)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level name")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept standard level names in any case."""
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    news_api: NewsAPIConfig = Field(default_factory=NewsAPIConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    fetch_defaults: FetchDefaults = Field(default_factory=FetchDefaults)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
