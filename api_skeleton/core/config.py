"""Centralized configuration management with environment-aware defaults.

Configuration is declared with Pydantic Settings and read from environment
variables, an optional ``.env`` file and model defaults, in that order of
precedence. Nested sections use ``__`` as the delimiter, so
``RESPONSE_VALIDATION_CONFIG__STRICT=true`` turns on strict response
validation.

The settings object is built once at startup by ``get_settings()`` and handed
to the application factories explicitly; components receive the section
they need rather than reaching for module-level state.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Repository checkout holding the bundled data/ directory
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class LogConfig(BaseModel):
    """Logging configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_formatter_type: Literal["console", "json"] | None = Field(
        default=None,
        description="Log output formatter. Auto-detected if not specified.",
    )
    excluded_paths: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Paths to exclude from request logging",
    )
    slow_request_threshold_ms: int = Field(
        default=1000,
        gt=0,
        description="Threshold for slow request warnings (milliseconds)",
    )
    sensitive_fields: list[str] = Field(
        default_factory=lambda: [
            "password",
            "token",
            "secret",
            "api_key",
            "authorization",
        ],
        description="Field names to redact",
    )


class TLSConfig(BaseModel):
    """Certificate paths for serving HTTPS. Leave both unset to serve HTTP."""

    key_path: Path | None = Field(default=None, description="TLS private key")
    cert_path: Path | None = Field(default=None, description="TLS certificate")

    @field_validator("key_path", "cert_path", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | Path | None) -> str | Path | None:
        """Convert empty strings to None for nullable fields."""
        if v == "":
            return None
        return v

    @model_validator(mode="after")
    def check_pair(self) -> "TLSConfig":
        """Require the key and the certificate together."""
        if (self.key_path is None) != (self.cert_path is None):
            msg = "TLS key_path and cert_path must be configured together"
            raise ValueError(msg)
        return self

    @property
    def enabled(self) -> bool:
        """Whether HTTPS is configured."""
        return self.key_path is not None


class AuthConfig(BaseModel):
    """HTTP Basic credentials accepted by the API and admin routers."""

    username: str = Field(default="admin", description="Basic auth username")
    password: str = Field(default="admin", description="Basic auth password")


class PaginationConfig(BaseModel):
    """Defaults for paginated list endpoints."""

    default_page_size: int = Field(
        default=10,
        gt=0,
        description="Page size used when page[size] is not supplied",
    )


class ResponseValidationConfig(BaseModel):
    """Outgoing response validation behaviour."""

    strict: bool = Field(
        default=False,
        description=(
            "Replace responses that do not match their declared schema with an "
            "error. When false, mismatches are only logged."
        ),
    )


class DataSourceConfig(BaseModel):
    """Location of the example resource data."""

    pets_path: Path = Field(
        default=PROJECT_ROOT / "data" / "pets.json",
        description=(
            "JSON file holding the pet records served by /pets. Relative paths "
            "are resolved against the working directory."
        ),
    )


class Settings(BaseSettings):
    """Main settings class for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        env_nested_delimiter="__",
    )

    # Application settings
    app_name: str = Field(default="API Skeleton", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment the application is running in",
    )
    debug: bool = Field(default=True, description="Debug mode flag")

    # API settings
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=8080, description="API port")
    admin_port: int = Field(default=8081, description="Admin API port")
    base_path_prefix: str = Field(
        default="/api/v1", description="Path prefix for every API route"
    )
    api_base_url: str | None = Field(
        default=None,
        description=(
            "Public scheme and host used in generated links, e.g. "
            "https://api.example.com. Defaults to the request URL."
        ),
    )
    docs_url: str | None = Field(default="/docs", description="Swagger UI URL")
    redoc_url: str | None = Field(default="/redoc", description="ReDoc URL")
    openapi_url: str | None = Field(
        default="/openapi.json", description="OpenAPI schema URL"
    )

    tls_config: TLSConfig = Field(
        default_factory=TLSConfig, description="HTTPS configuration"
    )
    log_config: LogConfig = Field(
        default_factory=LogConfig, description="Logging configuration"
    )
    auth_config: AuthConfig = Field(
        default_factory=AuthConfig, description="Authentication configuration"
    )
    pagination_config: PaginationConfig = Field(
        default_factory=PaginationConfig, description="Pagination configuration"
    )
    response_validation_config: ResponseValidationConfig = Field(
        default_factory=ResponseValidationConfig,
        description="Response validation configuration",
    )
    data_source_config: DataSourceConfig = Field(
        default_factory=DataSourceConfig, description="Data source configuration"
    )

    def model_post_init(self, __context: object) -> None:
        """Post initialization to set environment-based defaults."""
        super().model_post_init(__context)

        if self.log_config.log_formatter_type is None:
            self.log_config.log_formatter_type = self._detect_formatter()

    def _detect_formatter(self) -> Literal["console", "json"]:
        """Auto-detect log formatter based on environment."""
        # Container platforms collect stdout as structured logs
        if os.getenv("K_SERVICE") or os.getenv("AWS_EXECUTION_ENV"):
            return "json"
        if self.environment == "development":
            return "console"
        return "json"

    @field_validator("base_path_prefix", mode="after")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Ensure the prefix starts with a slash and has no trailing slash."""
        _ = cls
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    @field_validator(
        "docs_url", "redoc_url", "openapi_url", "api_base_url", mode="before"
    )
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        _ = cls
        if v == "":
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
