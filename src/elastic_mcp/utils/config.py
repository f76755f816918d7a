"""
Configuration management for the Elasticsearch MCP server.

This module provides centralized configuration using Pydantic settings
with support for environment variables and .env files.
"""

from pathlib import Path
from typing import Any

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from elastic_mcp.utils.errors import ConfigurationError

AUTH_REQUIRED_MESSAGE = "Either ES_API_KEY or both ES_USERNAME and ES_PASSWORD must be provided"

_url_adapter = TypeAdapter(AnyUrl)


class ValidationResult(BaseModel):
    valid: bool = True
    errors: list[str] = []
    warnings: list[str] = []


class ElasticMCPSettings(BaseSettings):
    """Elasticsearch MCP server configuration settings."""

    # Elasticsearch connection
    url: str = Field(default="", validate_default=True, description="Elasticsearch server URL")
    api_key: str | None = Field(default=None, description="API key for Elasticsearch authentication")
    username: str | None = Field(default=None, description="Username for Elasticsearch authentication")
    password: str | None = Field(default=None, description="Password for Elasticsearch authentication")
    ca_cert: str | None = Field(default=None, description="Path to custom CA certificate for Elasticsearch")

    # MCP server settings
    mcp_server_name: str = Field(default="elasticsearch-mcp-server")
    mcp_server_version: str = Field(default="0.1.1")
    index_cache_ttl: float = Field(default=600.0, gt=0, description="Time to live for the cached index list in seconds.")

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_structured: bool = Field(default=False, description="Emit JSON log lines")
    log_file: str | None = Field(default=None, description="Optional log file path")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="ES_",
        extra="ignore",
    )

    @field_validator("api_key", "username", "password", "ca_cert", "log_file", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("url", mode="before")
    @classmethod
    def _check_url(cls, value: Any) -> str:
        url = str(value or "").strip()
        if not url:
            raise ValueError("Elasticsearch URL cannot be empty")
        try:
            _url_adapter.validate_python(url)
        except PydanticValidationError as e:
            raise ValueError("Invalid Elasticsearch URL format") from e
        return url

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level

    @model_validator(mode="after")
    def _check_auth(self) -> "ElasticMCPSettings":
        if not self.api_key and not (self.username and self.password):
            raise ValueError(AUTH_REQUIRED_MESSAGE)
        return self

    @property
    def auth_mode(self) -> str:
        """Name of the credential form in use; the API key wins over basic auth."""
        return "api_key" if self.api_key else "basic"

    def get_ca_cert_path(self) -> Path | None:
        """Get CA certificate path as Path object."""
        if self.ca_cert:
            return Path(self.ca_cert).expanduser()
        return None

    def get_log_file_path(self) -> Path | None:
        """Get log file path as Path object."""
        if not self.log_file:
            return None
        path = Path(self.log_file).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def validate_settings(self) -> ValidationResult:
        """Validate settings and return status information."""
        status = ValidationResult()

        if self.log_file and Path(self.log_file).expanduser().is_dir():
            status.valid = False
            status.errors.append(f"ES_LOG_FILE points to a directory: {self.log_file}")

        ca_cert = self.get_ca_cert_path()
        if ca_cert and not ca_cert.is_file():
            status.warnings.append(f"CA certificate not found: {ca_cert}; connecting without it")

        if self.api_key and (self.username or self.password):
            status.warnings.append("Both ES_API_KEY and username/password are set; the API key is used")

        if self.url.startswith("http://") and (self.api_key or self.password):
            status.warnings.append("Credentials will be sent over plain HTTP")

        return status

    def masked(self) -> dict[str, Any]:
        """Settings as a dictionary with secrets hidden."""
        data = self.model_dump()
        for key in ("api_key", "password"):
            if data.get(key):
                data[key] = "****"
        return data


_settings: ElasticMCPSettings | None = None


def _format_validation_error(error: PydanticValidationError) -> str:
    messages = []
    for item in error.errors():
        message = str(item.get("msg", "")).removeprefix("Value error, ")
        loc = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{loc}: {message}" if loc else message)
    return "; ".join(messages)


def load_settings(**overrides: Any) -> ElasticMCPSettings:
    """Build settings from the environment, raising ``ConfigurationError`` when invalid."""
    try:
        return ElasticMCPSettings(**overrides)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {_format_validation_error(e)}",
            suggestions=[
                "Set ES_URL to the Elasticsearch endpoint, e.g. https://localhost:9200",
                AUTH_REQUIRED_MESSAGE,
            ],
        ) from e


def get_settings() -> ElasticMCPSettings:
    """Get the global settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reload_settings() -> ElasticMCPSettings:
    """Reload settings from environment and return new instance."""
    global _settings
    _settings = load_settings()
    return _settings
