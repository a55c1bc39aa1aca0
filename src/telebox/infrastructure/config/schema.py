"""Pydantic configuration models with validation.

One model per YAML section (``http``, ``logging``, ``linkbox``); ``AppConfig``
is the validated, final shape.  ``EnvOverrides`` reads flat ``TELEBOX_*``
variables so load.py controls precedence itself.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class HttpConfig(BaseModel):
    """Outgoing HTTP client settings (YAML section: http.*)."""

    timeout_seconds: float = Field(
        default=20.0,
        description="Connect/read timeout for every provider request.",
    )
    follow_redirects: bool = True
    user_agent: str = "Telebox-Catalog/0.1.0"

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout_seconds must be > 0")
        return v


class LoggingConfig(BaseModel):
    """Log level and renderer (YAML section: logging.*).

    ``format`` left unset is derived from the environment by ``AppConfig``.
    """

    level: LogLevel = "INFO"
    format: Optional[LogFormat] = None


class LinkboxConfig(BaseModel):
    """Telebox/Linkbox account settings (YAML section: linkbox.*).

    Only ``api_token`` and ``base_folder_id`` are read by the catalog core.
    """

    api_token: Optional[str] = Field(
        default=None,
        description="Opaque Linkbox API token. Required for every operation.",
    )
    base_folder_id: str = Field(
        default="0",
        description="Folder used as catalog root ('0' = account root).",
    )
    base_url: str = Field(
        default="https://www.linkbox.to",
        description="Provider origin for API calls and item pages.",
    )

    @field_validator("api_token", mode="before")
    @classmethod
    def _blank_token_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("base_folder_id", mode="before")
    @classmethod
    def _validate_base_folder(cls, v: Any) -> str:
        if v is None:
            return "0"
        value = str(v).strip()
        if not value:
            raise ValueError("base_folder_id must not be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v.rstrip("/")


class AppConfig(BaseModel):
    """Canonical application configuration (validated, final)."""

    app_name: str = "telebox"
    environment: Environment = Field(
        default="dev",
        description="Runtime environment; prod switches logs to JSON.",
    )
    http: HttpConfig = Field(default_factory=HttpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    linkbox: LinkboxConfig = Field(default_factory=LinkboxConfig)

    @model_validator(mode="after")
    def _derive_log_format(self) -> "AppConfig":
        if self.logging.format is None:
            self.logging.format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """Dump in the config.yaml shape with the API token masked."""
        data = self.model_dump()
        if data["linkbox"]["api_token"]:
            data["linkbox"]["api_token"] = "***"
        return data


class EnvOverrides(BaseSettings):
    """Flat ``TELEBOX_*`` environment overrides; every field optional.

    Examples: ``TELEBOX_LINKBOX_API_TOKEN``, ``TELEBOX_LINKBOX_BASE_FOLDER_ID``,
    ``TELEBOX_HTTP_TIMEOUT_SECONDS``, ``TELEBOX_LOG_LEVEL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TELEBOX_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    linkbox_api_token: Optional[str] = None
    linkbox_base_folder_id: Optional[str] = None
    linkbox_base_url: Optional[str] = None

    def to_update_dict(self) -> dict[str, Any]:
        """Only the variables actually set, for merging."""
        return self.model_dump(exclude_none=True)
