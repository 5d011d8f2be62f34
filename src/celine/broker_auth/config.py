"""Delegate configuration using pydantic-settings."""

from collections.abc import Mapping
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_URI = "http://localhost:5555/api/v1/validUser"
DEFAULT_ACL_URI = "http://localhost:5555/api/v1/validACL"

# Broker auth_opt_* keys mapped to settings fields
PLUGIN_OPTIONS = {
    "http_user_uri": "user_uri",
    "http_acl_uri": "acl_uri",
    "http_timeout": "request_timeout",
    "http_log_level": "log_level",
    "http_log_json": "log_json",
    "http_unsafe_log_credentials": "unsafe_log_credentials",
}


class BrokerAuthSettings(BaseSettings):
    """Endpoint configuration shared by both validators.

    Built once at startup and never mutated afterwards, so concurrent
    decision calls may read it without locking.
    """

    model_config = SettingsConfigDict(
        env_prefix="CELINE_BROKER_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Remote authority
    user_uri: str = Field(
        default=DEFAULT_USER_URI,
        min_length=1,
        description="User-verification endpoint",
    )
    acl_uri: str = Field(
        default=DEFAULT_ACL_URI,
        min_length=1,
        description="ACL-verification endpoint",
    )
    request_timeout: float = Field(
        default=5.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    # Logging
    log_level: str | int = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render decision logs as JSON")
    unsafe_log_credentials: bool = Field(
        default=False,
        description="Log plaintext passwords in decision logs (never in production)",
    )

    @classmethod
    def from_plugin_options(
        cls, options: Mapping[str, Any], **overrides: Any
    ) -> "BrokerAuthSettings":
        """Build settings from the broker's auth_opt_* key/value pairs.

        Unknown keys are ignored; unset keys keep their defaults.
        """
        values: dict[str, Any] = {}
        for key, value in options.items():
            for option, field_name in PLUGIN_OPTIONS.items():
                if key.startswith(option) and value is not None:
                    values[field_name] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
