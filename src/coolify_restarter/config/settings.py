"""Pydantic settings for Coolify Apps Restarter configuration."""

import logging
import os
from typing import Annotated, Any

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from coolify_restarter.config.cron import cron_trigger

logger = logging.getLogger(__name__)

# Every 6 hours
DEFAULT_CRON_SCHEDULE = "0 */6 * * *"

TRUTHY_VALUES = frozenset({"true", "on", "yes", "1"})

# Characters of the token shown in logs and summaries
TOKEN_PREVIEW_LENGTH = 10


class ConfigError(Exception):
    """Raised when the environment does not describe a runnable configuration."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Immutable once loaded. Field names map to COOLIFY_TOKEN, WEBHOOK_URLS,
    COOLIFY_API_URL, COOLIFY_APP_UUIDS, CRON_SCHEDULE, DEPLOY_ON_START, FORCE
    and DEBUG.
    """

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    coolify_token: str = ""

    # Comma-separated deployment webhook URLs (Coolify "Deploy Webhook").
    webhook_urls: Annotated[tuple[str, ...], NoDecode] = Field(default_factory=tuple)

    # Base API URL, e.g. https://coolify.example.com/api/v1. Required with app UUIDs.
    coolify_api_url: str | None = None
    coolify_app_uuids: Annotated[tuple[str, ...], NoDecode] = Field(default_factory=tuple)

    cron_schedule: str = DEFAULT_CRON_SCHEDULE

    deploy_on_start: bool = False
    force: bool = False
    debug: bool = False

    @field_validator("webhook_urls", "coolify_app_uuids", mode="before")
    @classmethod
    def split_csv(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    @field_validator("deploy_on_start", "force", "debug", mode="before")
    @classmethod
    def coerce_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() in TRUTHY_VALUES

    @field_validator("coolify_api_url", mode="before")
    @classmethod
    def normalize_api_url(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().rstrip("/")
            return value or None
        return value

    @field_validator("cron_schedule", mode="before")
    @classmethod
    def default_cron(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_CRON_SCHEDULE
        return value.strip() if isinstance(value, str) else value

    @field_validator("cron_schedule")
    @classmethod
    def check_cron(cls, value: str) -> str:
        try:
            cron_trigger(value)
        except ValueError as e:
            raise ValueError(f"CRON_SCHEDULE is not a valid cron expression ({value!r}): {e}") from e
        return value

    @model_validator(mode="after")
    def check_deployment_methods(self) -> "Settings":
        if not self.coolify_token:
            raise ValueError("COOLIFY_TOKEN environment variable is required")
        if not self.webhook_urls and not self.coolify_app_uuids:
            raise ValueError(
                "At least one deployment method must be configured: either WEBHOOK_URLS or COOLIFY_APP_UUIDS"
            )
        if self.coolify_app_uuids and not self.coolify_api_url:
            raise ValueError("COOLIFY_API_URL is required when COOLIFY_APP_UUIDS is provided")
        return self

    @property
    def api_enabled(self) -> bool:
        """True when app UUIDs can be deployed through the Coolify API."""
        return bool(self.coolify_app_uuids and self.coolify_api_url)

    @property
    def token_preview(self) -> str:
        return f"{self.coolify_token[:TOKEN_PREVIEW_LENGTH]}..."

    def summary(self) -> dict[str, Any]:
        """Configuration with the token redacted, for logs and check-config."""
        return {
            "webhook_count": len(self.webhook_urls),
            "api_app_count": len(self.coolify_app_uuids),
            "coolify_api_url": self.coolify_api_url or "not configured",
            "cron_schedule": self.cron_schedule,
            "deploy_on_start": self.deploy_on_start,
            "force": self.force,
            "debug": self.debug,
            "token_preview": self.token_preview,
        }


def _format_validation_error(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        ctx_error = (error.get("ctx") or {}).get("error")
        messages.append(str(ctx_error) if ctx_error is not None else error["msg"])
    return "; ".join(messages)


def load_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    """Load and validate settings from the environment and a dotenv file.

    The dotenv file defaults to ENV_FILE (or .env), read when called; a missing
    file is ignored. Raises ConfigError when the configuration is invalid.
    """
    if env_file is None:
        env_file = os.getenv("ENV_FILE", ".env")
    try:
        settings = Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigError(_format_validation_error(e)) from e
    logger.debug(
        "load_settings: %d webhook(s), %d API app(s)",
        len(settings.webhook_urls),
        len(settings.coolify_app_uuids),
    )
    return settings
