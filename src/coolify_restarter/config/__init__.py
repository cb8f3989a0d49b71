"""Configuration for Coolify Apps Restarter."""

from coolify_restarter.config.cron import cron_trigger
from coolify_restarter.config.settings import (
    DEFAULT_CRON_SCHEDULE,
    ConfigError,
    Settings,
    load_settings,
)

__all__ = ["ConfigError", "DEFAULT_CRON_SCHEDULE", "Settings", "cron_trigger", "load_settings"]
