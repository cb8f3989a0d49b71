"""Deployment targets: a webhook URL or an app UUID deployed through the Coolify API."""

import logging
from dataclasses import dataclass

import httpx

from coolify_restarter.config import Settings

logger = logging.getLogger(__name__)


def add_force_param(url: str) -> str:
    """Set force=true on the URL query, keeping other parameters.

    Falls back to plain concatenation when the URL is not absolute or cannot be parsed.
    """
    try:
        parsed = httpx.URL(url)
        if not parsed.scheme or not parsed.host:
            raise httpx.InvalidURL(f"Not an absolute URL: {url}")
        return str(parsed.copy_set_param("force", "true"))
    except httpx.InvalidURL:
        logger.warning("Invalid URL format: %s, appending force parameter as-is", url)
        return url + ("&" if "?" in url else "?") + "force=true"


@dataclass(frozen=True)
class WebhookTarget:
    """Deploy webhook copied from the Coolify dashboard."""

    url: str

    @property
    def display_name(self) -> str:
        return self.url

    def request_url(self, *, force: bool) -> str:
        return add_force_param(self.url) if force else self.url


@dataclass(frozen=True)
class ApiAppTarget:
    """Application deployed through {api_url}/deploy by UUID."""

    uuid: str
    api_url: str

    @property
    def display_name(self) -> str:
        return f"app {self.uuid}"

    def request_url(self, *, force: bool) -> str:
        force_param = "true" if force else "false"
        return f"{self.api_url}/deploy?uuid={self.uuid}&force={force_param}"


DeploymentTarget = WebhookTarget | ApiAppTarget


def build_targets(settings: Settings) -> list[DeploymentTarget]:
    """Webhook targets first, then API apps (only when COOLIFY_API_URL is set)."""
    targets: list[DeploymentTarget] = [WebhookTarget(url=url) for url in settings.webhook_urls]
    if settings.api_enabled:
        targets.extend(
            ApiAppTarget(uuid=uuid, api_url=settings.coolify_api_url)
            for uuid in settings.coolify_app_uuids
        )
    elif settings.coolify_app_uuids:
        logger.warning(
            "build_targets: %d app UUID(s) ignored, COOLIFY_API_URL not set",
            len(settings.coolify_app_uuids),
        )
    return targets
