"""Trigger a single deployment. Failures are logged and returned, never raised."""

import logging
from dataclasses import dataclass

import httpx

from coolify_restarter.config import Settings
from coolify_restarter.deploy.targets import DeploymentTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of one deployment request."""

    target: DeploymentTarget
    ok: bool
    status_code: int | None = None
    error: str | None = None


def build_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


async def trigger_deployment(
    client: httpx.AsyncClient,
    target: DeploymentTarget,
    settings: Settings,
) -> DeploymentResult:
    """POST to the target's deployment URL with the bearer token."""
    name = target.display_name
    url = target.request_url(force=settings.force)
    logger.info("Triggering deployment | %s", name)
    logger.debug("URL: %s", url)
    logger.debug(
        "Request headers: %s",
        build_headers(settings.token_preview),
    )

    try:
        response = await client.post(url, headers=build_headers(settings.coolify_token))
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error("Error triggering deployment | %s | %s: %s", name, type(e).__name__, e)
        return DeploymentResult(target=target, ok=False, error=str(e) or type(e).__name__)

    logger.debug("Response status: %d %s", response.status_code, response.reason_phrase)
    logger.debug("Response headers: %s", dict(response.headers))
    logger.debug("Response body: %s", response.text or "(empty)")

    if response.is_success:
        force_text = " (force rebuild)" if settings.force else ""
        logger.info("Successfully triggered deployment | %s%s", name, force_text)
        return DeploymentResult(target=target, ok=True, status_code=response.status_code)

    logger.error(
        "Failed to trigger deployment | %s | status: %d | response: %s",
        name,
        response.status_code,
        response.text or "(empty response)",
    )
    return DeploymentResult(
        target=target,
        ok=False,
        status_code=response.status_code,
        error=response.text or None,
    )
