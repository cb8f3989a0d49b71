"""Restart all configured apps: fan out every deployment trigger and wait for all of them."""

import asyncio
import logging
from dataclasses import dataclass

import httpx

from coolify_restarter.config import Settings
from coolify_restarter.deploy.targets import ApiAppTarget, WebhookTarget, build_targets
from coolify_restarter.deploy.trigger import DeploymentResult, trigger_deployment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchSummary:
    """Per-target results of one batch, in target order."""

    results: tuple[DeploymentResult, ...] = ()

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded


async def restart_all_apps(
    settings: Settings,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> BatchSummary:
    """Trigger every configured deployment concurrently.

    One target failing never cancels or hides the others: each result is
    collected individually.
    """
    targets = build_targets(settings)
    if not targets:
        logger.warning(
            "No deployment methods configured. Set either WEBHOOK_URLS or both COOLIFY_API_URL and COOLIFY_APP_UUIDS."
        )
        return BatchSummary()

    webhook_count = sum(1 for t in targets if isinstance(t, WebhookTarget))
    api_count = sum(1 for t in targets if isinstance(t, ApiAppTarget))
    force_text = " with force rebuild" if settings.force else ""
    logger.info("Starting deployment restart for %d apps%s", len(targets), force_text)
    if webhook_count:
        logger.info("Triggering %d webhook-based deployments", webhook_count)
    if api_count:
        logger.info("Triggering %d API-based deployments", api_count)

    client = http_client or httpx.AsyncClient()
    owns_client = http_client is None
    try:
        outcomes = await asyncio.gather(
            *(trigger_deployment(client, target, settings) for target in targets),
            return_exceptions=True,
        )
    finally:
        if owns_client:
            await client.aclose()

    results: list[DeploymentResult] = []
    for target, outcome in zip(targets, outcomes):
        if isinstance(outcome, BaseException):
            logger.error(
                "Unexpected error triggering deployment | %s | %s: %s",
                target.display_name,
                type(outcome).__name__,
                outcome,
            )
            outcome = DeploymentResult(target=target, ok=False, error=str(outcome) or type(outcome).__name__)
        results.append(outcome)

    summary = BatchSummary(results=tuple(results))
    logger.info(
        "All deployments have been triggered | succeeded: %d | failed: %d",
        summary.succeeded,
        summary.failed,
    )
    return summary
