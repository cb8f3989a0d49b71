"""Scheduler runner - restart-all batch on a cron schedule, optionally once at startup.

The batch is awaited before the recurring job is registered, so a deploy-on-start
run always precedes the first tick.
"""

import logging
import sys
from functools import partial

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from coolify_restarter.config import Settings, cron_trigger
from coolify_restarter.deploy import restart_all_apps
from coolify_restarter.scheduler.jobs import (
    RESTART_JOB_ID,
    BatchRunner,
    run_restart_job,
    set_scheduler,
)

logger = logging.getLogger(__name__)


def _log_startup(settings: Settings) -> None:
    logger.info("Scheduler starting with cron pattern: %s", settings.cron_schedule)
    if settings.webhook_urls:
        logger.info("Monitoring %d webhook URLs", len(settings.webhook_urls))
    if settings.api_enabled:
        logger.info(
            "Monitoring %d apps via Coolify API: %s",
            len(settings.coolify_app_uuids),
            settings.coolify_api_url,
        )
    logger.debug("Configuration: %s", settings.summary())
    if settings.webhook_urls:
        logger.debug("Webhook URLs: %s", list(settings.webhook_urls))
    if settings.coolify_app_uuids:
        logger.debug("App UUIDs: %s", list(settings.coolify_app_uuids))


def create_scheduler(settings: Settings, batch: BatchRunner) -> AsyncIOScheduler:
    """Create the scheduler with a single cron job running the batch."""
    scheduler = AsyncIOScheduler()
    # No overlap suppression: a slow batch never delays or skips the next tick
    scheduler.add_job(
        partial(run_restart_job, batch),
        trigger=cron_trigger(settings.cron_schedule),
        id=RESTART_JOB_ID,
        max_instances=sys.maxsize,
        replace_existing=True,
    )
    set_scheduler(scheduler)
    return scheduler


async def start_scheduler(settings: Settings, batch: BatchRunner | None = None) -> AsyncIOScheduler:
    """Start the scheduler on the running event loop. Runs deploy-on-start first."""
    if batch is None:
        batch = partial(restart_all_apps, settings)
    _log_startup(settings)
    if settings.deploy_on_start:
        logger.info("Deploy on start enabled - triggering initial deployment")
        await batch()
    scheduler = create_scheduler(settings, batch)
    scheduler.start()
    logger.info("Coolify Apps Restarter is running")
    return scheduler
