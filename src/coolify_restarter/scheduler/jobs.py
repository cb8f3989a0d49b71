"""Scheduled job - one restart-all batch per cron tick.

Exceptions escaping a batch are logged here so the scheduler keeps running.
"""

import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

RESTART_JOB_ID = "restart_all_apps"

BatchRunner = Callable[[], Awaitable[object]]

_scheduler = None


def set_scheduler(scheduler) -> None:
    """Store scheduler ref for logging next run."""
    global _scheduler
    _scheduler = scheduler


def _log_next_run(job_id: str) -> None:
    if _scheduler:
        job = _scheduler.get_job(job_id)
        if job and job.next_run_time:
            logger.info("Next restart: %s", job.next_run_time.strftime("%Y-%m-%d %H:%M"))


async def run_restart_job(batch: BatchRunner) -> None:
    """Run one scheduled batch. Overlapping runs are allowed."""
    logger.info("%s - Executing scheduled restart", datetime.now(timezone.utc).isoformat())
    try:
        await batch()
    except Exception as e:
        logger.exception("Scheduled restart failed: %s", e)
    _log_next_run(RESTART_JOB_ID)
