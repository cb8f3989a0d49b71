"""Scheduler - restart-all batch on CRON_SCHEDULE (default every 6 hours).

Job (runner.create_scheduler): restart_all_apps, one batch per tick, overlapping
ticks allowed. With DEPLOY_ON_START the batch also runs once before scheduling.
"""

from coolify_restarter.scheduler.runner import create_scheduler, start_scheduler

__all__ = ["create_scheduler", "start_scheduler"]
