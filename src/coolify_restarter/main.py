"""Coolify Apps Restarter entry point - scheduler and CLI."""

import argparse
import asyncio
import logging
import sys

from coolify_restarter.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _load_settings_or_exit():
    """Load settings; on ConfigError report to stderr and exit 1."""
    from coolify_restarter.config import ConfigError, load_settings

    try:
        return load_settings()
    except ConfigError as e:
        print(f"Failed to start Coolify Apps Restarter: {e}", file=sys.stderr)
        sys.exit(1)


async def _serve(settings) -> None:
    from coolify_restarter.scheduler import start_scheduler

    scheduler = await start_scheduler(settings)
    try:
        # Idle until killed; the scheduler wakes up on each tick
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)


def run_scheduler(settings) -> None:
    """Run the scheduler until the process is killed. Ctrl+C to stop."""
    try:
        asyncio.run(_serve(settings))
    except KeyboardInterrupt:
        logger.info("Scheduler stopped.")


def run_once(settings) -> int:
    """Run a single restart-all batch. Returns 1 if any deployment failed."""
    from coolify_restarter.deploy import restart_all_apps

    summary = asyncio.run(restart_all_apps(settings))
    return 1 if summary.failed else 0


def check_config(settings) -> int:
    """Print the redacted configuration."""
    for key, value in settings.summary().items():
        print(f"{key}: {value}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Coolify Apps Restarter: periodically trigger Coolify deployments"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # schedule - run scheduler (default)
    subparsers.add_parser("schedule", help="Run scheduler (restart all apps on CRON_SCHEDULE)")

    # run-once - single batch, then exit
    subparsers.add_parser("run-once", help="Trigger all deployments once and exit")

    # check-config - validate environment
    subparsers.add_parser("check-config", help="Validate configuration and print a redacted summary")

    args = parser.parse_args(argv)

    settings = _load_settings_or_exit()
    configure_logging(debug=settings.debug)

    if args.command == "schedule" or args.command is None:
        logger.info("Running scheduler (default command)")
        run_scheduler(settings)
    elif args.command == "run-once":
        sys.exit(run_once(settings))
    elif args.command == "check-config":
        sys.exit(check_config(settings))
    else:
        logger.debug("Unknown command, showing help")
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
