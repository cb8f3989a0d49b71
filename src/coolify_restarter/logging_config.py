"""Centralized logging configuration for Coolify Apps Restarter."""

import logging
import sys

# Third-party loggers kept at WARNING; httpx would otherwise log every deploy request
QUIET_LOGGERS = ("httpx", "httpcore", "apscheduler")


def configure_logging(debug: bool = False) -> None:
    """Configure app-wide logging. Call once at startup, after settings load.

    DEBUG=true lowers the restarter's own loggers to DEBUG (request URLs, redacted
    headers, response bodies) and lets APScheduler report job runs at INFO.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if debug:
        logging.getLogger("apscheduler").setLevel(logging.INFO)
