#!/usr/bin/env python3
"""Start Coolify Apps Restarter with environment file selection.

Default: uses .env (development) through poetry.
Use ENV_FILE=.env.production for production, --direct where poetry is not installed
(e.g. inside the container image).

Usage:
    python scripts/start.py                            # scheduler, .env
    python scripts/start.py --env .env.production      # scheduler, prod env
    python scripts/start.py run-once                   # single batch
    python scripts/start.py --direct check-config      # no poetry
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

COMMANDS = ("schedule", "run-once", "check-config")


def main() -> int:
    parser = argparse.ArgumentParser(description="Start Coolify Apps Restarter")
    parser.add_argument(
        "--env",
        default=os.getenv("ENV_FILE", ".env"),
        help="Environment file path (default: .env)",
    )
    parser.add_argument(
        "--direct",
        action="store_true",
        help="Run with the current interpreter instead of poetry",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="schedule",
        choices=COMMANDS,
        help="coolify-restarter subcommand (default: schedule)",
    )
    args = parser.parse_args()

    project_root = Path(__file__).resolve().parent.parent
    env_path = Path(args.env)
    if not env_path.is_absolute():
        env_path = project_root / env_path
    if not env_path.exists():
        print(f"Note: {env_path} not found, using process environment only", file=sys.stderr)
    os.environ["ENV_FILE"] = str(env_path)

    if args.direct:
        cmd = [sys.executable, "-m", "coolify_restarter", args.command]
    else:
        cmd = ["poetry", "run", "coolify-restarter", args.command]
    return subprocess.run(cmd, cwd=project_root).returncode


if __name__ == "__main__":
    sys.exit(main())
