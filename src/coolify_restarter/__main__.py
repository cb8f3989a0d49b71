"""Allow ``python -m coolify_restarter``."""

from coolify_restarter.main import main

main()
