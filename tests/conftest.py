"""Shared fixtures: isolated environment and settings factory."""

import pytest

from coolify_restarter.config import Settings

ENV_VARS = (
    "COOLIFY_TOKEN",
    "WEBHOOK_URLS",
    "COOLIFY_API_URL",
    "COOLIFY_APP_UUIDS",
    "CRON_SCHEDULE",
    "DEPLOY_ON_START",
    "FORCE",
    "DEBUG",
    "ENV_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Start every test without restarter variables or a dotenv file in the working directory."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def make_settings():
    """Build validated settings directly, without reading a dotenv file."""

    def _make(**overrides) -> Settings:
        values = {"coolify_token": "test-token-0123456789"}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make
