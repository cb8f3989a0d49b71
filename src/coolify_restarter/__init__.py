"""Coolify Apps Restarter: scheduled redeployment of Coolify applications."""

__version__ = "1.0.0"
