"""Deployment targets, single-target trigger and the restart-all batch."""

from coolify_restarter.deploy.batch import BatchSummary, restart_all_apps
from coolify_restarter.deploy.targets import (
    ApiAppTarget,
    DeploymentTarget,
    WebhookTarget,
    add_force_param,
    build_targets,
)
from coolify_restarter.deploy.trigger import DeploymentResult, trigger_deployment

__all__ = [
    "ApiAppTarget",
    "BatchSummary",
    "DeploymentResult",
    "DeploymentTarget",
    "WebhookTarget",
    "add_force_param",
    "build_targets",
    "restart_all_apps",
    "trigger_deployment",
]
