"""Deploy stage."""

from catipedia.deploy.runner import DeploymentManager, DeployReport
from catipedia.deploy.targets import DEFAULT_ENVIRONMENT, DeployEnvironment, DeployTarget

__all__ = [
    "DEFAULT_ENVIRONMENT",
    "DeployEnvironment",
    "DeployReport",
    "DeployTarget",
    "DeploymentManager",
]
