"""Tag-based deployment scripts and deployment records"""

from .framework import (
    DeployContext,
    DeployResult,
    Deployments,
    deploy_script,
    registered_scripts,
    run_deploy_scripts,
)

__all__ = [
    "DeployContext",
    "DeployResult",
    "Deployments",
    "deploy_script",
    "registered_scripts",
    "run_deploy_scripts",
]
