"""Pydantic models for Forge API documents."""

from .deployment import BUILD_STATE_FINISHED, DEPLOYMENT_KIND, DeploymentStatus
from .health import InstanceHealth, ServiceCheck
from .project import Organization, ProjectInfo

__all__ = [
    "BUILD_STATE_FINISHED",
    "DEPLOYMENT_KIND",
    "DeploymentStatus",
    "InstanceHealth",
    "Organization",
    "ProjectInfo",
    "ServiceCheck",
]
