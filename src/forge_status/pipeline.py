"""Deployment status pipeline.

fetch deployment status -> decode -> (finished build only) fetch health ->
decode -> render. Every step runs in order and the first error aborts the
run; errors from ``fetch`` propagate unchanged.
"""

from collections.abc import Callable
from dataclasses import dataclass

from forge_status.client import EndpointKind
from forge_status.decoders import decode_deployment_status, decode_health
from forge_status.logging_config import get_logger
from forge_status.models import DeploymentStatus, InstanceHealth, ProjectInfo
from forge_status.report import render_report
from forge_status.resolver import should_fetch_health

logger = get_logger(__name__)

Fetcher = Callable[[EndpointKind, str], bytes]


@dataclass(frozen=True)
class StatusSnapshot:
    """Decoded documents of one status run.

    ``instances`` is None whenever health was not fetched.
    """

    project_id: str
    deployment: DeploymentStatus | None
    instances: list[InstanceHealth] | None = None

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "deployment": (
                self.deployment.model_dump(mode="json", by_alias=True) if self.deployment else None
            ),
            "health": (
                [item.model_dump(mode="json") for item in self.instances]
                if self.instances is not None
                else None
            ),
        }


def collect_status(fetch: Fetcher, project_id: str) -> StatusSnapshot:
    """Fetch and decode the deployment status and, if finished, its health."""
    raw_status = fetch(EndpointKind.DEPLOYMENT, project_id)
    deployment = decode_deployment_status(raw_status, project_id)
    if deployment is None:
        logger.info("project_not_deployed", project_id=project_id)
        return StatusSnapshot(project_id=project_id, deployment=None)

    if not should_fetch_health(deployment):
        logger.info(
            "health_fetch_skipped",
            project_id=project_id,
            build_state=deployment.build_state,
        )
        return StatusSnapshot(project_id=project_id, deployment=deployment)

    raw_health = fetch(EndpointKind.HEALTH, project_id)
    instances = decode_health(raw_health)
    logger.info("health_collected", project_id=project_id, instance_count=len(instances))
    return StatusSnapshot(project_id=project_id, deployment=deployment, instances=instances)


def run_status(fetch: Fetcher, project: ProjectInfo) -> str:
    """Run the full pipeline for ``project`` and return the report text."""
    snapshot = collect_status(fetch, project.id)
    return render_report(project, snapshot.deployment, snapshot.instances)
