from forge_status.models import BUILD_STATE_FINISHED, DeploymentStatus


def should_fetch_health(status: DeploymentStatus) -> bool:
    """Only a finished build has instances worth checking.

    Every other build state (queued, building, failed, ...) is reported as-is.
    """
    return status.build_state == BUILD_STATE_FINISHED
