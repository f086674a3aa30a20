"""Deployment status document model."""

from pydantic import BaseModel, ConfigDict, Field

from forge_status.models.fields import JsonInt, StrictStr, Timestamp

BUILD_STATE_FINISHED = "finished"
DEPLOYMENT_KIND = "deploy"


class DeploymentStatus(BaseModel):
    """Latest deploy operation reported for a project.

    Field order is the order fields are validated in, so the first reported
    error is always the earliest bad field.
    """

    model_config = ConfigDict(frozen=True)

    project_id: StrictStr
    kind: StrictStr = Field(..., alias="type")
    executor_id: StrictStr
    execution_time: Timestamp
    build_number: JsonInt
    build_time: Timestamp
    build_state: StrictStr
