"""Strict decoders for the deployment status and health documents.

Both documents come from the Forge API as ``{"data": ...}`` envelopes. The
decoders parse the raw body, validate the payload with the pydantic models
and translate the first validation failure into a ``ShapeError`` that names
the offending field.
"""

import json
from typing import Any

from pydantic import BaseModel, ValidationError

from forge_status.exceptions import ConsistencyError, ParseError, ShapeError
from forge_status.logging_config import get_logger
from forge_status.models import DEPLOYMENT_KIND, DeploymentStatus, InstanceHealth

logger = get_logger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def _parse_envelope(raw: bytes | str, document: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise ParseError(f"{document} response is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ParseError(f"{document} response is not a JSON object")
    return payload


def _shape_error(exc: ValidationError, instance: int | None = None) -> ShapeError:
    """Build a ShapeError from the first error pydantic reported."""
    error = exc.errors()[0]
    loc = [str(part) for part in error["loc"]]
    service = loc[0] if len(loc) > 1 else None
    field = loc[-1] if loc else None
    detail = error["msg"].removeprefix(_VALUE_ERROR_PREFIX)
    return ShapeError(detail, field=field, instance=instance, service=service)


def _validate(model: type[BaseModel], data: dict[str, Any], instance: int | None = None):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise _shape_error(e, instance=instance) from e


def decode_deployment_status(
    raw: bytes | str, expected_project_id: str
) -> DeploymentStatus | None:
    """Decode a deployment status response.

    Args:
        raw: Response body of ``GET /api/deployment/{project_id}``.
        expected_project_id: Project the status was requested for.

    Returns:
        The decoded status, or None when the project has never been deployed
        (``data`` is null or missing).

    Raises:
        ParseError: The body is not a JSON object.
        ShapeError: ``data`` or one of its fields has the wrong type.
        ConsistencyError: The status belongs to another project or is not a
            deploy operation.
    """
    payload = _parse_envelope(raw, "deployment status")

    data = payload.get("data")
    if data is None:
        logger.debug("deployment_status_absent", project_id=expected_project_id)
        return None
    if not isinstance(data, dict):
        raise ShapeError(f"expected an object, got {type(data).__name__}", field="data")

    status = _validate(DeploymentStatus, data)

    if status.project_id != expected_project_id:
        raise ConsistencyError(
            f"deployment status belongs to project {status.project_id!r}, "
            f"expected {expected_project_id!r}",
            field="project_id",
            value=status.project_id,
        )
    if status.kind != DEPLOYMENT_KIND:
        raise ConsistencyError(
            f"unexpected deployment type {status.kind!r}",
            field="type",
            value=status.kind,
        )

    logger.debug(
        "deployment_status_decoded",
        project_id=status.project_id,
        build_number=status.build_number,
        build_state=status.build_state,
    )
    return status


def decode_health(raw: bytes | str) -> list[InstanceHealth]:
    """Decode a health response into instances, preserving their order.

    Raises:
        ParseError: The body is not a JSON object.
        ShapeError: ``data`` is not an array, or an instance is malformed.
            Decoding stops at the first malformed instance.
    """
    payload = _parse_envelope(raw, "health")

    data = payload.get("data")
    if data is None:
        raise ShapeError("health data is missing", field="data")
    if not isinstance(data, list):
        raise ShapeError(f"expected an array, got {type(data).__name__}", field="data")

    instances = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ShapeError(
                f"expected an object, got {type(item).__name__}",
                field=f"instance[{index}]",
                instance=index,
            )
        instances.append(_validate(InstanceHealth, item, instance=index))

    logger.debug("health_decoded", instance_count=len(instances))
    return instances
