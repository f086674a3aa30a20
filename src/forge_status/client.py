"""HTTP client for the Forge API."""

from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from forge_status.config import Settings
from forge_status.exceptions import TransportError
from forge_status.logging_config import get_logger
from forge_status.models import Organization, ProjectInfo

logger = get_logger(__name__)


class EndpointKind(str, Enum):
    """Status endpoints the pipeline reads from."""

    DEPLOYMENT = "deployment"
    HEALTH = "health"


class ForgeClient:
    """Synchronous client for the Forge API.

    ``fetch`` returns raw response bodies so callers can validate them;
    the identity helpers decode the small project/organization documents.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "ForgeClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str) -> httpx.Response:
        try:
            response = self.client.request(method, path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "forge_request_failed",
                method=method,
                path=path,
                status_code=e.response.status_code,
            )
            raise TransportError(
                f"{method} {e.request.url} failed with status {e.response.status_code}",
                url=str(e.request.url),
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("forge_request_failed", method=method, path=path, error=str(e))
            raise TransportError(f"{method} {path} failed: {e}", url=path) from e
        logger.debug("forge_request", method=method, path=path, status_code=response.status_code)
        return response

    def _get_data(self, path: str, model: type[BaseModel]) -> Any:
        response = self._request("GET", path)
        try:
            data = response.json().get("data")
            return model.model_validate(data)
        except (ValueError, AttributeError) as e:
            # ValidationError is a ValueError
            detail = e.errors()[0]["msg"] if isinstance(e, ValidationError) else str(e)
            raise TransportError(f"Unexpected response from GET {path}: {detail}", url=path) from e

    def fetch(self, kind: EndpointKind, project_id: str) -> bytes:
        """Fetch the raw status document of the given kind for a project."""
        return self._request("GET", f"/api/{EndpointKind(kind).value}/{project_id}").content

    def get_organization(self, organization_id: str) -> Organization:
        return self._get_data(f"/api/organization/{organization_id}", Organization)

    def get_project(self, organization_id: str, project_id: str) -> ProjectInfo:
        return self._get_data(
            f"/api/organization/{organization_id}/project/{project_id}", ProjectInfo
        )

    def deploy(self, organization_id: str, project_id: str) -> None:
        """Request a deployment of the project."""
        self._request("POST", f"/api/organization/{organization_id}/project/{project_id}/deploy")

    def destroy(self, organization_id: str, project_id: str) -> None:
        """Request the project's deployment to be torn down."""
        self._request("POST", f"/api/organization/{organization_id}/project/{project_id}/destroy")


def get_forge_client(settings: Settings, token: str | None = None) -> ForgeClient:
    return ForgeClient(settings.forge_url, token=token, timeout=settings.request_timeout)
