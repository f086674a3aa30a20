"""Identity models returned by the Forge API."""

from pydantic import BaseModel, ConfigDict, Field


class Organization(BaseModel):
    """Organization the selected project belongs to."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    slug: str


class ProjectInfo(BaseModel):
    """Project identity shown in report headers."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    slug: str
    repo_url: str = Field(default="", description="Git repository the project deploys from")
